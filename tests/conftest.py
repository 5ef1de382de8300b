"""Shared fixtures."""

import pytest

from belterlink.core.config import Category, ConfigData, Defaults, SSHEndpoint

CONFIG_YAML = """\
ssh:
  user: alice
  host: example.com
  port: 22

defaults:
  checksum: true

categories:
  Notes:
    local: /home/u/Notes
    remote: /remote/Notes
    exclude:
      - "*.tmp"
"""


@pytest.fixture
def notes() -> Category:
    return Category(name="Notes", local="/home/u/Notes", remote="/remote/Notes", exclude=["*.tmp"])


@pytest.fixture
def config(notes: Category) -> ConfigData:
    return ConfigData(
        ssh=SSHEndpoint(user="alice", host="example.com", port=22),
        categories={"Notes": notes},
        defaults=Defaults(),
    )


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path
