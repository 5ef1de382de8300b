"""Tests for the command line entry point."""

import pytest
from click.testing import CliRunner

from belterlink import __version__
from belterlink.cli import cli, main
from belterlink.core import sync


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def fake_run(cmd):
        recorded.append(cmd)
        return 0

    monkeypatch.setattr(sync, "_run_inherited", fake_run)
    return recorded


def run_main(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


class TestCli:
    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"belterlink {__version__}"

    def test_help(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "<CategoryName> <push|pull>" in result.output
        assert "--no-verbose" in result.output
        assert "categories:" in result.output
        assert ".icloud placeholders" in result.output

    def test_no_arguments_shows_help(self, calls) -> None:
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert calls == []

    def test_push(self, config_file, calls) -> None:
        result = CliRunner().invoke(cli, ["--config", str(config_file), "--delete", "Notes", "PUSH"])

        assert result.exit_code == 0, result.output
        assert "Running: rsync" in result.output
        cmd = calls[0]
        assert cmd[0] == "rsync"
        assert "--delete" in cmd
        # checksum comes from the config defaults
        assert "--checksum" in cmd
        assert cmd[-2:] == ["/home/u/Notes/", "alice@example.com:/remote/Notes/"]

    def test_pull_dry_run(self, config_file, calls) -> None:
        result = CliRunner().invoke(cli, ["--config", str(config_file), "--dry-run", "Notes", "pull"])

        assert result.exit_code == 0, result.output
        cmd = calls[0]
        assert "--dry-run" in cmd
        assert "--delete" not in cmd
        assert cmd[-2:] == ["alice@example.com:/remote/Notes/", "/home/u/Notes/"]

    def test_init_config(self, tmp_path, calls) -> None:
        path = tmp_path / "cfg" / "config.yaml"
        result = CliRunner().invoke(cli, ["--config", str(path), "--init-config"])

        assert result.exit_code == 0
        assert path.exists()
        assert calls == []


class TestMainErrors:
    def test_flag_after_positionals(self, config_file, calls, capsys) -> None:
        code = run_main(["--config", str(config_file), "Notes", "push", "--delete"])

        assert code == 1
        err = capsys.readouterr().err
        assert err.startswith("error: unexpected flag '--delete'")
        assert len(err.strip().splitlines()) == 1
        assert calls == []

    def test_missing_direction(self, config_file, calls, capsys) -> None:
        assert run_main(["--config", str(config_file), "Notes"]) == 1
        assert capsys.readouterr().err.startswith("error: missing required arguments")

    def test_invalid_direction(self, config_file, calls, capsys) -> None:
        assert run_main(["--config", str(config_file), "Notes", "sideways"]) == 1
        assert "must be 'push' or 'pull'" in capsys.readouterr().err

    def test_unknown_category(self, config_file, calls, capsys) -> None:
        assert run_main(["--config", str(config_file), "Music", "push"]) == 1
        assert capsys.readouterr().err.strip() == "error: category 'Music' not found in config"

    def test_missing_config(self, tmp_path, calls, capsys) -> None:
        assert run_main(["--config", str(tmp_path / "nope.yaml"), "Notes", "push"]) == 1
        assert capsys.readouterr().err.startswith("error: load config")

    def test_rsync_exit_status_propagated(self, config_file, monkeypatch, capsys) -> None:
        monkeypatch.setattr(sync, "_run_inherited", lambda cmd: 12)

        assert run_main(["--config", str(config_file), "Notes", "push"]) == 12
        assert "error: rsync failed: exit status 12" in capsys.readouterr().err

    def test_success_exits_zero(self, config_file, calls) -> None:
        assert run_main(["--config", str(config_file), "Notes", "push"]) == 0
        assert len(calls) == 1

    def test_runner_permission_error(self, config_file, monkeypatch, capsys) -> None:
        def denied(cmd):
            raise PermissionError("denied")

        monkeypatch.setattr(sync, "_run_inherited", denied)

        assert run_main(["--config", str(config_file), "Notes", "push"]) == 1
        assert capsys.readouterr().err.startswith("error: rsync failed: denied")

    def test_unexpected_exception_is_logged(self, config_file, monkeypatch, capsys) -> None:
        def boom(self, category_name, opts):
            raise RuntimeError("boom")

        monkeypatch.setattr(sync.SyncService, "run", boom)

        assert run_main(["--config", str(config_file), "Notes", "push"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("error: boom\n")
        assert "unexpected failure: boom" in err
