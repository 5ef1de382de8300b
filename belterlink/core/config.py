from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, List, Any

import yaml

from belterlink.core.errors import ConfigLoadError, NoCategoriesConfigured
from belterlink.utils.logger import get_logger
from belterlink.utils.ssh import DEFAULT_SSH_PORT

log = get_logger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".belterlink"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"

EXAMPLE_CONFIG = """\
ssh:
  user: macuser
  host: mymac.local     # or a reserved LAN IP like 192.168.1.50
  port: 22
  key: /home/linuxuser/.ssh/id_ed25519   # optional

defaults:
  delete: false
  checksum: false
  verbose: true

categories:
  Piano:
    local:  /home/linuxuser/ObsidianVault/Piano
    remote: /Users/macuser/Library/Mobile Documents/com~apple~CloudDocs/ObsidianVault/Piano
    exclude:
      - "*.wav"
      - ".obsidian/workspace*"

  Notes:
    local:  /home/linuxuser/ObsidianVault/Notes
    remote: /Users/macuser/Library/Mobile Documents/com~apple~CloudDocs/ObsidianVault/Notes
    exclude:
      - ".obsidian/cache"
      - ".DS_Store"
"""


def _optional_bool(section: str, key: str, value: Any) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValueError(f"{section}.{key} must be true or false, got {value!r}")
    return value


@dataclass
class SSHEndpoint:
    user: str = ""
    host: str = ""
    port: int = DEFAULT_SSH_PORT
    key: Optional[str] = None

    def validate(self) -> List[str]:
        issues: List[str] = []
        if not self.user:
            issues.append("ssh.user is required")
        if not self.host:
            issues.append("ssh.host is required")
        return issues

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "user": self.user,
            "host": self.host,
            "port": self.port,
        }
        if self.key:
            data["key"] = self.key
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SSHEndpoint":
        port = data.get("port") or DEFAULT_SSH_PORT
        if isinstance(port, bool) or not isinstance(port, int):
            raise ValueError(f"ssh.port must be an integer, got {port!r}")
        return cls(
            user=str(data.get("user") or ""),
            host=str(data.get("host") or ""),
            port=port,
            key=str(data["key"]) if data.get("key") else None,
        )


@dataclass
class Category:
    name: str
    local: str
    remote: str
    exclude: List[str] = field(default_factory=list)

    def validate(self) -> List[str]:
        issues: List[str] = []
        # 空路径会被规范成 "/"，同步到根目录
        if not self.local.strip("/"):
            issues.append(f"categories.{self.name}.local must be a non-root path")
        if not self.remote.strip("/"):
            issues.append(f"categories.{self.name}.remote must be a non-root path")
        return issues

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "local": self.local,
            "remote": self.remote,
        }
        if self.exclude:
            data["exclude"] = list(self.exclude)
        return data

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "Category":
        if not isinstance(data, dict):
            raise ValueError(f"categories.{name} must be a mapping")
        exclude = data.get("exclude") or []
        if not isinstance(exclude, list):
            raise ValueError(f"categories.{name}.exclude must be a list")
        category = cls(
            name=name,
            local=str(data.get("local") or ""),
            remote=str(data.get("remote") or ""),
            exclude=[str(e) for e in exclude],
        )
        issues = category.validate()
        if issues:
            raise ValueError("; ".join(issues))
        return category


@dataclass
class Defaults:
    """
    配置文件中的默认开关。None 表示“未设置”，与显式 false 区分，
    以便 CLI > 配置 > 内置回退 三级优先级能正确生效。
    """
    delete: Optional[bool] = None
    checksum: Optional[bool] = None
    verbose: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        # 未设置的开关不写出，保持三态
        data = {"delete": self.delete, "checksum": self.checksum, "verbose": self.verbose}
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Defaults":
        return cls(
            delete=_optional_bool("defaults", "delete", data.get("delete")),
            checksum=_optional_bool("defaults", "checksum", data.get("checksum")),
            verbose=_optional_bool("defaults", "verbose", data.get("verbose")),
        )


@dataclass
class ConfigData:
    ssh: SSHEndpoint = field(default_factory=SSHEndpoint)
    categories: Dict[str, Category] = field(default_factory=dict)
    defaults: Defaults = field(default_factory=Defaults)

    def category(self, name: str) -> Optional[Category]:
        # 分类名区分大小写
        return self.categories.get(name)

    def validate(self) -> List[str]:
        issues: List[str] = []
        issues.extend(self.ssh.validate())
        if not self.categories:
            issues.append("at least one category is required")
        for cat in self.categories.values():
            issues.extend(cat.validate())
        return issues

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"ssh": self.ssh.to_dict()}
        defaults = self.defaults.to_dict()
        if defaults:
            data["defaults"] = defaults
        data["categories"] = {name: cat.to_dict() for name, cat in self.categories.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigData":
        ssh_raw = data.get("ssh") or {}
        defaults_raw = data.get("defaults") or {}
        categories_raw = data.get("categories") or {}
        for section, raw in (("ssh", ssh_raw), ("defaults", defaults_raw), ("categories", categories_raw)):
            if not isinstance(raw, dict):
                raise ValueError(f"{section} must be a mapping")
        return cls(
            ssh=SSHEndpoint.from_dict(ssh_raw),
            categories={str(name): Category.from_dict(str(name), cat) for name, cat in categories_raw.items()},
            defaults=Defaults.from_dict(defaults_raw),
        )

    def pretty(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)


class ConfigService:
    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path).expanduser()

    def write_example(self) -> bool:
        """写入示例配置；文件已存在时不覆盖，返回是否写入"""
        if self.config_path.exists():
            log.info("配置文件已存在，跳过: %s", self.config_path)
            return False
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(EXAMPLE_CONFIG, encoding="utf-8")
        log.info("示例配置已写入: %s", self.config_path)
        return True

    def load(self) -> ConfigData:
        log.debug("加载配置: %s", self.config_path)
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(self.config_path, e) from e
        if not isinstance(raw, dict):
            raise ConfigLoadError(self.config_path, "top level must be a mapping")
        try:
            config = ConfigData.from_dict(raw)
        except ValueError as e:
            raise ConfigLoadError(self.config_path, e) from e
        if not config.categories:
            raise NoCategoriesConfigured(self.config_path)
        return config

