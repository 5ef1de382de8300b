"""
rsync 参数构建：内置排除规则、默认值解析、源/目标路径
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from belterlink.core.args import DIRECTIONS
from belterlink.core.config import Category, ConfigData
from belterlink.core.errors import InvalidDirection
from belterlink.utils.ssh import remote_spec, ssh_command

# 归档 + 硬链接 + 保护参数 + 不覆盖更新的目标文件
RSYNC_BASE_ARGS: List[str] = ["-aH", "--protect-args", "--update"]

# 内置排除规则（macOS / Obsidian / iCloud），始终在分类自定义规则之前
BUILTIN_EXCLUDES: List[str] = [
    ".DS_Store",
    "._*",
    ".Trash*",
    ".obsidian/cache",
    ".git",
    "*.icloud",
]

FALLBACK_DELETE = False
FALLBACK_CHECKSUM = False
FALLBACK_VERBOSE = True


@dataclass(frozen=True)
class RunOptions:
    """单次调用的意图，由 CLI 选项构造"""
    direction: str
    dry_run: bool = False
    delete: bool = False
    checksum: bool = False
    no_verbose: bool = False


def resolve_bool(cli: bool, default: Optional[bool], fallback: bool) -> bool:
    """
    CLI 显式 true 优先；否则使用配置默认值（若已设置）；否则使用内置回退。
    注意 CLI 只能强制开启，不能强制关闭。
    """
    if cli:
        return True
    if default is not None:
        return default
    return fallback


def ensure_trailing_slash(path: str) -> str:
    return path.rstrip("/") + "/"


def build_rsync_args(config: ConfigData, category: Category, opts: RunOptions) -> List[str]:
    """
    构建 rsync 参数列表（不含 "rsync" 本身）

    Raises:
        InvalidDirection: 方向不是 push/pull
    """
    if opts.direction not in DIRECTIONS:
        raise InvalidDirection(opts.direction)

    defaults = config.defaults
    use_delete = resolve_bool(opts.delete, defaults.delete, FALLBACK_DELETE)
    use_checksum = resolve_bool(opts.checksum, defaults.checksum, FALLBACK_CHECKSUM)
    use_verbose = resolve_bool(not opts.no_verbose, defaults.verbose, FALLBACK_VERBOSE)

    args = list(RSYNC_BASE_ARGS)
    if use_verbose:
        args.append("-v")
    if opts.dry_run:
        args.append("--dry-run")
    if use_checksum:
        args.append("--checksum")
    if use_delete:
        args.extend(["--delete", "--delete-excluded"])

    for pattern in BUILTIN_EXCLUDES + list(category.exclude):
        args.extend(["--exclude", pattern])

    args.extend(["-e", ssh_command(config.ssh.key, config.ssh.port)])

    local = ensure_trailing_slash(category.local)
    remote = remote_spec(config.ssh.user, config.ssh.host, category.remote)
    if opts.direction == "push":
        args.extend([local, remote])
    else:
        args.extend([remote, local])
    return args
