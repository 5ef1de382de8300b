from __future__ import annotations

from typing import Optional

DEFAULT_SSH_PORT = 22


def shell_escape(value: str) -> str:
    """
    轻量转义：仅在包含空白且未被单引号包裹时加单引号。
    rsync 会自行拆分 -e 的值，且已启用 --protect-args，这里不做完整的 shell 转义。
    """
    if any(ch in value for ch in " \t") and not value.startswith("'") and not value.endswith("'"):
        return f"'{value}'"
    return value


def ssh_command(key: Optional[str] = None, port: Optional[int] = None) -> str:
    """构建传给 rsync `-e` 的远程 shell 命令字符串（整体作为一个参数）"""
    parts = ["ssh"]
    if key:
        parts.extend(["-i", shell_escape(key)])
    if port and port != DEFAULT_SSH_PORT:
        parts.extend(["-p", str(port)])
    return " ".join(parts)


def remote_spec(user: str, host: str, path: str) -> str:
    """user@host:path/，远程路径去掉所有尾部斜杠后再补一个"""
    return f"{user}@{host}:{path.rstrip('/')}/"
