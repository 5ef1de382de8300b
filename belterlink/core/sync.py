from __future__ import annotations

import subprocess
from typing import Callable, List, Optional

import click

from belterlink.core.config import Category, ConfigData
from belterlink.core.errors import CategoryNotFound, MissingEndpointCredentials, SubprocessFailure
from belterlink.core.rsync_config import RunOptions, build_rsync_args
from belterlink.utils.logger import get_logger

log = get_logger(__name__)

RSYNC_BIN = "rsync"

Runner = Callable[[List[str]], int]


def _run_inherited(cmd: List[str]) -> int:
    # 不捕获输出，rsync 的 stdout/stderr 直接连到终端
    return subprocess.run(cmd).returncode


class SyncService:
    """
    单向同步：按分类名查找配置，构建 rsync 参数并执行。
    push = 本地 → 远程，pull = 远程 → 本地。
    """

    def __init__(self, config: ConfigData, runner: Optional[Runner] = None):
        self.config = config
        self.runner = runner or _run_inherited

    def category(self, name: str) -> Category:
        cat = self.config.category(name)
        if cat is None:
            raise CategoryNotFound(name)
        return cat

    def build(self, category_name: str, opts: RunOptions) -> List[str]:
        cat = self.category(category_name)
        issues = self.config.ssh.validate()
        if issues:
            log.debug("ssh 配置不完整: %s", issues)
            raise MissingEndpointCredentials()
        args = build_rsync_args(self.config, cat, opts)
        log.debug("分类 %s (%s): %s", category_name, opts.direction, opts)
        return args

    def run(self, category_name: str, opts: RunOptions) -> List[str]:
        """
        执行同步，返回实际使用的 rsync 参数

        Raises:
            SubprocessFailure: rsync 不存在或返回非 0
        """
        args = self.build(category_name, opts)
        cmd = [RSYNC_BIN] + args
        click.echo("Running: " + " ".join(cmd))
        try:
            code = self.runner(cmd)
        except FileNotFoundError as e:
            raise SubprocessFailure(f"rsync failed: {RSYNC_BIN} not found on PATH") from e
        except OSError as e:
            raise SubprocessFailure(f"rsync failed: {e}") from e
        if code != 0:
            raise SubprocessFailure(f"rsync failed: exit status {code}", returncode=code)
        log.info("同步完成: %s %s", category_name, opts.direction)
        return args
