"""
Core services for BelterLink.
"""
from belterlink.core.args import parse_args
from belterlink.core.config import ConfigService, ConfigData, SSHEndpoint, Category, Defaults
from belterlink.core.rsync_config import BUILTIN_EXCLUDES, RunOptions, build_rsync_args, resolve_bool
from belterlink.core.sync import SyncService

__all__ = [
    "parse_args",
    "ConfigService",
    "ConfigData",
    "SSHEndpoint",
    "Category",
    "Defaults",
    "BUILTIN_EXCLUDES",
    "RunOptions",
    "build_rsync_args",
    "resolve_bool",
    "SyncService",
]
