from __future__ import annotations


class BelterlinkError(Exception):
    """所有可预期错误的基类，CLI 会将其打印为单行 `error: ...`"""

    exit_code = 1


class UsageError(BelterlinkError):
    pass


class MissingArguments(UsageError):
    def __init__(self):
        super().__init__("missing required arguments: <CategoryName> <push|pull>")


class UnexpectedFlagAfterPositionals(UsageError):
    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(
            f"unexpected flag {flag!r} after positional args; "
            "flags must come before <CategoryName> <push|pull>"
        )


class UnexpectedExtraArguments(UsageError):
    def __init__(self, extra):
        self.extra = list(extra)
        super().__init__(f"unexpected extra arguments: {' '.join(self.extra)}")


class InvalidDirection(UsageError):
    def __init__(self, direction: str):
        self.direction = direction
        super().__init__(f"invalid direction {direction!r}: must be 'push' or 'pull'")


class ConfigError(BelterlinkError):
    pass


class ConfigLoadError(ConfigError):
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"load config {path}: {cause}")


class NoCategoriesConfigured(ConfigError):
    def __init__(self, path=None):
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"no categories defined{where}")


class CategoryNotFound(ConfigError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"category {name!r} not found in config")


class MissingEndpointCredentials(ConfigError):
    def __init__(self):
        super().__init__("ssh.user and ssh.host are required in config")


class SubprocessFailure(BelterlinkError):
    def __init__(self, message: str, returncode: int = 1):
        self.returncode = returncode
        # rsync 自身的退出码原样透传
        self.exit_code = returncode if returncode > 0 else 1
        super().__init__(message)
