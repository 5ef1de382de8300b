from __future__ import annotations

from typing import Sequence, Tuple

from belterlink.core.errors import (
    InvalidDirection,
    MissingArguments,
    UnexpectedExtraArguments,
    UnexpectedFlagAfterPositionals,
)

DIRECTIONS = ("push", "pull")


def parse_args(args: Sequence[str]) -> Tuple[str, str]:
    """
    解析位置参数 <CategoryName> <push|pull>

    Returns:
        (分类名原样, 小写方向)
    """
    if len(args) < 2:
        raise MissingArguments()
    if len(args) > 2:
        extra = list(args[2:])
        # 参数后面跟着 flag 多半是用户把选项放错了位置，单独报告
        for arg in extra:
            if arg.startswith("-"):
                raise UnexpectedFlagAfterPositionals(arg)
        raise UnexpectedExtraArguments(extra)
    direction = args[1].lower()
    if direction not in DIRECTIONS:
        raise InvalidDirection(args[1])
    return args[0], direction
