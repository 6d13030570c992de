"""参数组约束: 互斥 / 至少一个."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from request_params.core.exceptions import SchemaDefinitionError


class GroupMode(Enum):
    """参数组的判定模式."""

    EXACTLY_ONE = "exactly_one"
    AT_LEAST_ONE = "at_least_one"


@dataclass(frozen=True, slots=True)
class ConstraintGroup:
    """一组候选 key 及其判定模式,独立于单个字段声明."""

    keys: tuple[str, ...]
    mode: GroupMode = GroupMode.EXACTLY_ONE

    def __post_init__(self) -> None:
        keys = tuple(str(key) for key in self.keys)
        if not keys:
            raise SchemaDefinitionError("constraint group requires at least one key")
        object.__setattr__(self, "keys", keys)
        object.__setattr__(self, "mode", GroupMode(self.mode))

    @classmethod
    def exactly_one(cls, *keys: str) -> ConstraintGroup:
        return cls(keys, GroupMode.EXACTLY_ONE)

    @classmethod
    def at_least_one(cls, *keys: str) -> ConstraintGroup:
        return cls(keys, GroupMode.AT_LEAST_ONE)

    @property
    def label(self) -> str:
        return ", ".join(self.keys)

    @property
    def options(self) -> dict[str, object]:
        return {"keys": list(self.keys), "mode": self.mode.value}


def any_of_group(keys: Iterable[str], mode: GroupMode = GroupMode.EXACTLY_ONE) -> ConstraintGroup:
    """构造参数组的便捷函数."""
    return ConstraintGroup(tuple(keys), mode)


__all__ = ["ConstraintGroup", "GroupMode", "any_of_group"]
