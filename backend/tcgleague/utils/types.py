from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class EnumAutoStr(Enum):
    @staticmethod
    def _generate_next_value_(name: str, start: int, count: int, last_values: list[Any]) -> str:
        return name


def assert_some(result: T | None) -> T:
    assert result is not None
    return result
