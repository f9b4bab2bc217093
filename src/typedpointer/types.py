from __future__ import annotations

import array
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from enum import Enum
from typing import Any, Final, Literal

Token = str | int


class _MissingType(Enum):
    """Sentinel type for slots that hold no value yet.

    Distinct from ``None``, which is an explicit JSON ``null``.
    """

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> Literal[False]:
        return False


MISSING: Final = _MissingType.MISSING


class JsonKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"
    NULL = "null"
    ANY = "any"

    @classmethod
    def from_tag(cls, tag: str) -> JsonKind | None:
        """Look up a ``::tag`` suffix. ``any`` is not a valid tag."""
        return _TAGS.get(tag)


_TAGS: dict[str, JsonKind] = {
    kind.value: kind for kind in JsonKind if kind is not JsonKind.ANY
}


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Sequence, array.array))


def is_mutable_object(value: Any) -> bool:
    return isinstance(value, MutableMapping)


def is_mutable_array(value: Any) -> bool:
    if isinstance(value, bytearray):
        return False
    return isinstance(value, (MutableSequence, array.array))


def preview(value: Any, limit: int = 60) -> str:
    """Short ``repr`` of *value* for error messages."""
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
