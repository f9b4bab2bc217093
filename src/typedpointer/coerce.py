"""Value conversion for type-constrained pointers.

A pointer such as ``/price::number`` carries a :class:`~typedpointer.types.JsonKind`.
Before a write, the value is checked against that kind:

* ``MISSING`` is replaced by the kind's null value (``""``, ``0``, ``{}``...).
* Values that already have the right kind pass through untouched.
* Anything else is handed to a Pydantic ``TypeAdapter`` for the kind.  Scalar
  kinds use strict adapters, so ``"12"`` is never silently turned into ``12``;
  containers use lax adapters so tuples become lists and mappings become dicts.
"""

from __future__ import annotations

import array
import numbers
from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pydantic import ConfigDict, TypeAdapter, ValidationError

from .errors import TypeConstraintViolationError
from .types import MISSING, JsonKind

if TYPE_CHECKING:
    from .pointer import Pointer

_STRICT = ConfigDict(strict=True)


def null_value(kind: JsonKind) -> Any:
    """Return the value substituted when ``MISSING`` is written under *kind*."""
    if kind is JsonKind.STRING:
        return ""
    if kind is JsonKind.NUMBER:
        return 0
    if kind is JsonKind.OBJECT:
        return {}
    if kind is JsonKind.ARRAY:
        return []
    if kind is JsonKind.BOOLEAN:
        return False
    return MISSING


def matches(kind: JsonKind, value: Any) -> bool:
    """Return ``True`` if *value* already has the runtime kind *kind*."""
    if kind is JsonKind.ANY:
        return True
    if kind is JsonKind.STRING:
        return isinstance(value, str)
    if kind is JsonKind.NUMBER:
        return isinstance(value, numbers.Real) and not isinstance(value, bool)
    if kind is JsonKind.OBJECT:
        return isinstance(value, Mapping)
    if kind is JsonKind.ARRAY:
        return isinstance(value, (list, array.array))
    if kind is JsonKind.BOOLEAN:
        return isinstance(value, bool)
    return value is None


@lru_cache(maxsize=None)
def _adapter_for(kind: JsonKind) -> TypeAdapter[Any]:
    if kind is JsonKind.STRING:
        return TypeAdapter(str, config=_STRICT)
    if kind is JsonKind.NUMBER:
        return TypeAdapter(int | float, config=_STRICT)  # type: ignore[arg-type]
    if kind is JsonKind.OBJECT:
        return TypeAdapter(dict[str, Any])
    if kind is JsonKind.ARRAY:
        return TypeAdapter(list[Any])
    if kind is JsonKind.BOOLEAN:
        return TypeAdapter(bool, config=_STRICT)
    if kind is JsonKind.NULL:
        return TypeAdapter(type(None))
    raise ValueError(f"No adapter for {kind!r}")


def coerce_value(value: Any, pointer: Pointer) -> Any:
    """Convert *value* so it can be stored under *pointer*.

    Raises
    ------
    TypeConstraintViolationError
        If *value* does not have the pointer's kind and cannot be converted.
    """
    kind = pointer.kind
    if value is MISSING:
        return null_value(kind)
    if matches(kind, value):
        return value
    try:
        return _adapter_for(kind).validate_python(value)
    except ValidationError as exc:
        raise TypeConstraintViolationError(value, pointer) from exc
