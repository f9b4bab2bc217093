"""Reading and writing nested dict/list trees through a :class:`Pointer`.

Trees are plain Python containers as produced by :func:`json.loads`: any
``Mapping`` is an object, any non-string ``Sequence`` (or ``array.array``) is
an array.  Indices in pointers are 1-based.

``write`` creates what is missing on the way down:

* absent keys and ``MISSING`` slots become a new container, a list when the
  next token is an index and an object otherwise (of the parent's mapping
  type, so an ``OrderedDict`` tree stays an ``OrderedDict`` tree)
* arrays are padded at the end with ``MISSING`` (``0`` for numeric
  ``array.array``) until the index fits
"""

from __future__ import annotations

import array
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .coerce import coerce_value
from .errors import (
    PointerBoundsError,
    PointerMismatchError,
    PolicyViolationError,
    StructuralMismatchError,
)
from .pointer import Pointer, as_pointer
from .types import (
    MISSING,
    Token,
    is_array,
    is_mutable_array,
    is_mutable_object,
    is_object,
    preview,
)

_NOT_FOUND = object()


@dataclass(frozen=True, slots=True)
class WritePolicy:
    """Limits applied by :func:`write`.

    Attributes
    ----------
    max_path_depth : int | None
        Maximum number of tokens in the pointer.  ``None`` means unlimited.
    max_array_length : int | None
        Maximum length an array may be grown to.  ``None`` means unlimited.
    """

    max_path_depth: int | None = None
    max_array_length: int | None = None


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


def _child(container: Any, token: Token) -> Any:
    if isinstance(token, str):
        if is_object(container) and token in container:
            return container[token]
    elif is_array(container) and 1 <= token <= len(container):
        return container[token - 1]
    return _NOT_FOUND


def exists(tree: Any, pointer: Pointer | str) -> bool:
    """Return ``True`` if every token of *pointer* resolves in *tree*."""
    current = tree
    for token in as_pointer(pointer).tokens:
        current = _child(current, token)
        if current is _NOT_FOUND:
            return False
    return True


def read(tree: Any, pointer: Pointer | str) -> Any:
    """Return the value *pointer* refers to.

    Raises
    ------
    PointerBoundsError
        If an index is past the end of an array.
    PointerMismatchError
        If a key is absent or a token does not fit the container kind.
    """
    ptr = as_pointer(pointer)
    current = tree
    for token in ptr.tokens:
        child = _child(current, token)
        if child is _NOT_FOUND:
            if isinstance(token, int) and is_array(current):
                raise PointerBoundsError(current, token, ptr)
            raise PointerMismatchError(current, token, ptr)
        current = child
    return current


def get(tree: Any, pointer: Pointer | str, default: Any = None) -> Any:
    """Like :func:`read`, but return *default* when the pointer does not resolve."""
    try:
        return read(tree, pointer)
    except PointerMismatchError:
        return default


# ---------------------------------------------------------------------------
# Write path
# ---------------------------------------------------------------------------


def _padding(container: Any) -> Any:
    if isinstance(container, array.array):
        return "\0" if container.typecode in ("u", "w") else 0
    return MISSING


def _grow(container: Any, size: int, pointer: Pointer, policy: WritePolicy) -> None:
    short = size - len(container)
    if short <= 0:
        return
    limit = policy.max_array_length
    if limit is not None and size > limit:
        raise PolicyViolationError(
            f"Writing {str(pointer)!r} would grow an array to {size} items, "
            f"but policy allows at most {limit}"
        )
    container.extend([_padding(container)] * short)


def _slot(container: Any, token: Token, pointer: Pointer, policy: WritePolicy) -> Token:
    """Validate *token* against *container* and return the Python key/position."""
    if is_mutable_object(container):
        if isinstance(token, str):
            return token
    elif is_mutable_array(container):
        if isinstance(token, int):
            _grow(container, token, pointer, policy)
            return token - 1
    raise StructuralMismatchError(container, token, pointer)


def _new_container(parent: Any, next_token: Token) -> Any:
    if isinstance(next_token, int):
        return []
    if is_object(parent):
        return type(parent)()
    return {}


def _assign(container: Any, slot: Token, value: Any, token: Token, pointer: Pointer) -> None:
    try:
        container[slot] = value
    except TypeError as exc:
        # array.array only stores values of its typecode
        raise StructuralMismatchError(
            container,
            token,
            pointer,
            reason=f"cannot store {preview(value)} in {preview(container)}",
        ) from exc


def write(
    tree: Any,
    pointer: Pointer | str,
    value: Any,
    *,
    policy: WritePolicy | None = None,
) -> None:
    """Store *value* at *pointer*, creating intermediate containers (mutates *tree*).

    *value* is first converted to the pointer's type constraint; writing
    ``MISSING`` stores the constraint's null value.  Nothing is rolled back if
    the write fails half way: containers created before the failure stay.

    Raises
    ------
    StructuralMismatchError
        If an index meets an object, a key meets an array, the path runs into a
        scalar, or *pointer* is the root.
    TypeConstraintViolationError
        If *value* cannot be converted to the pointer's type constraint.
    PolicyViolationError
        If *policy* limits are exceeded.
    """
    ptr = as_pointer(pointer)
    policy = policy or WritePolicy()
    if ptr.is_root:
        raise StructuralMismatchError(
            tree, None, ptr, reason="cannot write at the root pointer; replace the tree instead"
        )
    if not (is_mutable_object(tree) or is_mutable_array(tree)):
        raise StructuralMismatchError(
            tree,
            ptr.tokens[0],
            ptr,
            reason=f"cannot write into {preview(tree)}; the root must be an object or array",
        )
    if policy.max_path_depth is not None and len(ptr) > policy.max_path_depth:
        raise PolicyViolationError(
            f"Path {str(ptr)!r} has depth {len(ptr)}, "
            f"exceeding policy max_path_depth={policy.max_path_depth}"
        )

    converted = coerce_value(value, ptr)
    current = tree
    *parents, last = ptr.tokens
    for i, token in enumerate(parents):
        slot = _slot(current, token, ptr, policy)
        child = current.get(slot, MISSING) if is_object(current) else current[slot]
        if child is MISSING:
            child = _new_container(current, ptr.tokens[i + 1])
            current[slot] = child
        current = child
    _assign(current, _slot(current, last, ptr, policy), converted, last, ptr)


def build(
    pairs: Mapping[Pointer | str, Any] | Iterable[tuple[Pointer | str, Any]],
    *,
    factory: type = dict,
    policy: WritePolicy | None = None,
) -> Any:
    """Create a new tree by writing each ``(pointer, value)`` pair in order.

    Example::

        build([("/a/1/b", 1), ("/a/2/b", 2)])
        # {"a": [{"b": 1}, {"b": 2}]}
    """
    tree = factory()
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    for pointer, value in items:
        write(tree, pointer, value, policy=policy)
    return tree
