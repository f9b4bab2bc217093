"""Exceptions raised while parsing pointers and navigating trees.

Every error derives from :class:`PointerError` and from the builtin exception
that best describes it, so ``except KeyError``/``except TypeError`` style
handling keeps working for callers that do not know about this package.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .types import Token, preview

if TYPE_CHECKING:
    from .pointer import Pointer


class PointerError(Exception):
    """Base exception for all pointer-related errors."""


class MalformedPointerError(PointerError, ValueError):
    """Raised when pointer text (or a token list) does not form a valid pointer."""


class UnsupportedTypeError(MalformedPointerError):
    """Raised when a ``::tag`` suffix names a type JSON does not have."""


class PolicyViolationError(PointerError):
    """Raised when a write exceeds the active :class:`~typedpointer.navigate.WritePolicy`."""


class PointerMismatchError(PointerError, LookupError):
    """A token could not be applied to the value reached so far (read path)."""

    def __init__(self, container: Any, token: Token, pointer: Pointer | None = None) -> None:
        self.container = container
        self.token = token
        self.pointer = pointer
        super().__init__(self._message())

    def _message(self) -> str:
        where = f" while resolving {str(self.pointer)!r}" if self.pointer is not None else ""
        return (
            f"Pointer does not match the data: cannot index {preview(self.container)} "
            f"with {self.token!r}{where}"
        )


class PointerBoundsError(PointerMismatchError, IndexError):
    """An index token points past the end of an array (read path)."""

    def _message(self) -> str:
        where = f" while resolving {str(self.pointer)!r}" if self.pointer is not None else ""
        return (
            f"Index {self.token} out of bounds for array of length "
            f"{len(self.container)}{where}"
        )


class StructuralMismatchError(PointerError, TypeError):
    """A write tried to index an object by position or an array by key."""

    def __init__(
        self,
        container: Any,
        token: Token | None,
        pointer: Pointer | None = None,
        reason: str | None = None,
    ) -> None:
        self.container = container
        self.token = token
        self.pointer = pointer
        if reason is None:
            kind = "index" if isinstance(token, int) else "key"
            reason = f"cannot use {kind} {token!r} on {preview(container)}"
        where = f" (pointer {str(pointer)!r})" if pointer is not None else ""
        super().__init__(f"{reason}{where}")


class TypeConstraintViolationError(PointerError, TypeError):
    """The value written does not satisfy the pointer's ``::tag`` constraint."""

    def __init__(self, value: Any, pointer: Pointer) -> None:
        self.value = value
        self.pointer = pointer
        super().__init__(
            f"{preview(value)} ({type(value).__name__}) is not a valid "
            f"{pointer.kind.value} for {str(pointer)!r}. Remove the type "
            "constraint from the pointer if you don't need a static type."
        )
