"""Parsing and rendering of JSON Pointers (RFC 6901) with a few extensions.

Extensions over the RFC:

* Array indices are 1-based.  ``parse("/0")`` is an error unless
  ``shift_index=True``, which adds one to every index token.
* A token made only of digits is an index; prefix it with a backslash
  (``/\\5``) to address the object key ``"5"`` instead.
* The last token may carry a type constraint: ``/price::number``.  Allowed
  tags are ``string``, ``number``, ``object``, ``array``, ``boolean`` and
  ``null``.
* URI fragment form (``#/a%20b``) is percent-decoded before parsing.
"""

from __future__ import annotations

import re
import warnings
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any
from urllib.parse import unquote

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .errors import MalformedPointerError, UnsupportedTypeError
from .types import JsonKind, Token

_PREFIX = "/"
_FRAGMENT = "#"
_TYPE_SEP = "::"
_INDEX_RE = re.compile(r"[0-9]+")
_LITERAL_DIGITS_RE = re.compile(r"\\([0-9]+)")


def escape_token(token: str) -> str:
    """Escape a single reference token (``~`` first, then ``/``)."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    """Unescape a single reference token (``~1`` first, then ``~0``)."""
    return token.replace("~1", "/").replace("~0", "~")


def _check_token(token: Any) -> None:
    if isinstance(token, bool) or not isinstance(token, (str, int)):
        raise MalformedPointerError(
            f"Pointer tokens must be str keys or int indices, got {token!r}"
        )
    if isinstance(token, int) and token < 1:
        raise MalformedPointerError(f"Array indices start at 1, got {token}")


def _render_token(token: Token) -> str:
    if isinstance(token, int):
        return str(token)
    if _INDEX_RE.fullmatch(token):
        return "\\" + token
    return escape_token(token)


@dataclass(frozen=True, slots=True)
class ParseOptions:
    shift_index: bool = False


@dataclass(frozen=True, slots=True)
class Pointer:
    """A parsed, immutable JSON Pointer.

    ``tokens`` holds ``str`` keys and 1-based ``int`` indices.  ``kind`` is the
    optional type constraint taken from a ``::tag`` suffix; it does not take
    part in equality or hashing.
    """

    tokens: tuple[Token, ...] = ()
    kind: JsonKind = field(default=JsonKind.ANY, compare=False)

    def __post_init__(self) -> None:
        tokens = tuple(self.tokens)
        for token in tokens:
            _check_token(token)
        if not tokens and self.kind is not JsonKind.ANY:
            raise MalformedPointerError("The root pointer cannot carry a type constraint")
        object.__setattr__(self, "tokens", tokens)

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token], kind: JsonKind = JsonKind.ANY) -> Pointer:
        return cls(tuple(tokens), kind)

    @property
    def is_root(self) -> bool:
        return not self.tokens

    @property
    def parent(self) -> Pointer:
        """The pointer one token shorter (unconstrained).  The root is its own parent."""
        return Pointer(self.tokens[:-1])

    def __truediv__(self, token: Token) -> Pointer:
        return Pointer(self.tokens + (token,))

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        if not self.tokens:
            return ""
        text = _PREFIX + _PREFIX.join(_render_token(token) for token in self.tokens)
        if self.kind is not JsonKind.ANY:
            text += _TYPE_SEP + self.kind.value
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_text = core_schema.no_info_after_validator_function(
            parse, core_schema.str_schema()
        )
        return core_schema.json_or_python_schema(
            json_schema=from_text,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_text]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )


ROOT = Pointer()


def _split_type(segment: str) -> tuple[str, JsonKind]:
    head, sep, tag = segment.rpartition(_TYPE_SEP)
    if not sep:
        return segment, JsonKind.ANY
    kind = JsonKind.from_tag(tag)
    if kind is None:
        raise UnsupportedTypeError(
            f"You specified a type that JSON doesn't recognize! Instead of "
            f"'::{tag}', use one of '::string', '::number', '::object', "
            f"'::array', '::boolean', or '::null'."
        )
    return head, kind


def _classify(segment: str, shift_index: bool) -> Token:
    if _INDEX_RE.fullmatch(segment):
        index = int(segment) + (1 if shift_index else 0)
        if index == 0:
            raise MalformedPointerError(
                "Array indices start at 1, use '1' instead of '0' "
                "(or parse with shift_index=True)"
            )
        return index
    literal = _LITERAL_DIGITS_RE.fullmatch(segment)
    if literal is not None:
        return literal.group(1)
    if "~" in segment:
        return unescape_token(segment)
    return segment


def parse(
    text: str,
    *,
    shift_index: bool | None = None,
    options: ParseOptions | None = None,
) -> Pointer:
    """Parse pointer *text* into a :class:`Pointer`.

    ``""`` and ``"#"`` give the root pointer.  An explicit *shift_index*
    overrides ``options.shift_index``.

    Raises
    ------
    MalformedPointerError
        If the text does not start with ``/`` or an index is ``0``.
    UnsupportedTypeError
        If the ``::tag`` suffix is not a JSON type.
    """
    opts = options or ParseOptions()
    shift = opts.shift_index if shift_index is None else shift_index

    if text.startswith(_FRAGMENT):
        text = unquote(text[1:])
    if text == "":
        return ROOT
    if not text.startswith(_PREFIX):
        raise MalformedPointerError(
            f"JSON Pointer must start with '{_PREFIX}' or be empty, got: {text!r}"
        )

    segments = text[1:].split(_PREFIX)
    segments[-1], kind = _split_type(segments[-1])
    tokens = tuple(_classify(segment, shift) for segment in segments)
    return Pointer(tokens, kind)


@lru_cache(maxsize=256)
def j(text: str) -> Pointer:
    """Shorthand for ``parse(text)`` with default options (memoized)."""
    return parse(text)


def as_pointer(pointer: Pointer | str) -> Pointer:
    if isinstance(pointer, Pointer):
        return pointer
    return j(pointer)


def dedup(pointers: Iterable[Pointer]) -> list[Pointer]:
    """Drop later duplicates, keeping the first occurrence of each token sequence.

    Warns when a dropped pointer carries a different type constraint than the
    one that was kept.
    """
    seen: dict[Pointer, Pointer] = {}
    for pointer in pointers:
        first = seen.setdefault(pointer, pointer)
        if first is not pointer and first.kind is not pointer.kind:
            warnings.warn(
                f"Dropping duplicate {pointer!r}: its type constraint differs from "
                f"the first occurrence {first!r}",
                stacklevel=2,
            )
    return list(seen.values())
