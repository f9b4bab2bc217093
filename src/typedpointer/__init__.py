from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("typedpointer")
except PackageNotFoundError:  # pragma: no cover - local source tree without installed metadata
    __version__ = "0.1.0"

from .coerce import coerce_value, null_value
from .errors import (
    MalformedPointerError,
    PointerBoundsError,
    PointerError,
    PointerMismatchError,
    PolicyViolationError,
    StructuralMismatchError,
    TypeConstraintViolationError,
    UnsupportedTypeError,
)
from .navigate import WritePolicy, build, exists, get, read, write
from .pointer import (
    ROOT,
    ParseOptions,
    Pointer,
    dedup,
    escape_token,
    j,
    parse,
    unescape_token,
)
from .types import MISSING, JsonKind

__all__ = [
    "JsonKind",
    "MISSING",
    "MalformedPointerError",
    "ParseOptions",
    "Pointer",
    "PointerBoundsError",
    "PointerError",
    "PointerMismatchError",
    "PolicyViolationError",
    "ROOT",
    "StructuralMismatchError",
    "TypeConstraintViolationError",
    "UnsupportedTypeError",
    "WritePolicy",
    "build",
    "coerce_value",
    "dedup",
    "escape_token",
    "exists",
    "get",
    "j",
    "null_value",
    "parse",
    "read",
    "unescape_token",
    "write",
]
