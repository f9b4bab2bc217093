"""typedpointer demo: read and build nested JSON with typed pointers."""

import json
from collections import OrderedDict

import typedpointer as tp

# ── 1. Parse: pointer text → tokens ──────────────────────────────────
#
# Indices are 1-based. A backslash turns digits back into a key, and the
# last token can declare a JSON type.

ptr = tp.parse("/orders/2/items/\\10/price::number")
print("1) parse")
print(f"   {ptr!r}")
print(f"   tokens={ptr.tokens}  kind={ptr.kind.value}")
print()


# ── 2. Read: exists / read / get ─────────────────────────────────────

doc = json.loads('{"orders": [{"id": "A1"}, {"id": "B7", "tags": ["rush"]}]}')

print("2) read")
print(f"   exists /orders/2/tags/1 -> {tp.exists(doc, '/orders/2/tags/1')}")
print(f"   read   /orders/2/id     -> {tp.read(doc, '/orders/2/id')!r}")
print(f"   get    /orders/9/id     -> {tp.get(doc, '/orders/9/id', 'n/a')!r}")
try:
    tp.read(doc, "/orders/3")
except tp.PointerBoundsError as exc:
    print(f"   read   /orders/3        -> {exc}")
print()


# ── 3. Write: containers and array slots are created on the way ──────

tp.write(doc, "/orders/4/id", "Z9")
tp.write(doc, "/orders/1/total::number", tp.MISSING)
print("3) write")
print(f"   orders[0]={doc['orders'][0]}")
print(f"   orders[2]={doc['orders'][2]!r}  (padding)")
print(f"   orders[3]={doc['orders'][3]}")
try:
    tp.write(doc, "/orders/1/total::number", "twelve")
except tp.TypeConstraintViolationError as exc:
    print(f"   rejected: {exc}")
print()


# ── 4. Build: a fresh tree from (pointer, value) pairs ───────────────

tree = tp.build(
    [
        ("/a/1/b", 1),
        ("/a/2/b", 2),
        ("/meta/tags::array", ("x", "y")),
    ],
    factory=OrderedDict,
)
print("4) build")
print(f"   {json.dumps(tree)}")
