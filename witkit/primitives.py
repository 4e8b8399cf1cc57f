"""WIT primitive types and Canonical ABI size and alignment helpers."""

from __future__ import annotations

from typing import Any, ClassVar


def align(ptr: int, alignment: int) -> int:
    """Round ptr up to the next multiple of alignment (a power of two)."""
    return (ptr + alignment - 1) & ~(alignment - 1)


def discriminant(n: int) -> Primitive:
    """Return the smallest unsigned integer type that can represent 0...n."""
    if n <= 1 << 8:
        return U8()
    if n <= 1 << 16:
        return U16()
    return U32()


def despecialize(kind: Any) -> Any:
    """Despecialize kind if it knows how to; otherwise return it unchanged."""
    method = getattr(kind, "despecialize", None)
    if callable(method):
        return method()
    return kind


class Primitive:
    """Base class of the WIT primitive types.

    Every instance of a given primitive class is equal to every other.
    """

    __slots__ = ()

    name: ClassVar[str] = ""
    _size: ClassVar[int] = 0
    _align: ClassVar[int] = 0

    def size(self) -> int:
        """Return the ABI byte size of values of this type."""
        return self._size

    def align(self) -> int:
        """Return the ABI byte alignment of values of this type."""
        return self._align

    def wit_kind(self) -> str:
        return "type"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        """Return the WIT text for this type, as an alias if name is given."""
        if name:
            return f"type {name} = {self}"
        return str(self)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))


class Bool(Primitive):
    """The WIT boolean type."""

    __slots__ = ()
    name = "bool"
    _size = 1
    _align = 1


class S8(Primitive):
    """A signed 8-bit integer."""

    __slots__ = ()
    name = "s8"
    _size = 1
    _align = 1


class U8(Primitive):
    """An unsigned 8-bit integer."""

    __slots__ = ()
    name = "u8"
    _size = 1
    _align = 1


class S16(Primitive):
    """A signed 16-bit integer."""

    __slots__ = ()
    name = "s16"
    _size = 2
    _align = 2


class U16(Primitive):
    """An unsigned 16-bit integer."""

    __slots__ = ()
    name = "u16"
    _size = 2
    _align = 2


class S32(Primitive):
    """A signed 32-bit integer."""

    __slots__ = ()
    name = "s32"
    _size = 4
    _align = 4


class U32(Primitive):
    """An unsigned 32-bit integer."""

    __slots__ = ()
    name = "u32"
    _size = 4
    _align = 4


class S64(Primitive):
    """A signed 64-bit integer."""

    __slots__ = ()
    name = "s64"
    _size = 8
    _align = 8


class U64(Primitive):
    """An unsigned 64-bit integer."""

    __slots__ = ()
    name = "u64"
    _size = 8
    _align = 8


class Float32(Primitive):
    """A 32-bit floating point value."""

    __slots__ = ()
    name = "float32"
    _size = 4
    _align = 4


class Float64(Primitive):
    """A 64-bit floating point value."""

    __slots__ = ()
    name = "float64"
    _size = 8
    _align = 8


class Char(Primitive):
    """A single Unicode scalar value."""

    __slots__ = ()
    name = "char"
    _size = 4
    _align = 4


class String(Primitive):
    """A Unicode string, represented in the ABI as a pointer and a length."""

    __slots__ = ()
    name = "string"
    _size = 8
    _align = 4


_PRIMITIVES: dict[str, type[Primitive]] = {
    cls.name: cls
    for cls in (Bool, S8, U8, S16, U16, S32, U32, S64, U64, Float32, Float64, Char, String)
}


def parse_type(s: str) -> Primitive:
    """Parse a WIT primitive type name, raising ValueError if unknown."""
    try:
        return _PRIMITIVES[s]()
    except KeyError:
        raise ValueError(f'unknown primitive type "{s}"') from None