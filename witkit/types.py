"""WIT type definition kinds: records, variants, enums, handles and the rest."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from witkit.primitives import align, discriminant
from witkit.text import Docs, escape, indent, unwrap


def _alias_prefix(name: str) -> str:
    return f"type {escape(name)} = " if name else ""


def _block(keyword: str, name: str, items: list[str]) -> str:
    """Render a braced, comma-separated block, joined onto one line if short."""
    body = f"{keyword} {escape(name)} {{"
    if items:
        body += "\n" + ",\n".join(indent(item) for item in items) + "\n"
    return unwrap(body + "}")


@dataclass
class Field:
    """A named field in a Record."""

    name: str = ""
    type: Any = None
    docs: Docs = field(default_factory=Docs)

    def wit_kind(self) -> str:
        return "field"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        """Return the field declaration; docs are omitted when ctx is None."""
        decl = f"{escape(self.name)}: {self.type.wit(self, '')}"
        if ctx is None:
            return decl
        return self.docs.wit(ctx, "") + decl


@dataclass
class Record:
    """A WIT record type: a bag of named fields."""

    fields: list[Field] = field(default_factory=list)

    def size(self) -> int:
        s = 0
        for f in self.fields:
            s = align(s, f.type.align())
            s += f.type.size()
        return s

    def align(self) -> int:
        return max((f.type.align() for f in self.fields), default=1)

    def wit_kind(self) -> str:
        return "record"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return _block("record", name, [f.wit(ctx, "") for f in self.fields])


@dataclass
class Resource:
    """A WIT resource type."""

    def size(self) -> int:
        return 4

    def align(self) -> int:
        return 4

    def wit_kind(self) -> str:
        return "resource"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return "resource " + escape(name)


class Handle:
    """Base class of owned and borrowed resource handles."""

    def size(self) -> int:
        return 4

    def align(self) -> int:
        return 4


@dataclass
class OwnedHandle(Handle):
    """A handle that owns its resource."""

    type: Any = None

    def wit_kind(self) -> str:
        return "owned handle"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return f"{_alias_prefix(name)}own<{self.type.wit(self, '')}>"


@dataclass
class BorrowedHandle(Handle):
    """A handle that temporarily borrows a resource."""

    type: Any = None

    def wit_kind(self) -> str:
        return "borrowed handle"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return f"{_alias_prefix(name)}borrow<{self.type.wit(self, '')}>"


@dataclass
class Flag:
    """A single flag in a Flags type."""

    name: str = ""
    docs: Docs = field(default_factory=Docs)

    def wit_kind(self) -> str:
        return "flag"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        if ctx is None:
            return escape(self.name)
        return self.docs.wit(ctx, "") + escape(self.name)


@dataclass
class Flags:
    """A WIT flags type, stored as a bitfield."""

    flags: list[Flag] = field(default_factory=list)

    def size(self) -> int:
        n = len(self.flags)
        if n <= 8:
            return 1
        if n <= 16:
            return 2
        return 4 * ((n + 31) >> 5)

    def align(self) -> int:
        n = len(self.flags)
        if n <= 8:
            return 1
        if n <= 16:
            return 2
        return 4

    def wit_kind(self) -> str:
        return "flags"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        items = ", ".join(f.wit(ctx, "") for f in self.flags)
        return unwrap(f"flags {escape(name)} {{{items}}}")


@dataclass
class Tuple:
    """A WIT tuple type: an ordered, fixed-length sequence of types."""

    types: list[Any] = field(default_factory=list)

    def despecialize(self) -> Record:
        """Return the equivalent Record with fields named 0, 1, 2..."""
        return Record(fields=[Field(name=str(i), type=t) for i, t in enumerate(self.types)])

    def size(self) -> int:
        return self.despecialize().size()

    def align(self) -> int:
        return self.despecialize().align()

    def wit_kind(self) -> str:
        return "tuple"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        items = ", ".join(t.wit(self, "") for t in self.types)
        return f"{_alias_prefix(name)}tuple<{items}>"


@dataclass
class Case:
    """A single case in a Variant, with an optional associated type."""

    name: str = ""
    type: Any = None
    docs: Docs = field(default_factory=Docs)

    def wit_kind(self) -> str:
        return "variant case"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        out = self.docs.wit(ctx, "") if ctx is not None else ""
        out += escape(self.name)
        if self.type is not None:
            out += f"({self.type.wit(self, '')})"
        return out


@dataclass
class Variant:
    """A WIT variant type: a tagged union."""

    cases: list[Case] = field(default_factory=list)

    def _typed_cases(self) -> list[Any]:
        return [c.type for c in self.cases if c.type is not None]

    def _max_case_size(self) -> int:
        return max((t.size() for t in self._typed_cases()), default=0)

    def _max_case_align(self) -> int:
        return max((t.align() for t in self._typed_cases()), default=1)

    def size(self) -> int:
        s = discriminant(len(self.cases)).size()
        s = align(s, self._max_case_align())
        s += self._max_case_size()
        return align(s, self.align())

    def align(self) -> int:
        return max(discriminant(len(self.cases)).align(), self._max_case_align())

    def wit_kind(self) -> str:
        return "variant"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return _block("variant", name, [c.wit(ctx, "") for c in self.cases])


@dataclass
class EnumCase:
    """A single case in an Enum."""

    name: str = ""
    docs: Docs = field(default_factory=Docs)

    def wit_kind(self) -> str:
        return "enum case"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        if ctx is None:
            return escape(self.name)
        return self.docs.wit(ctx, "") + escape(self.name)


@dataclass
class Enum:
    """A WIT enum type: a variant with no associated data."""

    cases: list[EnumCase] = field(default_factory=list)

    def despecialize(self) -> Variant:
        """Return the equivalent Variant whose cases carry no types."""
        return Variant(cases=[Case(name=c.name, docs=c.docs) for c in self.cases])

    def size(self) -> int:
        return self.despecialize().size()

    def align(self) -> int:
        return self.despecialize().align()

    def wit_kind(self) -> str:
        return "enum"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return _block("enum", name, [c.wit(ctx, "") for c in self.cases])


@dataclass
class Option:
    """A WIT option type: either a value of one type, or nothing."""

    type: Any = None

    def despecialize(self) -> Variant:
        """Return the equivalent Variant with cases none and some."""
        return Variant(cases=[Case(name="none"), Case(name="some", type=self.type)])

    def size(self) -> int:
        return self.despecialize().size()

    def align(self) -> int:
        return self.despecialize().align()

    def wit_kind(self) -> str:
        return "option"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return f"{_alias_prefix(name)}option<{self.type.wit(self, '')}>"


def _pair_wit(keyword: str, first: Any, second: Any, owner: Any) -> str:
    if first is None and second is None:
        return keyword
    out = keyword + "<"
    out += first.wit(owner, "") if first is not None else "_"
    if second is not None:
        out += ", " + second.wit(owner, "")
    return out + ">"


@dataclass
class Result:
    """A WIT result type with optional ok and error types."""

    ok: Any = None
    err: Any = None

    def despecialize(self) -> Variant:
        """Return the equivalent Variant with cases ok and error."""
        return Variant(cases=[Case(name="ok", type=self.ok), Case(name="error", type=self.err)])

    def size(self) -> int:
        return self.despecialize().size()

    def align(self) -> int:
        return self.despecialize().align()

    def wit_kind(self) -> str:
        return "result"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return _alias_prefix(name) + _pair_wit("result", self.ok, self.err, self)


@dataclass
class List:
    """A WIT list type, represented in the ABI as a pointer and a length."""

    type: Any = None

    def size(self) -> int:
        return 8

    def align(self) -> int:
        return 8

    def wit_kind(self) -> str:
        return "list"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return f"{_alias_prefix(name)}list<{self.type.wit(self, '')}>"


@dataclass
class Future:
    """A WIT future type with an optional value type."""

    type: Any = None

    def size(self) -> int:
        return 0

    def align(self) -> int:
        return 0

    def wit_kind(self) -> str:
        return "future"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        out = _alias_prefix(name) + "future"
        if self.type is not None:
            out += f"<{self.type.wit(self, '')}>"
        return out


@dataclass
class Stream:
    """A WIT stream type with optional element and end types."""

    element: Any = None
    end: Any = None

    def size(self) -> int:
        return 0

    def align(self) -> int:
        return 0

    def wit_kind(self) -> str:
        return "stream"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        return _alias_prefix(name) + _pair_wit("stream", self.element, self.end, self)