import pytest

from witkit.primitives import U8, U16, U32, U64, Bool, String, discriminant
from witkit.text import Docs
from witkit.types import (
    BorrowedHandle,
    Case,
    Enum,
    EnumCase,
    Field,
    Flag,
    Flags,
    Future,
    List,
    Option,
    OwnedHandle,
    Record,
    Resource,
    Result,
    Stream,
    Tuple,
    Variant,
)


def _flags(n):
    return Flags(flags=[Flag(name=f"f{i}") for i in range(n)])


def test_tuple_despecializes_to_numbered_record():
    t = Tuple(types=[U8(), String()])
    r = t.despecialize()
    assert r == Record(fields=[Field(name="0", type=U8()), Field(name="1", type=String())])


def test_tuple_size_matches_record():
    t = Tuple(types=[U8(), U64(), Bool()])
    r = t.despecialize()
    assert t.size() == r.size()
    assert t.align() == r.align()


def test_enum_despecialize_keeps_names_and_docs():
    e = Enum(cases=[EnumCase(name="a", docs=Docs("first")), EnumCase(name="b")])
    v = e.despecialize()
    assert [c.name for c in v.cases] == ["a", "b"]
    assert all(c.type is None for c in v.cases)
    assert v.cases[0].docs == Docs("first")


@pytest.mark.parametrize("n", [1, 300, 70000])
def test_enum_size_is_discriminant(n):
    e = Enum(cases=[EnumCase(name=f"c{i}") for i in range(n)])
    assert e.size() == discriminant(n).size()
    assert e.align() == discriminant(n).align()


def test_option_despecialize():
    v = Option(type=U32()).despecialize()
    assert [c.name for c in v.cases] == ["none", "some"]
    assert v.cases[0].type is None
    assert v.cases[1].type == U32()


def test_result_despecialize():
    v = Result(ok=String(), err=None).despecialize()
    assert [c.name for c in v.cases] == ["ok", "error"]
    assert v.cases[0].type == String()


def test_record_layout_invariants():
    fields = [Field("a", U8()), Field("b", U32()), Field("c", U16())]
    r = Record(fields=fields)
    assert r.align() == max(f.type.align() for f in fields)
    assert r.size() >= sum(f.type.size() for f in fields)
    single = Record(fields=[Field("x", U64())])
    assert single.size() == U64().size()
    assert Record().align() == 1


@pytest.mark.parametrize(
    "n,size,alignment",
    [(0, 1, 1), (8, 1, 1), (9, 2, 2), (16, 2, 2), (17, 4, 4), (32, 4, 4)],
)
def test_flags_size(n, size, alignment):
    f = _flags(n)
    assert f.size() == size
    assert f.align() == alignment


def test_flags_large_size_is_multiple_of_word():
    f = _flags(33)
    assert f.size() > _flags(32).size()
    assert f.size() % f.align() == 0


def test_variant_size_invariants():
    v = Variant(cases=[Case("a"), Case("b", U64()), Case("c", U8())])
    assert v.align() == max(discriminant(3).align(), U64().align())
    assert v.size() % v.align() == 0
    assert v.size() >= discriminant(3).size() + U64().size()


def test_option_matches_variant():
    o = Option(type=String())
    assert o.size() == o.despecialize().size()
    assert o.align() == String().align()


def test_fixed_sizes():
    assert (Resource().size(), Resource().align()) == (4, 4)
    assert (OwnedHandle(U32()).size(), BorrowedHandle(U32()).align()) == (4, 4)
    assert (List(U8()).size(), List(U8()).align()) == (8, 8)
    assert (Future().size(), Stream().align()) == (0, 0)


def test_wit_kinds():
    assert OwnedHandle().wit_kind() == "owned handle"
    assert BorrowedHandle().wit_kind() == "borrowed handle"
    assert Case().wit_kind() == "variant case"
    assert EnumCase().wit_kind() == "enum case"


def test_short_record_is_unwrapped():
    r = Record(fields=[Field("x", U32()), Field("y", U32())])
    out = r.wit(None, "point")
    assert "\n" not in out
    assert out.startswith("record point {")
    assert "x: u32" in out and "y: u32" in out


def test_long_record_stays_multiline():
    r = Record(fields=[Field(f"field-number-{i}", String()) for i in range(6)])
    out = r.wit(None, "big")
    lines = out.split("\n")
    assert lines[0] == "record big {"
    assert lines[-1] == "}"
    assert all(line.startswith("\t") for line in lines[1:-1])


def test_keyword_names_are_escaped():
    assert Record().wit(None, "type").startswith("record %type")
    assert Resource().wit(None, "flags").endswith("%flags")


def test_field_docs_only_with_context():
    f = Field("a", U8(), Docs("about a"))
    assert f.wit(None, "") == "a: u8"
    with_docs = f.wit(object(), "")
    assert with_docs.startswith("///")
    assert with_docs.endswith("a: u8")


def test_flags_wit_lists_names():
    out = Flags(flags=[Flag("read"), Flag("write")]).wit(None, "perms")
    assert out.startswith("flags perms {")
    assert "read, write" in out


def test_enum_and_variant_wit():
    e = Enum(cases=[EnumCase("red"), EnumCase("green")]).wit(None, "color")
    assert "red" in e and "green" in e and e.startswith("enum color")
    v = Variant(cases=[Case("none"), Case("num", U32())]).wit(None, "val")
    assert "num(u32)" in v and v.startswith("variant val")


def test_result_and_stream_wit():
    assert Result().wit(None, "") == "result"
    assert Result(err=String()).wit(None, "") == "result<_, string>"
    assert Stream().wit(None, "") == "stream"
    assert Stream(element=U8()).wit(None, "").endswith("<u8>")


def test_alias_forms():
    assert Option(U32()).wit(None, "maybe") == "type maybe = option<u32>"
    assert List(U8()).wit(None, "").startswith("list<")
    assert Tuple([U8(), Bool()]).wit(None, "").count(",") == 1
    assert OwnedHandle(U32()).wit(None, "h").startswith("type h = own<")
    assert BorrowedHandle(U32()).wit(None, "").startswith("borrow<")
    assert Future(U8()).wit(None, "").startswith("future<")