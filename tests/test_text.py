import pytest

from witkit.text import DOC_PREFIX, WIT_KEYWORDS, Docs, escape, indent, unwrap


@pytest.mark.parametrize("kw", sorted(WIT_KEYWORDS))
def test_escape_keywords(kw):
    assert escape(kw) == "%" + kw


@pytest.mark.parametrize("name", ["foo", "wall-clock", "records", ""])
def test_escape_non_keywords(name):
    assert escape(name) == name


@pytest.mark.parametrize(
    "text", ["a", "a\nb", "a\n\nb", "line one\nline two\n", "x\n\n\ny\n"]
)
def test_indent_invariants(text):
    result = indent(text)
    original_lines = text.split("\n")
    result_lines = result.split("\n")
    assert len(result_lines) == len(original_lines)
    for orig, got in zip(original_lines, result_lines):
        if orig:
            assert got == "\t" + orig
        else:
            assert got == ""


def test_indent_empty():
    assert indent("") == ""


def test_unwrap_short_declaration():
    assert unwrap("record r {\n\ta: u8\n}") == "record r { a: u8 }"


def test_unwrap_leaves_long_text():
    text = "record r {\n\t" + "a" * 60 + ": u8\n}"
    assert unwrap(text) == text


def test_unwrap_leaves_comments():
    text = "enum e {\n\t/// doc\n\ta\n}"
    assert unwrap(text) == text


def test_unwrap_leaves_many_lines():
    text = "enum e {\n\ta,\n\tb,\n\tc,\n\td,\n\te\n}"
    assert unwrap(text) == text


def test_docs_empty():
    assert Docs().wit(None, "") == ""


def test_docs_single_line():
    assert Docs("hello").wit(None, "") == "/// hello\n"


def test_docs_ignores_leading_spaces():
    assert Docs("   hello").wit(None, "") == Docs("hello").wit(None, "")


def test_docs_multi_line():
    assert Docs("a\nb").wit(None, "") == "/// a\n/// b\n"


def test_docs_wraps_long_text():
    words = ["word%d" % i for i in range(60)]
    result = Docs(" ".join(words)).wit(None, "")
    lines = result.split("\n")
    assert result.endswith("\n")
    assert lines[-1] == ""
    body = lines[:-1]
    assert len(body) > 1
    for line in body:
        assert line.startswith(DOC_PREFIX + " ")
    recovered = " ".join(line[len(DOC_PREFIX) + 1 :] for line in body).split()
    assert recovered == words


def test_docs_blank_line_preserved():
    result = Docs("a\n\nb").wit(None, "")
    lines = result.split("\n")
    assert len(lines) == 4
    assert all(line.startswith(DOC_PREFIX) for line in lines[:3])


def test_docs_wit_kind():
    assert Docs().wit_kind() == "docs"