import pytest
from semver import Version

from witkit.ident import Ident, parse_ident


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("wasi:io", Ident(namespace="wasi", package="io")),
        (
            "wasi:io@0.2.0",
            Ident(namespace="wasi", package="io", version=Version.parse("0.2.0")),
        ),
        (
            "wasi:io/streams",
            Ident(namespace="wasi", package="io", extension="streams"),
        ),
        (
            "wasi:io/streams@0.2.0",
            Ident(
                namespace="wasi",
                package="io",
                extension="streams",
                version=Version.parse("0.2.0"),
            ),
        ),
    ],
)
def test_parse_ident_valid(text, expected):
    assert parse_ident(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        ":",
        ":/",
        ":/@",
        "wasi",
        "wasi:",
        "wasi:/",
        "wasi:clocks@",
        "wasi:clocks/wall-clock@",
    ],
)
def test_parse_ident_errors(text):
    with pytest.raises(ValueError):
        parse_ident(text)


@pytest.mark.parametrize(
    "text",
    ["wasi:io", "wasi:io@0.2.0", "wasi:io/streams", "wasi:io/streams@0.2.0"],
)
def test_string_round_trip(text):
    assert str(parse_ident(text)) == text


def test_unversioned_string():
    assert parse_ident("wasi:io/streams@0.2.0").unversioned_string() == "wasi:io/streams"
    assert parse_ident("wasi:io@0.2.0").unversioned_string() == "wasi:io"


def test_validate_missing_namespace():
    with pytest.raises(ValueError, match="namespace"):
        Ident(package="io").validate()


def test_validate_missing_package():
    with pytest.raises(ValueError, match="package name"):
        Ident(namespace="wasi").validate()