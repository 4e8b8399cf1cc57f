"""Component Model identifiers for packages, worlds and interfaces."""

from __future__ import annotations

from dataclasses import dataclass

from semver import Version


@dataclass(frozen=True)
class Ident:
    """An identifier such as ``wasi:clocks@0.2.0`` or ``wasi:clocks/wall-clock@0.2.0``.

    It holds a namespace and a package name, with an optional extension
    (a world or interface name) and an optional semantic version.
    """

    namespace: str = ""
    package: str = ""
    extension: str = ""
    version: Version | None = None

    def validate(self) -> None:
        """Raise ValueError if this identifier is missing required parts."""
        if not self.namespace:
            raise ValueError("missing package namespace")
        if not self.package:
            raise ValueError("missing package name")

    def __str__(self) -> str:
        if self.version is None:
            return self.unversioned_string()
        if not self.extension:
            return f"{self.namespace}:{self.package}@{self.version}"
        return f"{self.namespace}:{self.package}/{self.extension}@{self.version}"

    def unversioned_string(self) -> str:
        """Return the identifier without its version."""
        if not self.extension:
            return f"{self.namespace}:{self.package}"
        return f"{self.namespace}:{self.package}/{self.extension}"


def parse_ident(s: str) -> Ident:
    """Parse a WIT identifier string, raising ValueError if it is invalid."""
    name, has_version, version_text = s.partition("@")
    base, _, extension = name.partition("/")
    namespace, _, package = base.partition(":")

    version = None
    if has_version:
        try:
            version = Version.parse(version_text)
        except (ValueError, TypeError) as exc:
            raise ValueError(f"invalid version {version_text!r}: {exc}") from exc

    ident = Ident(
        namespace=namespace,
        package=package,
        extension=extension,
        version=version,
    )
    ident.validate()
    return ident