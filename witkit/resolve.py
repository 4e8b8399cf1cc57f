"""Fully resolved WIT packages, worlds, interfaces, type definitions and functions."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any

from witkit.ident import Ident
from witkit.text import Docs, escape, indent


def _item_rank(item: Any) -> int:
    if isinstance(item, Interface):
        return 0
    if isinstance(item, TypeDef):
        return 1
    if isinstance(item, Function):
        return 2
    raise TypeError(f"unknown world item type {type(item).__name__}")


def _item_sort_name(name: str, item: Any) -> str:
    if isinstance(item, (Interface, TypeDef)):
        return item.name if item.name is not None else name
    if isinstance(item, Function):
        return item.name
    return name


def _iterate_world_items(items: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    """Yield (name, item) pairs sorted by item type, then item name, then key."""
    ordered = sorted(
        items.items(),
        key=lambda pair: (_item_rank(pair[1]), _item_sort_name(*pair), pair[0]),
    )
    yield from ordered


def _relative_name(owner: Any, package: Package | None) -> str:
    """Name owner relative to package, fully qualifying it if it lives elsewhere."""
    if isinstance(owner, Interface):
        if owner.name is None:
            return ""
        owner_package = owner.package
        name = owner.name
    elif isinstance(owner, World):
        owner_package = owner.package
        name = owner.name
    else:
        owner_package = None
        name = ""
    if owner_package is package:
        return name
    if owner_package is None:
        return ""
    qualified = replace(owner_package.name, package=f"{owner_package.name.package}/{name}")
    return str(qualified)


@dataclass(eq=False)
class World:
    """All of the imports and exports of a WebAssembly component."""

    name: str = ""
    imports: dict[str, Any] = field(default_factory=dict)
    exports: dict[str, Any] = field(default_factory=dict)
    package: Package | None = field(default=None, repr=False)
    docs: Docs = field(default_factory=Docs)

    def all_functions(self) -> Iterator[Function]:
        """Yield every imported function, then every exported one."""
        for _, item in self.all_imports():
            if isinstance(item, Function):
                yield item
        for _, item in self.all_exports():
            if isinstance(item, Function):
                yield item

    def all_imports(self) -> Iterator[tuple[str, Any]]:
        """Yield (name, item) for every import in a deterministic order."""
        return _iterate_world_items(self.imports)

    def all_exports(self) -> Iterator[tuple[str, Any]]:
        """Yield (name, item) for every export in a deterministic order."""
        return _iterate_world_items(self.exports)

    def wit_kind(self) -> str:
        return "world"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        if not name:
            name = self.name
        out = [self.docs.wit(ctx, ""), "world ", escape(name), " {"]
        lines: list[str] = []
        for item_name, item in self.all_imports():
            if isinstance(item, Function) and not item.is_freestanding():
                continue
            lines.append(indent(self._item_wit("import", item_name, item)))
        for item_name, item in self.all_exports():
            lines.append(indent(self._item_wit("export", item_name, item)))
        if lines:
            out.append("\n")
            out.extend(line + "\n" for line in lines)
        out.append("}")
        return "".join(out)

    def _item_wit(self, motion: str, name: str, item: Any) -> str:
        if isinstance(item, (Interface, Function)):
            return f"{motion} {item.wit(self, name)}"
        if isinstance(item, TypeDef):
            return item.wit(self, name)
        raise TypeError(f"unknown world item type {type(item).__name__}")


@dataclass(eq=False)
class Interface:
    """A named or anonymous collection of types and functions."""

    name: str | None = None
    type_defs: dict[str, TypeDef] = field(default_factory=dict)
    functions: dict[str, Function] = field(default_factory=dict)
    package: Package | None = field(default=None, repr=False)
    docs: Docs = field(default_factory=Docs)

    def all_functions(self) -> Iterator[Function]:
        """Yield every function in this interface."""
        yield from self.functions.values()

    def wit_kind(self) -> str:
        return "interface"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        if self.name is not None and not name:
            name = self.name

        out: list[str] = []
        if isinstance(ctx, Package):
            out += [self.docs.wit(ctx, ""), "interface ", escape(name), " "]
        elif isinstance(ctx, World):
            rname = _relative_name(self, ctx.package)
            if rname:
                return escape(rname) + ";"
            out += [self.docs.wit(ctx, ""), escape(name), ": interface "]

        out.append("{")
        count = 0

        def emit(text: str, has_docs: bool) -> None:
            nonlocal count
            if count == 0 or has_docs:
                out.append("\n")
            out.append(indent(text) + "\n")
            count += 1

        keys = sorted(self.type_defs)
        # Use statements come first, then local declarations.
        for key in keys:
            td = self.type_defs[key]
            if td.root().owner is not td.owner:
                emit(td.wit(self, key), bool(td.docs.contents))
        for key in keys:
            td = self.type_defs[key]
            if td.root().owner is td.owner:
                emit(td.wit(self, key), bool(td.docs.contents))
        for key in sorted(self.functions):
            f = self.functions[key]
            if f.is_freestanding():
                emit(f.wit(self, key), bool(f.docs.contents))
        out.append("}")
        return "".join(out)


@dataclass(eq=False)
class TypeDef:
    """A named or anonymous type definition, optionally owned by a world or interface."""

    name: str | None = None
    kind: Any = None
    owner: Any = field(default=None, repr=False)
    docs: Docs = field(default_factory=Docs)

    def root(self) -> TypeDef:
        """Follow type aliases to the TypeDef they ultimately refer to."""
        t = self
        while isinstance(t.kind, TypeDef):
            t = t.kind
        return t

    def package(self) -> Package | None:
        """Return the package of this type's owner, if any."""
        if isinstance(self.owner, (Interface, World)):
            return self.owner.package
        return None

    def size(self) -> int:
        return self.kind.size()

    def align(self) -> int:
        return self.kind.align()

    def _owner_functions(self) -> Iterator[Function]:
        if self.owner is None:
            return iter(())
        return self.owner.all_functions()

    def constructor(self) -> Function | None:
        """Return the constructor of this resource type, or None."""
        for f in self._owner_functions():
            if isinstance(f.kind, Constructor) and f.kind.type is self:
                return f
        return None

    def methods(self) -> list[Function]:
        """Return the methods of this resource type."""
        return [
            f for f in self._owner_functions()
            if isinstance(f.kind, Method) and f.kind.type is self
        ]

    def static_functions(self) -> list[Function]:
        """Return the static functions of this resource type."""
        return [
            f for f in self._owner_functions()
            if isinstance(f.kind, Static) and f.kind.type is self
        ]

    def wit_kind(self) -> str:
        return self.root().kind.wit_kind()

    def wit(self, ctx: Any = None, name: str = "") -> str:
        if self.name is not None and not name:
            name = self.name

        if ctx is None:
            return self.kind.wit(None, name)

        if isinstance(ctx, TypeDef):
            # This type is referenced from another definition: alias or import.
            if self.owner is ctx.owner and self.name is not None:
                return f"type {escape(name)} = {escape(self.name)}"
            owner_name = _relative_name(self.owner, ctx.package())
            if self.name is not None and self.name != name:
                return f"use {owner_name}.{{{escape(self.name)} as {escape(name)}}};"
            return f"use {owner_name}.{{{escape(name)}}};"

        if isinstance(ctx, (World, Interface)):
            out = self.docs.wit(ctx, "") + self.kind.wit(self, name)
            constructor = self.constructor()
            methods = sorted(self.methods(), key=lambda f: f.name)
            statics = sorted(self.static_functions(), key=lambda f: f.name)
            if constructor is not None or methods or statics:
                out += " {\n"
                if constructor is not None:
                    out += indent(constructor.wit(self, "constructor")) + "\n"
                for f in [*methods, *statics]:
                    if f.docs.contents:
                        out += "\n"
                    out += indent(f.wit(self, "")) + "\n"
                out += "}"
            if not out.endswith(("}", ";")):
                out += ";"
            return out

        if name:
            return escape(name)
        return self.kind.wit(ctx, name)


class FunctionKind:
    """Base class of the kinds of function."""


@dataclass
class Freestanding(FunctionKind):
    """A function that is not a method, static function or constructor."""


@dataclass
class Method(FunctionKind):
    """A method on its associated type; its first parameter is self."""

    type: Any = None


@dataclass
class Static(FunctionKind):
    """A static function of its associated type."""

    type: Any = None


@dataclass
class Constructor(FunctionKind):
    """A constructor for its associated type."""

    type: Any = None


@dataclass
class Param:
    """A parameter to, or a result of, a function. It may be unnamed."""

    name: str = ""
    type: Any = None

    def wit_kind(self) -> str:
        return "param"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        if not self.name:
            return self.type.wit(self, "")
        return f"{self.name}: {self.type.wit(self, '')}"


def _params_wit(params: list[Param], is_method: bool) -> str:
    return ", ".join(
        p.wit(None, "") for p in params if not (is_method and p.name == "self")
    )


@dataclass(eq=False)
class Function:
    """A WIT function: freestanding, method, static or constructor."""

    name: str = ""
    kind: FunctionKind | None = None
    params: list[Param] = field(default_factory=list)
    results: list[Param] = field(default_factory=list)
    docs: Docs = field(default_factory=Docs)

    def is_freestanding(self) -> bool:
        return isinstance(self.kind, Freestanding)

    def is_constructor(self) -> bool:
        return isinstance(self.kind, Constructor)

    def is_method(self) -> bool:
        return isinstance(self.kind, Method)

    def is_static(self) -> bool:
        return isinstance(self.kind, Static)

    def wit_kind(self) -> str:
        return "function"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        if not name:
            name = self.name
            _, dot, after = name.partition(".")
            if dot:
                name = after
        out = self.docs.wit(ctx, "") if ctx is not None else ""
        out += escape(name)
        is_constructor = is_method = False
        if isinstance(self.kind, Constructor):
            out += "("
            is_constructor = True
        elif isinstance(self.kind, (Freestanding, Method)):
            out += ": func("
            is_method = True
        elif isinstance(self.kind, Static):
            out += ": static func("
        out += _params_wit(self.params, is_method) + ")"
        if not is_constructor and self.results:
            results = _params_wit(self.results, False)
            if len(self.results) > 1 or self.results[0].name:
                results = f"({results})"
            out += " -> " + results
        return out + ";"


@dataclass(eq=False)
class Package:
    """A WIT package: a collection of interfaces and worlds under one identifier."""

    name: Ident = field(default_factory=Ident)
    interfaces: dict[str, Interface] = field(default_factory=dict)
    worlds: dict[str, World] = field(default_factory=dict)
    docs: Docs = field(default_factory=Docs)

    def wit_kind(self) -> str:
        return "package"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        out = [self.docs.wit(ctx, ""), "package ", str(self.name), ";\n"]
        for items in (self.interfaces, self.worlds):
            if not items:
                continue
            out.append("\n")
            out.append(
                "\n".join(items[key].wit(self, key) + "\n" for key in sorted(items))
            )
        return "".join(out)


@dataclass(eq=False)
class Resolve:
    """A fully resolved set of WIT packages, worlds, interfaces and types."""

    worlds: list[World] = field(default_factory=list)
    interfaces: list[Interface] = field(default_factory=list)
    type_defs: list[TypeDef] = field(default_factory=list)
    packages: list[Package] = field(default_factory=list)

    def wit_kind(self) -> str:
        return "resolve"

    def wit(self, ctx: Any = None, name: str = "") -> str:
        """Render every package; the result may span several WIT files."""
        return "\n\n".join(p.wit(self, "") for p in self.packages)