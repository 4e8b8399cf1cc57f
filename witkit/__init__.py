"""Decoding, Canonical ABI sizing and WIT text rendering for resolved WebAssembly Interface Types."""

__version__ = "0.1.0"

__all__ = ["codec", "ident", "primitives", "resolve", "text", "types"]