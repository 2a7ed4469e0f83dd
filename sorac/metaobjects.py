"""Semantic objects built from parsed source: types and expressions."""

from __future__ import annotations

from dataclasses import dataclass, field

from sorac.tokens import TokenName

# Width in bytes of each basic type that can be turned into a TypeInfo.
TYPE_WIDTHS: dict[TokenName, int] = {
    TokenName.Int: 8,
}


@dataclass
class TypeInfo:
    """A resolved type: its name, width, pointer depth, constness and array shape."""

    name: str = ""
    width: int = 0
    pointer_level: int = 0
    is_const: bool = False
    array_dims: list[int] = field(default_factory=list)


@dataclass
class Expression:
    """A named expression."""

    name: str = ""


def make_type(token_name: TokenName) -> TypeInfo:
    """Build the TypeInfo for a basic type token; raise ValueError for unknown ones."""
    try:
        width = TYPE_WIDTHS[token_name]
    except KeyError:
        raise ValueError(f"no known width for type {token_name.name}") from None
    return TypeInfo(width=width)