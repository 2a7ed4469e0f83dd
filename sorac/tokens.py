"""Token vocabulary: token names, categories, the registered token table and colours."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenName(Enum):
    """Every token name known to the tokenizer, in category order.

    A category marker (``Separator``, ``BasicType``, ...) is followed by the
    names that belong to it; the order is significant for ``category_of``.
    """

    Identifier = auto()
    Number = auto()
    String = auto()

    Separator = auto()
    Semicolon = auto()
    Space = auto()
    LeftBracket = auto()
    RightBracket = auto()
    LeftBrace = auto()
    RightBrace = auto()
    LeftSquare = auto()
    RightSquare = auto()
    DoubleQuote = auto()
    SingleQuote = auto()
    Tab = auto()
    NewLine = auto()
    Slash = auto()
    Backslash = auto()

    BasicType = auto()
    Int = auto()
    Long = auto()
    Float = auto()
    Char = auto()
    Void = auto()
    Bool = auto()
    Const = auto()

    ExtraType = auto()
    Enum = auto()
    Struct = auto()
    Typedef = auto()
    Class = auto()

    Macro = auto()
    Define = auto()
    Include = auto()
    Pragma = auto()

    Operator = auto()
    Assign = auto()
    Add = auto()
    Sub = auto()
    Mul = auto()
    Div = auto()
    Mod = auto()
    And = auto()
    Or = auto()
    Xor = auto()
    Not = auto()
    Les = auto()
    Ger = auto()
    Leq = auto()
    Geq = auto()
    Equ = auto()
    Neq = auto()
    Question = auto()
    Comma = auto()
    Dot = auto()
    Colon = auto()
    Tilde = auto()
    DoubleLeft = auto()
    DoubleRight = auto()
    DoubleColon = auto()

    Grammar = auto()
    Using = auto()
    Namespace = auto()

    Condition = auto()
    If = auto()
    Else = auto()
    While = auto()
    For = auto()
    Do = auto()
    Switch = auto()
    Case = auto()
    Default = auto()
    Return = auto()
    Break = auto()
    Continue = auto()

    End = auto()
    Empty = auto()
    Unknown = auto()


class TokenType(Enum):
    """Coarse token classes."""

    Identifier = auto()
    Number = auto()
    String = auto()
    Separator = auto()
    BasicType = auto()
    ExtraType = auto()
    Macro = auto()
    Operator = auto()
    Grammar = auto()
    Condition = auto()
    Unknown = auto()


class LengthState(Enum):
    """Whether a token has a fixed pattern or a variable-length one."""

    FIXED = auto()
    DYNAMIC = auto()
    DYNAMIC_WAITING = auto()
    DYNAMIC_FINISHED = auto()


@dataclass
class Token:
    """A token: its text pattern, its name and the category it stands for."""

    pattern: str = ""
    name: TokenName = TokenName.Unknown
    placeholder: TokenName = TokenName.Unknown
    length_state: LengthState = LengthState.FIXED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.pattern == other.pattern and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.pattern, self.name))


def _fixed(pattern: str, name: TokenName, placeholder: TokenName) -> Token:
    return Token(pattern, name, placeholder, LengthState.FIXED)


_N = TokenName

TOKENS: tuple[Token, ...] = (
    Token("[identifier]", _N.Identifier, _N.Identifier, LengthState.DYNAMIC),
    Token("[number]", _N.Number, _N.Number, LengthState.DYNAMIC),
    Token("[string]", _N.String, _N.String, LengthState.DYNAMIC),
    _fixed(";", _N.Semicolon, _N.Separator),
    _fixed(" ", _N.Space, _N.Separator),
    _fixed("(", _N.LeftBracket, _N.Separator),
    _fixed(")", _N.RightBracket, _N.Separator),
    _fixed("{", _N.LeftBrace, _N.Separator),
    _fixed("}", _N.RightBrace, _N.Separator),
    _fixed("[", _N.LeftSquare, _N.Separator),
    _fixed("]", _N.RightSquare, _N.Separator),
    _fixed('"', _N.DoubleQuote, _N.Separator),
    _fixed("'", _N.SingleQuote, _N.Separator),
    # Tabs are treated as spaces.
    _fixed("\t", _N.Space, _N.Separator),
    _fixed("\n", _N.NewLine, _N.Separator),
    _fixed("/", _N.Slash, _N.Separator),
    _fixed("\\", _N.Backslash, _N.Separator),
    _fixed("int", _N.Int, _N.BasicType),
    _fixed("long", _N.Long, _N.BasicType),
    _fixed("float", _N.Float, _N.BasicType),
    _fixed("char", _N.Char, _N.BasicType),
    _fixed("void", _N.Void, _N.BasicType),
    _fixed("bool", _N.Bool, _N.BasicType),
    _fixed("const", _N.Const, _N.BasicType),
    _fixed("enum", _N.Enum, _N.ExtraType),
    _fixed("struct", _N.Struct, _N.ExtraType),
    _fixed("typedef", _N.Typedef, _N.ExtraType),
    _fixed("class", _N.Class, _N.ExtraType),
    _fixed("#define", _N.Define, _N.Macro),
    _fixed("#include", _N.Include, _N.Macro),
    _fixed("#pragma", _N.Pragma, _N.Macro),
    _fixed("=", _N.Assign, _N.Operator),
    _fixed("+", _N.Add, _N.Operator),
    _fixed("-", _N.Sub, _N.Operator),
    _fixed("*", _N.Mul, _N.Operator),
    _fixed("/", _N.Div, _N.Operator),
    _fixed("%", _N.Mod, _N.Operator),
    _fixed("&", _N.And, _N.Operator),
    _fixed("|", _N.Or, _N.Operator),
    _fixed("^", _N.Xor, _N.Operator),
    _fixed("!", _N.Not, _N.Operator),
    _fixed("<", _N.Les, _N.Operator),
    _fixed(">", _N.Ger, _N.Operator),
    _fixed("<=", _N.Leq, _N.Operator),
    _fixed(">=", _N.Geq, _N.Operator),
    _fixed("==", _N.Equ, _N.Operator),
    _fixed("!=", _N.Neq, _N.Operator),
    _fixed("?", _N.Question, _N.Operator),
    _fixed(",", _N.Comma, _N.Operator),
    _fixed(".", _N.Dot, _N.Operator),
    _fixed(":", _N.Colon, _N.Operator),
    _fixed("~", _N.Tilde, _N.Operator),
    _fixed("<<", _N.DoubleLeft, _N.Operator),
    _fixed(">>", _N.DoubleRight, _N.Operator),
    _fixed("::", _N.DoubleColon, _N.Operator),
    _fixed("using", _N.Using, _N.Grammar),
    _fixed("namespace", _N.Namespace, _N.Grammar),
    _fixed("if", _N.If, _N.Condition),
    _fixed("else", _N.Else, _N.Condition),
    _fixed("while", _N.While, _N.Condition),
    _fixed("for", _N.For, _N.Condition),
    _fixed("do", _N.Do, _N.Condition),
    _fixed("switch", _N.Switch, _N.Condition),
    _fixed("case", _N.Case, _N.Condition),
    _fixed("default", _N.Default, _N.Condition),
    _fixed("return", _N.Return, _N.Condition),
    _fixed("break", _N.Break, _N.Condition),
    _fixed("continue", _N.Continue, _N.Condition),
    _fixed("", _N.End, _N.End),
    _fixed("", _N.Empty, _N.Empty),
)

# Order in which categories are tried when several tokens match.
PATTERN_PRIORITY: tuple[TokenName, ...] = (
    _N.BasicType,
    _N.ExtraType,
    _N.Macro,
    _N.Operator,
    _N.Grammar,
    _N.Condition,
    _N.Identifier,
    _N.Number,
    _N.String,
    _N.Separator,
)

DYNAMIC_LENGTH_NAMES: frozenset[TokenName] = frozenset(
    {_N.Identifier, _N.Number, _N.String}
)

# Each category spans the names from its marker up to (not including) the next.
_CATEGORY_RANGES: dict[TokenName, tuple[TokenName, TokenName]] = {
    _N.Identifier: (_N.Identifier, _N.Separator),
    _N.Separator: (_N.Separator, _N.BasicType),
    _N.BasicType: (_N.BasicType, _N.ExtraType),
    _N.ExtraType: (_N.ExtraType, _N.Macro),
    _N.Macro: (_N.Macro, _N.Operator),
    _N.Operator: (_N.Operator, _N.Grammar),
    _N.Grammar: (_N.Grammar, _N.Condition),
    _N.Condition: (_N.Condition, _N.End),
}

TYPE_COLORS: dict[TokenName, int] = {
    _N.Macro: 35,
    _N.ExtraType: 36,
    _N.BasicType: 36,
    _N.Operator: 37,
    _N.Separator: 37,
    _N.Identifier: 33,
    _N.Number: 32,
    _N.String: 33,
}

_ORDER: dict[TokenName, int] = {name: index for index, name in enumerate(TokenName)}


def _in_range(name: TokenName, bounds: tuple[TokenName, TokenName]) -> bool:
    first, end = bounds
    return _ORDER[first] <= _ORDER[name] < _ORDER[end]


def category_of(name: TokenName) -> TokenName | None:
    """Return the category marker a name belongs to, or None if it has none."""
    for category, bounds in _CATEGORY_RANGES.items():
        if _in_range(name, bounds):
            return category
    return None


def tokens_in_category(category: TokenName) -> tuple[TokenName, ...]:
    """Return every name in a category, the marker itself first."""
    try:
        bounds = _CATEGORY_RANGES[category]
    except KeyError:
        raise ValueError(f"{category.name} is not a token category") from None
    return tuple(name for name in TokenName if _in_range(name, bounds))


def find_tokens(pattern: str) -> list[Token]:
    """Return the registered tokens with exactly this pattern, in table order."""
    return [token for token in TOKENS if token.pattern == pattern]


def color_of(name: TokenName) -> int | None:
    """Return the terminal colour code for a name, falling back to its category."""
    if name in TYPE_COLORS:
        return TYPE_COLORS[name]
    category = category_of(name)
    if category is None:
        return None
    return TYPE_COLORS.get(category)