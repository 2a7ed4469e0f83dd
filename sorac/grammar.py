"""Grammar templates: template types, template names and their alternatives."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Union

from sorac.tokens import TokenName


class SyntaxTemplateType(Enum):
    """Non-terminal kinds that a grammar rule may expand."""

    Empty = auto()
    Type = auto()
    ConstType = auto()
    BasicType = auto()
    PointerTypeSequence = auto()
    ArrayTypeSequence = auto()
    Value = auto()
    Variable = auto()
    Identifier = auto()
    LeftValue = auto()
    RightValue = auto()
    Operator = auto()
    Expresstion = auto()
    Statement = auto()
    StatementSequence = auto()
    SyntaxParseBegin = auto()
    SyntaxParseEnd = auto()
    Function = auto()
    ArgDeclSequence = auto()
    ArgSequence = auto()


class SyntaxTemplateName(Enum):
    """Names of the individual grammar alternatives."""

    Empty = auto()
    EmptyStatementSequence = auto()
    EmptyArgDeclSequence = auto()
    EmptyArgSequence = auto()
    EmptyConstType = auto()
    EmptyPointerTypeSequence = auto()
    EmptyArrayTypeSequence = auto()

    Operation = auto()
    FunctionCall = auto()
    FunctionReturn = auto()
    BracketExpression = auto()
    ValueExpression = auto()
    ExpressionStament = auto()
    VariableDecl = auto()
    VariableDeclStatement = auto()
    VariableImplStatement = auto()
    FunctionDeclStatement = auto()
    FunctionImplStatement = auto()
    BraceStament = auto()
    ArgDeclSequence = auto()
    ArgDecl = auto()
    ArgSequence = auto()
    Arg = auto()
    Statement = auto()
    StatementSequence = auto()
    SyntaxParseBegin = auto()
    SyntaxParseEnd = auto()
    Type = auto()
    ConstType = auto()
    BasicType = auto()
    PointerTypeSequence = auto()
    ArrayTypeSequence = auto()

    Identifier = auto()
    LeftValue = auto()
    RightValue = auto()

    # Templates that expand straight to token names.
    Value = auto()
    VariableDeclValue = auto()
    TypeValue = auto()
    ConstTypeValue = auto()
    IdentifierValue = auto()
    OperatorValue = auto()
    LeftValueValue = auto()
    RightValueValue = auto()

    # Marks the end of a template expansion.
    TemplateEnd = auto()


SyntaxUnit = Union[TokenName, SyntaxTemplateType]


@dataclass
class SyntaxSequence:
    """A named grammar alternative: an ordered run of tokens and templates."""

    name: SyntaxTemplateName = SyntaxTemplateName.Empty
    units: tuple[SyntaxUnit, ...] = ()

    def __post_init__(self) -> None:
        self.units = tuple(self.units)

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[SyntaxUnit]:
        return iter(self.units)

    def __getitem__(self, index):
        return self.units[index]


@dataclass
class TemplateNameMetaData:
    """Where a template was expanded, and how many units it expanded to."""

    name: SyntaxTemplateName
    position: int
    size: int


@dataclass
class SyntaxMetaSequence(SyntaxSequence):
    """A syntax sequence that also records the templates expanded into it."""

    template_name_meta_data: list[TemplateNameMetaData] = field(default_factory=list)


_T = SyntaxTemplateType
_N = SyntaxTemplateName
_K = TokenName


def _seq(name: SyntaxTemplateName, *units: SyntaxUnit) -> SyntaxSequence:
    return SyntaxSequence(name, units)


GRAMMAR: dict[SyntaxTemplateType, tuple[SyntaxSequence, ...]] = {
    _T.SyntaxParseBegin: (
        _seq(_N.StatementSequence, _T.StatementSequence, _K.End),
    ),
    _T.Empty: (
        _seq(_N.Empty, _K.Empty),
    ),
    # (const) type (const) * (const)
    _T.Type: (
        _seq(_N.Type, _T.ConstType, _T.BasicType, _T.ConstType,
             _T.PointerTypeSequence, _T.ConstType),
    ),
    _T.ConstType: (
        _seq(_N.ConstTypeValue, _K.Const),
        _seq(_N.EmptyConstType, _T.Empty),
    ),
    _T.BasicType: (
        _seq(_N.TypeValue, _K.Int),
        _seq(_N.TypeValue, _K.Long),
        _seq(_N.TypeValue, _K.Float),
        _seq(_N.TypeValue, _K.Bool),
        _seq(_N.TypeValue, _K.Char),
        _seq(_N.TypeValue, _K.String),
        _seq(_N.TypeValue, _K.Void),
        _seq(_N.TypeValue, _K.Const),
        _seq(_N.TypeValue, _K.Long, _K.Long),
    ),
    _T.PointerTypeSequence: (
        _seq(_N.PointerTypeSequence, _K.Mul, _T.PointerTypeSequence),
        _seq(_N.EmptyPointerTypeSequence, _T.Empty),
    ),
    _T.ArrayTypeSequence: (
        _seq(_N.ArrayTypeSequence, _K.LeftSquare, _K.RightSquare, _T.ArrayTypeSequence),
        _seq(_N.ArrayTypeSequence, _K.LeftSquare, _T.Value, _K.RightSquare,
             _T.ArrayTypeSequence),
        _seq(_N.EmptyArrayTypeSequence, _T.Empty),
    ),
    _T.Value: (
        _seq(_N.LeftValue, _T.LeftValue),
        _seq(_N.RightValue, _T.RightValue),
    ),
    _T.Variable: (
        _seq(_N.VariableDeclValue, _T.Type, _T.Identifier, _T.ArrayTypeSequence),
    ),
    _T.Identifier: (
        _seq(_N.IdentifierValue, _K.Identifier),
    ),
    _T.LeftValue: (
        _seq(_N.Identifier, _T.Identifier),
    ),
    _T.RightValue: (
        _seq(_N.RightValueValue, _K.String),
        _seq(_N.RightValueValue, _K.Number),
    ),
    _T.Operator: tuple(
        _seq(_N.OperatorValue, op)
        for op in (
            _K.Add, _K.Sub, _K.Mul, _K.Div, _K.Mod, _K.Assign, _K.And, _K.Or,
            _K.Not, _K.Ger, _K.Geq, _K.Leq, _K.Les, _K.Equ, _K.Neq,
            _K.DoubleLeft, _K.DoubleRight, _K.Comma,
        )
    ),
    _T.Expresstion: (
        _seq(_N.Operation, _T.Value, _T.Operator, _T.Expresstion),
        _seq(_N.FunctionCall, _T.Identifier, _K.LeftBracket, _T.ArgSequence,
             _K.RightBracket),
        _seq(_N.BracketExpression, _K.LeftBracket, _T.Expresstion, _K.RightBracket),
        _seq(_N.ValueExpression, _T.Value),
    ),
    _T.Statement: (
        _seq(_N.ExpressionStament, _T.Expresstion, _K.Semicolon),
        _seq(_N.VariableDeclStatement, _T.Variable, _K.Semicolon),
        _seq(_N.VariableImplStatement, _T.Variable, _K.Assign, _T.Expresstion,
             _K.Semicolon),
        _seq(_N.FunctionDeclStatement, _T.Type, _T.Identifier, _K.LeftBracket,
             _T.ArgDeclSequence, _K.RightBracket, _K.Semicolon),
        _seq(_N.FunctionImplStatement, _T.Type, _T.Identifier, _K.LeftBracket,
             _T.ArgDeclSequence, _K.RightBracket, _K.LeftBrace,
             _T.StatementSequence, _K.RightBrace),
        _seq(_N.FunctionReturn, _K.Return, _T.Expresstion, _K.Semicolon),
        # A braced block; it carries the same name as a variable definition.
        _seq(_N.VariableImplStatement, _K.LeftBrace, _T.Statement, _K.RightBrace),
    ),
    _T.StatementSequence: (
        _seq(_N.Statement, _T.Statement, _T.StatementSequence),
        _seq(_N.EmptyStatementSequence, _T.Empty),
    ),
    _T.ArgDeclSequence: (
        _seq(_N.ArgDeclSequence, _T.Variable, _K.Comma, _T.ArgDeclSequence),
        _seq(_N.ArgDecl, _T.Variable),
        _seq(_N.EmptyArgDeclSequence, _T.Empty),
    ),
    _T.ArgSequence: (
        _seq(_N.ArgSequence, _T.Value, _K.Comma, _T.ArgSequence),
        _seq(_N.Arg, _T.Value),
        _seq(_N.EmptyArgSequence, _T.Empty),
    ),
}


def alternatives(template_type: SyntaxTemplateType) -> tuple[SyntaxSequence, ...]:
    """Return the alternatives of a template type, in grammar order."""
    try:
        return GRAMMAR[template_type]
    except KeyError:
        raise ValueError(f"template {template_type.name} has no grammar rules") from None


def is_token(unit: SyntaxUnit) -> bool:
    """Return True if the unit is a terminal token name."""
    return isinstance(unit, TokenName)


def is_template(unit: SyntaxUnit) -> bool:
    """Return True if the unit is a template to be expanded."""
    return isinstance(unit, SyntaxTemplateType)


def unit_name(unit: SyntaxUnit) -> str:
    """Return the bare name of a token or template unit."""
    if not isinstance(unit, (TokenName, SyntaxTemplateType)):
        raise TypeError(f"not a syntax unit: {unit!r}")
    return unit.name