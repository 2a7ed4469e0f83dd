"""Concrete syntax tree built from an expanded grammar sequence and a token list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from sorac.grammar import SyntaxMetaSequence, SyntaxTemplateName, TemplateNameMetaData
from sorac.tokens import Token, TokenName

NodeValue = Union[TokenName, SyntaxTemplateName]

TEMPLATE_FRIENDLY_NAMES: dict[SyntaxTemplateName, str] = {
    SyntaxTemplateName.SyntaxParseBegin: "安安开始读代码啦(๑•̀ㅂ•́)و",
    SyntaxTemplateName.SyntaxParseEnd: "安安读完咯！(≧∇≦)ﾉ♪",
    SyntaxTemplateName.FunctionImplStatement: "函数定义喵awa",
    SyntaxTemplateName.Operation: "操作符来咯→",
    SyntaxTemplateName.Empty: "空空哒>w<",
    SyntaxTemplateName.EmptyStatementSequence: "空语句序列呜0w0",
    SyntaxTemplateName.EmptyArgDeclSequence: "空参数声明唉awa",
    SyntaxTemplateName.FunctionCall: "函数调用呀(๑•̀ㅂ•́)",
    SyntaxTemplateName.FunctionReturn: "返回语句呢owo",
    SyntaxTemplateName.BracketExpression: "括号表达式哇awa",
    SyntaxTemplateName.ValueExpression: "值表达式哦0w0",
    SyntaxTemplateName.ExpressionStament: "表达式语句哟(๑• . •๑)",
    SyntaxTemplateName.VariableDeclStatement: "变量声明啦>w<",
    SyntaxTemplateName.VariableImplStatement: "变量实现咯awa",
    SyntaxTemplateName.FunctionDeclStatement: "函数声明啦0w0",
    SyntaxTemplateName.BraceStament: "大括号语句(´,,•ω•,,)♡",
    SyntaxTemplateName.ArgDeclSequence: "参数声明序列~>w<",
    SyntaxTemplateName.ArgDecl: "参数声明啦awa",
    SyntaxTemplateName.ArgSequence: "参数序列呢0w0",
    SyntaxTemplateName.Arg: "参数呀(๑˃̵ᴗ˂̵)",
    SyntaxTemplateName.Statement: "语句哦owo",
    SyntaxTemplateName.StatementSequence: "语句序列啦awa",
    SyntaxTemplateName.TypeValue: "类型值~>w<",
    SyntaxTemplateName.LeftValue: "左值表达式(՞˶･֊･˶՞)",
    SyntaxTemplateName.RightValue: "右值表达式(๑•́ ₃ •̀๑)",
    SyntaxTemplateName.RightValueValue: "右值内容喵awa",
    SyntaxTemplateName.IdentifierValue: "标识符值~>w<",
    SyntaxTemplateName.Identifier: "标识符呀0w0",
}

TOKEN_FRIENDLY_NAMES: dict[TokenName, str] = {
    TokenName.LeftBracket: "左括号(=´ω`=)♪",
    TokenName.RightBracket: "右括号(,,・ω・,,)",
    TokenName.LeftBrace: "左大括号qwq",
    TokenName.RightBrace: "右大括号qwq",
    TokenName.Int: "整数类型喵awa",
    TokenName.Identifier: "标识符呀0w0",
    TokenName.Semicolon: "分号呢(๑•̀ㅂ•́)",
    TokenName.Return: "返回关键字啦awa",
    TokenName.Number: "数字~>w<",
    TokenName.String: "字符串呀0w0",
    TokenName.End: "结束符啦(๑˃̵ᴗ˂̵)",
    TokenName.Empty: "空空哒！",
}

# Templates that expand to nothing: they receive an Empty token child at once.
_EMPTY_TEMPLATES = frozenset(
    {
        SyntaxTemplateName.Empty,
        SyntaxTemplateName.EmptyArgDeclSequence,
        SyntaxTemplateName.EmptyArgSequence,
        SyntaxTemplateName.EmptyStatementSequence,
        SyntaxTemplateName.EmptyPointerTypeSequence,
        SyntaxTemplateName.EmptyArrayTypeSequence,
        SyntaxTemplateName.EmptyConstType,
    }
)

_TOKEN_RGB = (135, 206, 250)
_TEMPLATE_RGB = (255, 192, 203)
_RESET = "\033[0m"


def friendly_name(value: NodeValue) -> str:
    """Return the playful display name of a token or template, or its plain name."""
    if isinstance(value, SyntaxTemplateName):
        return TEMPLATE_FRIENDLY_NAMES.get(value, value.name)
    if isinstance(value, TokenName):
        return TOKEN_FRIENDLY_NAMES.get(value, value.name)
    raise TypeError(f"not a token or template name: {value!r}")


def _rgb(red: int, green: int, blue: int) -> str:
    return f"\033[38;2;{red};{green};{blue}m\033[48;2;0;0;0m"


@dataclass
class Node:
    """A tree node: a template with the number of children it expects, or a token."""

    value: NodeValue
    size: int = 0
    parent: Node | None = field(default=None, repr=False, compare=False)
    children: list[Node] = field(default_factory=list)

    def add_child(self, value: NodeValue, size: int = 0) -> Node:
        child = Node(value, size, self)
        self.children.append(child)
        return child


@dataclass
class ParseContext:
    """The expanded grammar sequence and the tokens it was matched against."""

    sequence: SyntaxMetaSequence
    tokens: list[Token | TokenName] = field(default_factory=list)


def _token_name(token: Token | TokenName) -> TokenName:
    return token.name if isinstance(token, Token) else token


class ConcreteSyntaxTree:
    """Builds a concrete syntax tree from template expansion records and tokens."""

    def __init__(self, context: ParseContext) -> None:
        self.context = context
        self.root = Node(SyntaxTemplateName.Empty)
        self._current = self.root
        self._read_pending = False
        self._read_position = 0

    def parse(self) -> Node:
        """Build the tree and return its root."""
        meta: list[TemplateNameMetaData] = self.context.sequence.template_name_meta_data
        if not meta:
            raise ValueError("the syntax sequence records no templates")

        self._read_pending = False
        self._read_position = 0
        first, *rest = meta
        self.root = Node(first.name, first.size)
        self._current = self.root

        for data in rest:
            self._add_node(data)

        # A trailing template end has no following template to trigger reading,
        # so the last token is pulled in here.
        self._read_tokens_to(self._read_position + 1)
        return self.root

    def render(self, moe: bool = False) -> str:
        """Return the tree drawn with box lines and terminal colours."""
        lines = ["ConcreteSyntaxTree\n"]
        lines.extend(self._render(self.root, "", True, moe))
        return "".join(lines)

    def _render(self, node: Node, prefix: str, is_last: bool, moe: bool) -> Iterable[str]:
        if is_last:
            head, child_prefix = prefix + "└── ", prefix + "    "
        else:
            head, child_prefix = prefix + "├── ", prefix + "│   "

        is_token = isinstance(node.value, TokenName)
        if moe:
            color = _rgb(*(_TOKEN_RGB if is_token else _TEMPLATE_RGB))
            label = f"\033[32m{color}{friendly_name(node.value)}{_RESET}\n"
        else:
            code = 32 if is_token else 35
            label = f"\033[{code}m{node.value.name}{_RESET}\n"
        yield head + label

        last = len(node.children) - 1
        for index, child in enumerate(node.children):
            yield from self._render(child, child_prefix, index == last, moe)

    def _read_tokens_to(self, position: int) -> None:
        tokens = self.context.tokens
        while self._read_position < position:
            if self._read_position >= len(tokens):
                raise ValueError(
                    f"token list ended at {len(tokens)}, expected a token at "
                    f"position {self._read_position}"
                )
            self._current = self._current.add_child(_token_name(tokens[self._read_position]))
            self._backtrack()
            self._read_position += 1
        self._read_pending = False

    def _backtrack(self) -> None:
        node = self._current
        if node.size > len(node.children):
            return
        while node.parent is not None:
            node = node.parent
            if node.parent is None or node.size > len(node.children):
                break
        self._current = node

    def _add_node(self, data: TemplateNameMetaData) -> None:
        if data.name is SyntaxTemplateName.TemplateEnd:
            self._read_pending = True
            return

        if self._read_pending:
            self._read_tokens_to(data.position)

        self._current = self._current.add_child(data.name, data.size)

        if data.name in _EMPTY_TEMPLATES:
            self._current.add_child(TokenName.Empty)
            self._backtrack()
            self._read_pending = True