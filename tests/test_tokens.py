import pytest

from sorac.tokens import (
    DYNAMIC_LENGTH_NAMES,
    TOKENS,
    LengthState,
    Token,
    TokenName,
    category_of,
    color_of,
    find_tokens,
    tokens_in_category,
)


def test_category_of_basic_type_member():
    assert category_of(TokenName.Int) is TokenName.BasicType


def test_category_of_number_falls_in_identifier_range():
    assert category_of(TokenName.Number) is TokenName.Identifier


@pytest.mark.parametrize("name", [TokenName.End, TokenName.Empty, TokenName.Unknown])
def test_category_of_uncategorised(name):
    assert category_of(name) is None


def test_fixed_tokens_placeholder_matches_category():
    for token in TOKENS:
        if token.length_state is LengthState.FIXED and token.name not in (
            TokenName.End,
            TokenName.Empty,
        ):
            assert category_of(token.name) is token.placeholder


def test_dynamic_tokens_are_identifier_number_string():
    dynamic = {t.name for t in TOKENS if t.length_state is LengthState.DYNAMIC}
    assert dynamic == set(DYNAMIC_LENGTH_NAMES)
    assert dynamic == set(tokens_in_category(TokenName.Identifier))
    for name in dynamic:
        assert category_of(name) is TokenName.Identifier


def test_tokens_in_identifier_category():
    assert tokens_in_category(TokenName.Identifier) == (
        TokenName.Identifier,
        TokenName.Number,
        TokenName.String,
    )


def test_tokens_in_condition_category_stop_before_end():
    names = tokens_in_category(TokenName.Condition)
    assert names[0] is TokenName.Condition
    assert TokenName.Return in names
    assert TokenName.End not in names


def test_every_category_member_maps_back():
    for category in (TokenName.Macro, TokenName.Operator, TokenName.Grammar):
        for name in tokens_in_category(category):
            assert category_of(name) is category


def test_tokens_in_category_rejects_non_category():
    with pytest.raises(ValueError):
        tokens_in_category(TokenName.Int)


def test_find_tokens_slash_has_two_meanings():
    assert [t.name for t in find_tokens("/")] == [TokenName.Slash, TokenName.Div]


def test_find_tokens_empty_pattern():
    assert [t.name for t in find_tokens("")] == [TokenName.End, TokenName.Empty]


def test_find_tokens_keyword():
    (token,) = find_tokens("int")
    assert token.name is TokenName.Int
    assert token.placeholder is TokenName.BasicType


def test_find_tokens_tab_is_space():
    assert [t.name for t in find_tokens("\t")] == [TokenName.Space]


def test_find_tokens_unknown_pattern():
    assert find_tokens("@@") == []


def test_token_equality_ignores_placeholder_and_state():
    a = Token("x", TokenName.Identifier, TokenName.Identifier, LengthState.DYNAMIC)
    b = Token("x", TokenName.Identifier, TokenName.Unknown, LengthState.FIXED)
    assert a == b
    assert hash(a) == hash(b)


def test_token_inequality_on_name():
    assert Token("/", TokenName.Slash) != Token("/", TokenName.Div)


def test_token_not_equal_to_other_types():
    assert (Token("int", TokenName.Int) == "int") is False


def test_default_token():
    token = Token()
    assert token.pattern == ""
    assert token.name is TokenName.Unknown
    assert token.placeholder is TokenName.Unknown
    assert token.length_state is LengthState.FIXED


def test_color_of_direct_entries():
    assert color_of(TokenName.Macro) == 35
    assert color_of(TokenName.Number) == 32
    assert color_of(TokenName.Identifier) == 33


def test_color_of_uses_category():
    assert color_of(TokenName.Define) == color_of(TokenName.Macro)
    assert color_of(TokenName.Int) == color_of(TokenName.BasicType)


def test_color_of_without_colour():
    assert color_of(TokenName.If) is None
    assert color_of(TokenName.End) is None