import pytest

from sorac.grammar import (
    GRAMMAR,
    SyntaxMetaSequence,
    SyntaxSequence,
    SyntaxTemplateName,
    SyntaxTemplateType,
    TemplateNameMetaData,
    alternatives,
    is_template,
    is_token,
    unit_name,
)
from sorac.tokens import TokenName


def test_parse_begin_ends_with_end_token():
    (rule,) = alternatives(SyntaxTemplateType.SyntaxParseBegin)
    assert rule.name is SyntaxTemplateName.StatementSequence
    assert rule.units == (SyntaxTemplateType.StatementSequence, TokenName.End)


def test_basic_types_all_type_values():
    rules = alternatives(SyntaxTemplateType.BasicType)
    assert len(rules) == 9
    assert all(rule.name is SyntaxTemplateName.TypeValue for rule in rules)
    assert rules[-1].units == (TokenName.Long, TokenName.Long)


def test_statement_alternative_order():
    names = [rule.name for rule in alternatives(SyntaxTemplateType.Statement)]
    assert names[0] is SyntaxTemplateName.ExpressionStament
    assert names[4] is SyntaxTemplateName.FunctionImplStatement
    assert names[-1] is SyntaxTemplateName.VariableImplStatement


def test_function_impl_shape():
    rule = alternatives(SyntaxTemplateType.Statement)[4]
    assert rule.units == (
        SyntaxTemplateType.Type,
        SyntaxTemplateType.Identifier,
        TokenName.LeftBracket,
        SyntaxTemplateType.ArgDeclSequence,
        TokenName.RightBracket,
        TokenName.LeftBrace,
        SyntaxTemplateType.StatementSequence,
        TokenName.RightBrace,
    )


def test_operator_rules_are_single_tokens():
    rules = alternatives(SyntaxTemplateType.Operator)
    assert all(len(rule) == 1 and is_token(rule[0]) for rule in rules)
    assert rules[0].units == (TokenName.Add,)
    assert rules[-1].units == (TokenName.Comma,)


@pytest.mark.parametrize(
    "template_type",
    [SyntaxTemplateType.Function, SyntaxTemplateType.SyntaxParseEnd],
)
def test_types_without_rules_raise(template_type):
    with pytest.raises(ValueError):
        alternatives(template_type)


def test_every_referenced_template_has_rules():
    for rules in GRAMMAR.values():
        for rule in rules:
            for unit in rule:
                if is_template(unit):
                    assert len(alternatives(unit)) >= 1


def test_every_unit_is_token_or_template():
    for rules in GRAMMAR.values():
        for rule in rules:
            for unit in rule:
                assert is_token(unit) != is_template(unit)


def test_empty_sequences_expand_to_empty_template():
    for template_type in (
        SyntaxTemplateType.ConstType,
        SyntaxTemplateType.PointerTypeSequence,
        SyntaxTemplateType.ArrayTypeSequence,
        SyntaxTemplateType.StatementSequence,
        SyntaxTemplateType.ArgDeclSequence,
        SyntaxTemplateType.ArgSequence,
    ):
        last = alternatives(template_type)[-1]
        assert last.name.name.startswith("Empty")
        assert last.units == (SyntaxTemplateType.Empty,)


def test_is_token_and_is_template():
    assert is_token(TokenName.Int) is True
    assert is_template(TokenName.Int) is False
    assert is_template(SyntaxTemplateType.Value) is True
    assert is_token(SyntaxTemplateType.Value) is False


def test_unit_name():
    assert unit_name(TokenName.Semicolon) == "Semicolon"
    assert unit_name(SyntaxTemplateType.Expresstion) == "Expresstion"
    with pytest.raises(TypeError):
        unit_name("Semicolon")


def test_sequence_defaults_and_container_behaviour():
    seq = SyntaxSequence()
    assert seq.name is SyntaxTemplateName.Empty
    assert len(seq) == 0
    seq = SyntaxSequence(SyntaxTemplateName.Arg, [SyntaxTemplateType.Value])
    assert seq.units == (SyntaxTemplateType.Value,)
    assert list(seq) == [SyntaxTemplateType.Value]


def test_meta_sequence_keeps_units_and_metadata():
    base = alternatives(SyntaxTemplateType.Variable)[0]
    meta = SyntaxMetaSequence(base.name, base.units)
    assert meta.units == base.units
    assert meta.template_name_meta_data == []
    entry = TemplateNameMetaData(SyntaxTemplateName.Type, position=0, size=5)
    meta.template_name_meta_data.append(entry)
    assert meta.template_name_meta_data[0].size == 5
    assert SyntaxMetaSequence().template_name_meta_data == []