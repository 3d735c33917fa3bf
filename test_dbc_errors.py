#!/usr/bin/env python3
"""
Tests for the DBC error taxonomy: syntax errors, incomplete parses and
parse-tree shape errors.
"""

import pytest
from lark import Token, Tree

from dbcforge import parse, parse_partial
from dbcforge.src.dbc_assembler import DocumentAssembler
from dbcforge.src.dbc_errors import (
    DbcError, DbcIncompleteError, DbcStructureError, DbcSyntaxError, ExpectedEmptyError,
    ExpectedRuleError, InvalidDataError, InvalidNumericValueError, NoMoreRulesError,
    RuleNotImplementedError, UnknownRuleError,
)
from dbcforge.src.dbc_ir import MessageId, Node, Version
from dbcforge.src.dbc_parser import DbcTransformer, parse_dbc, parse_dbc_partial


# ----------------------------------------------------------------------------
# Syntax errors
# ----------------------------------------------------------------------------

@pytest.mark.parametrize("text", ["garbage", "BO_ x", '!!! VERSION "1"'])
def test_syntax_error_when_nothing_parses(settings, text):
    with pytest.raises(DbcSyntaxError) as exc_info:
        parse_dbc(text, settings=settings)
    assert exc_info.value.line == 1
    assert isinstance(exc_info.value, DbcError)


def test_syntax_error_reports_position_and_expectations(parser):
    with pytest.raises(DbcSyntaxError) as exc_info:
        parser.parse('VERSION "1"\nBO_ 1 M: x')
    error = exc_info.value
    assert error.line == 2
    assert error.column == 10
    assert "UINT" in error.expected
    assert "line 2" in str(error)
    assert error.context


def test_partial_parse_raises_syntax_error_when_nothing_parses(settings):
    with pytest.raises(DbcSyntaxError):
        parse_dbc_partial("garbage", settings=settings)


# ----------------------------------------------------------------------------
# Incomplete parses
# ----------------------------------------------------------------------------

def test_incomplete_parse_carries_document_and_remainder(settings):
    with pytest.raises(DbcIncompleteError) as exc_info:
        parse_dbc('VERSION "1"\nBU_: A\n!!!', settings=settings)
    error = exc_info.value
    assert error.document.version == Version("1")
    assert error.document.nodes == (Node("A"),)
    assert error.remainder == "\n!!!"
    assert isinstance(error.__cause__, DbcSyntaxError)


def test_partial_parse_returns_remainder(settings):
    document, remainder = parse_dbc_partial('VERSION "1"\nBU_: A\n!!!', settings=settings)
    assert document.version == Version("1")
    assert remainder == "\n!!!"


def test_partial_parse_stops_at_item_boundary(settings):
    text = 'BU_: A\nBO_ 1 M: 8 N\nCM_ "unterminated'
    document, remainder = parse_dbc_partial(text, settings=settings)
    assert [message.message_id for message in document.messages] == [MessageId.standard(1)]
    assert remainder == '\nCM_ "unterminated'


def test_partial_parse_with_truncated_item(settings):
    document, remainder = parse_dbc_partial("BU_: A\nBO_ 1 M: 8 N\nBO_ 2 ", settings=settings)
    assert len(document.messages) == 1
    assert remainder == "\nBO_ 2 "


def test_receiver_list_stops_at_end_of_line(settings):
    text = ('BO_ 1 M: 8 A\n SG_ s : 0|8@1+ (1,0) [0|255] "" A\n'
            'BA_DEF_SGTYPE_ "x" INT 0 1;\n')
    document, remainder = parse_dbc_partial(text, settings=settings)
    assert document.messages[0].signals[0].receivers == ("A",)
    assert remainder == '\nBA_DEF_SGTYPE_ "x" INT 0 1;\n'


def test_node_list_stops_at_end_of_line(settings):
    with pytest.raises(DbcIncompleteError) as exc_info:
        parse_dbc("BU_: A B\nFILTER 1;\n", settings=settings)
    assert exc_info.value.document.nodes == (Node("A"), Node("B"))
    assert exc_info.value.remainder == "\nFILTER 1;\n"


def test_partial_parse_of_complete_input(settings, sample_dbc, sample_document):
    document, remainder = parse_dbc_partial(sample_dbc, settings=settings)
    assert remainder == ""
    assert document == sample_document


def test_parse_aliases(sample_dbc, sample_document):
    assert parse(sample_dbc) == sample_document
    assert parse_partial(sample_dbc) == (sample_document, "")


# ----------------------------------------------------------------------------
# Data errors surfaced by the transformer
# ----------------------------------------------------------------------------

def test_message_id_wider_than_32_bits(parser):
    with pytest.raises(InvalidNumericValueError):
        parser.parse_and_transform("BO_ 4294967296 M: 8 N\n")


@pytest.mark.parametrize("text", [
    'BO_ 1 M: 8 N\n SG_ S : 0|8@1+ (1e400,0) [0|0] "" N\n',
    'BA_ "x" -1e400;',
    'BA_DEF_ "x" FLOAT 0 1e400;',
])
def test_overflowing_numbers_are_rejected(parser, text):
    with pytest.raises(InvalidNumericValueError):
        parser.parse_and_transform(text)


def test_unknown_env_type(parser):
    with pytest.raises(InvalidDataError):
        parser.parse_and_transform('EV_ E: 5 [0|1] "" 0 1 DUMMY_NODE_VECTOR0;')


def test_node_env_var_relation_not_implemented(parser):
    with pytest.raises(RuleNotImplementedError):
        parser.parse_and_transform('BA_REL_ "R" BU_EV_REL_ N E 1;')


# ----------------------------------------------------------------------------
# Parse-tree shape errors
# ----------------------------------------------------------------------------

@pytest.mark.parametrize("tree, error", [
    (Tree("version", [Token("UINT", "1")]), ExpectedRuleError),
    (Tree("environment_variable_data", [Token("IDENT", "X")]), NoMoreRulesError),
    (Tree("nodes", [Token("NODE_LIST", " A"), Token("UINT", "1")]), ExpectedEmptyError),
    (Tree("version", [Tree("mystery", [])]), UnknownRuleError),
    (Tree("message", [Token("UINT", "1"), Token("IDENT", "M"), Token("UINT", "x8")]),
     InvalidNumericValueError),
])
def test_transformer_shape_errors(tree, error):
    with pytest.raises(error) as exc_info:
        DbcTransformer().transform(tree)
    assert isinstance(exc_info.value, DbcStructureError)


def test_expected_rule_error_names_both_sides():
    with pytest.raises(ExpectedRuleError) as exc_info:
        DbcTransformer().transform(Tree("version", [Token("UINT", "1")]))
    assert exc_info.value.expected == "QUOTED_STR"
    assert exc_info.value.found == "UINT"


def test_assembler_rejects_unknown_top_level_rule():
    assembler = DocumentAssembler(DbcTransformer())
    with pytest.raises(UnknownRuleError):
        assembler.assemble(Tree("file", [Tree("mystery", [])]))


def test_assembler_requires_file_root():
    assembler = DocumentAssembler(DbcTransformer())
    with pytest.raises(UnknownRuleError):
        assembler.assemble(Tree("nodes", []))
