from rpncalc.registry import (COMMANDS, OPERATIONS, PROMPT_COMMANDS,
                              names_descriptions, format_help)
from rpncalc.ops import Number, Nop, Arith, Cmp
from rpncalc.commands import Drop, Print


def test_declaration_order():
    assert COMMANDS[0] is Drop
    assert COMMANDS[-1] is Print
    assert len(COMMANDS) == 11
    assert OPERATIONS[0] is Number
    assert OPERATIONS[1] is Arith
    assert OPERATIONS[-2] is Cmp
    assert OPERATIONS[-1] is Nop


def test_names_descriptions():
    triples = names_descriptions(COMMANDS)
    assert len(triples) == len(COMMANDS)
    assert triples[0][:2] == ('D [int]', 'Drop [int]')
    for short_name, name, description in triples + names_descriptions(
            OPERATIONS):
        assert name
        assert description


def test_help_lists_everything():
    text = format_help()
    for short_name, name, description in (names_descriptions(COMMANDS) +
                                          names_descriptions(OPERATIONS) +
                                          list(PROMPT_COMMANDS)):
        assert name in text
        assert description in text
        if short_name is not None:
            assert short_name in text


def test_help_sections():
    lines = format_help().splitlines()
    sections = [line for line in lines if line and not line.startswith(' ')]
    assert sections == ['Commands:', 'Operations:', 'Prompt:']
    assert '  D [int] | Drop [int]' in lines
    assert '  + - * /' in lines
