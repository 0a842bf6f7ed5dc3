import math

from rpncalc.util import (RPNError, ParseError, FloatParseError, TokenError,
                          StackUnderflow, OutOfBounds, BreakError,
                          wrap_user_errors, format_number, format_stack)

from pytest import raises, mark


@mark.parametrize('number, formatted', [
    (0.0, '   0.000 000 000'),
    (1.0, '   1.000 000 000'),
    (1234.5, '   1 234.500 000 000'),
    (-0.25, '-  0.250 000 000'),
    (123.0, ' 123.000 000 000'),
    (-1000000.0, '-  1 000 000.000 000 000'),
    (1e-10, '   0.000 000 000'),
    (math.nan, ' NaN'),
    (math.inf, ' Inf'),
    (-math.inf, '-Inf'),
])
def test_format_number(number, formatted):
    assert format_number(number) == formatted


def test_format_number_rounds():
    assert format_number(2 / 3) == '   0.666 666 667'


def test_format_empty_stack():
    assert format_stack([]) == '<Empty Stack>'


def test_format_stack():
    assert format_stack([1.0, -2.0, 3.0]).splitlines() == [
        '  2:    1.000 000 000',
        '  1: -  2.000 000 000',
        '  0:    3.000 000 000',
    ]


def test_messages():
    assert str(StackUnderflow(1, 2)) == (
        'Not enough elements in stack to run input.\n'
        ' Elements in stack (1) < Elements needed (2)')
    assert str(BreakError()) == 'Break command was run'
    assert str(TokenError('Print')) == 'Could not parse token: Print'
    assert str(FloatParseError('x')) == "Failed to parse float: \n'x'"
    assert str(OutOfBounds(4, 3)).endswith('Index 4 is not within the '
                                           'stack sized 3')


def test_error_fields():
    underflow = StackUnderflow(1, 2)
    assert (underflow.available, underflow.needed) == (1, 2)
    bounds = OutOfBounds(4, 3)
    assert (bounds.index, bounds.length) == (4, 3)
    assert TokenError('Print').name == 'Print'


def test_parse_error_indents_continuations():
    error = ParseError([FloatParseError('x'), TokenError('Foo')])
    assert str(error).splitlines() == [
        'Failed to parse as any command or operation:',
        '  - Failed to parse float: ',
        "    'x'",
        '  - Could not parse token: Foo',
    ]
    assert isinstance(error, RPNError)


def test_wrap_user_errors():
    @wrap_user_errors('Failed on {0}: {1}')
    def fail(value):
        raise ValueError('bad')

    with raises(RPNError) as info:
        fail(7)
    assert str(info.value) == 'Failed on 7: bad'
    assert isinstance(info.value.__cause__, ValueError)


def test_wrap_user_errors_passes_rpn_errors():
    @wrap_user_errors('Never {}')
    def fail():
        raise BreakError()

    with raises(BreakError):
        fail()
