import math

from rpncalc.ops import (Number, Nop, Operation, Arith, Constants,
                         ExponentialsUnary, ExponentialsBinary, Trigonometric,
                         Cmp, FAMILIES)
from rpncalc.commands import Reverse, Break, Input, Print, Drop, Duplicate

from pytest import mark, approx


def test_nodes_only_equal_their_own_type():
    assert Reverse() == Reverse()
    assert Reverse() != Break()
    assert Input() != Print()
    assert Drop(1) != Duplicate(1)
    assert Number(1.0) != Drop(1.0)
    assert len({Reverse(), Break(), Nop(), Reverse()}) == 3


def test_lookup_is_case_insensitive():
    assert Constants.lookup('pi') == Constants('PI')
    assert Trigonometric.lookup('aCoS') == Trigonometric('ACOS')
    assert ExponentialsUnary.lookup('root2') == ExponentialsUnary('ROOT2')


def test_lookup_aliases():
    assert Cmp.lookup('<=') == Cmp('LTE')
    assert Cmp.lookup('!=') == Cmp('NEQ')
    assert Cmp.lookup('eq') == Cmp('EQ')


def test_lookup_miss():
    assert Arith.lookup('plus') is None
    assert Constants.lookup('tau') is None
    assert Cmp.lookup('==') is None
    assert ExponentialsBinary.lookup('log') is None


def test_families_are_disjoint():
    seen = set()
    for family in FAMILIES:
        spellings = {spelling.upper()
                     for spelling
                     in list(family.MEMBERS) + list(family.ALIASES)}
        assert not seen & spellings
        seen |= spellings


@mark.parametrize('family', FAMILIES)
def test_arity(family):
    for member in family.MEMBERS:
        operation = family(member)
        assert operation.arity == family.DESCRIPTOR.input_arity
        assert family.DESCRIPTOR.output_arity == 1
        result = operation(*[0.5] * operation.arity)
        assert type(result) is float


def test_every_operation_is_an_operation():
    for family in FAMILIES:
        assert issubclass(family, Operation)


@mark.parametrize('operation, args, expected', [
    (Arith('-'), (5.0, 2.0), 3.0),
    (Arith('/'), (1.0, 4.0), 0.25),
    (ExponentialsBinary('POW'), (2.0, 10.0), 1024.0),
    (ExponentialsBinary('LOGN'), (10.0, 1000.0), 3.0),
    (ExponentialsBinary('ROOTN'), (2.0, 9.0), 3.0),
    (ExponentialsUnary('LOG2'), (8.0,), 3.0),
    (ExponentialsUnary('LOGE'), (math.e,), 1.0),
    (Trigonometric('SIN'), (math.pi / 2,), 1.0),
    (Trigonometric('ACOS'), (1.0,), 0.0),
    (Constants('INF'), (), math.inf),
])
def test_values(operation, args, expected):
    assert operation(*args) == approx(expected)


def test_division_by_zero():
    divide = Arith('/')
    assert divide(1.0, 0.0) == math.inf
    assert divide(1.0, -0.0) == -math.inf
    assert divide(-2.0, 0.0) == -math.inf
    assert math.isnan(divide(0.0, 0.0))
    assert math.isnan(divide(math.nan, 0.0))


def test_logarithms_at_edges():
    log10 = ExponentialsUnary('LOG10')
    assert log10(0.0) == -math.inf
    assert log10(math.inf) == math.inf
    assert math.isnan(log10(-1.0))
    # Base one
    assert ExponentialsBinary('LOGN')(1.0, 8.0) == math.inf


def test_power_edges():
    power = ExponentialsBinary('POW')
    assert power(0.0, -1.0) == math.inf
    assert power(-0.0, -1.0) == -math.inf
    assert power(-0.0, -2.0) == math.inf
    assert power(-10.0, 401.0) == -math.inf
    assert power(-10.0, 400.0) == math.inf
    assert math.isnan(power(-8.0, 1 / 3))


def test_odd_root_of_negative_is_nan():
    assert math.isnan(ExponentialsBinary('ROOTN')(3.0, -8.0))


def test_comparisons_with_nan():
    assert Cmp('EQ')(math.nan, math.nan) == 0.0
    assert Cmp('NEQ')(math.nan, math.nan) == 1.0
    assert Cmp('LT')(math.nan, 1.0) == 0.0
