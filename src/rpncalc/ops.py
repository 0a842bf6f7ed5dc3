'''
Primitive operations: fixed arity, pure numeric transforms on the stack.

Every family is a node type of the command tree holding which of its members
was asked for. The transforms follow IEEE 754 float semantics, so dividing by
zero or taking the square root of a negative number yields an infinity or a
NaN on the stack, never an exception.
'''

from collections import namedtuple
from functools import wraps
import operator
import math


Descriptor = namedtuple('Descriptor',
                        'short_name name description input_arity output_arity')


def node(typename, field_names):
    '''
    Create a command tree node type: a namedtuple whose instances only ever
    equal instances of the very same type.
    '''
    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self), tuple(self)))

    return type(typename, (namedtuple(typename, field_names),), {
        '__slots__': (),
        '__eq__': __eq__,
        '__ne__': __ne__,
        '__hash__': __hash__,
    })


def _nan_on_domain_error(f):
    '''
    Return NaN where math raises for arguments outside f's domain.
    '''
    @wraps(f)
    def wrapped(*args):
        try:
            return f(*args)
        except ValueError:
            return math.nan
    return wrapped


def _divide(left, right):
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _logarithm(f):
    '''
    Make a math logarithm return -inf at zero, like C's log.
    '''
    @wraps(f)
    def wrapped(only):
        if only == 0.0:
            return -math.inf
        return _nan_on_domain_error(f)(only)
    return wrapped


_ln = _logarithm(math.log)


def _power(base, exponent):
    try:
        return math.pow(base, exponent)
    except ValueError:
        # 0 to a negative power is a pole, anything else is a complex result.
        if base == 0.0:
            odd = exponent % 2 == 1
            return math.copysign(math.inf, base) if odd else math.inf
        return math.nan
    except OverflowError:
        if base < 0 and exponent % 2 == 1:
            return -math.inf
        return math.inf


def _log_base(base, value):
    return _divide(_ln(value), _ln(base))


def _root(degree, radicand):
    return _power(radicand, _divide(1.0, degree))


def _truth(f):
    '''
    Comparisons push 1.0 or 0.0, never a bool.
    '''
    @wraps(f)
    def wrapped(left, right):
        return 1.0 if f(left, right) else 0.0
    return wrapped


class Number(node('Number', 'value')):
    '''
    A float literal, pushed as is.
    '''
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        None, '<Number>',
        'Just entering a Floating Point number will add it to the top of '
        'the stack',
        0, 1)


class Nop(node('Nop', '')):
    __slots__ = ()
    DESCRIPTOR = Descriptor(None, '<Empty>', 'Will do nothing', 0, 0)


class Operation(node('Operation', 'member')):
    '''
    A member of a family of simple operations.

    Subclasses declare their members as a mapping from canonical upper case
    keyword to transform. The transform takes DESCRIPTOR.input_arity floats,
    bottom-most first, and returns a single float.
    '''
    __slots__ = ()
    DESCRIPTOR = None
    MEMBERS = {}
    # Alternative spellings, mapped to canonical member keywords.
    ALIASES = {}
    # Symbolic keywords are matched case-sensitively.
    SYMBOLIC = False

    @classmethod
    def lookup(cls, keyword):
        '''
        Return the member spelled keyword, or None.
        '''
        if not cls.SYMBOLIC:
            keyword = keyword.upper()
        keyword = cls.ALIASES.get(keyword, keyword)
        if keyword in cls.MEMBERS:
            return cls(keyword)
        return None

    @property
    def arity(self):
        return self.DESCRIPTOR.input_arity

    @property
    def function(self):
        return self.MEMBERS[self.member]

    def __call__(self, *args):
        return float(self.function(*args))


class Arith(Operation):
    __slots__ = ()
    DESCRIPTOR = Descriptor(None, '+ - * /', 'Basic Arithmetic operations',
                            2, 1)
    MEMBERS = {
        '+': operator.__add__,
        '-': operator.__sub__,
        '*': operator.__mul__,
        '/': _divide,
    }
    SYMBOLIC = True


class Constants(Operation):
    __slots__ = ()
    DESCRIPTOR = Descriptor(None, 'Pi | E | Inf',
                            'Constants made available for use', 0, 1)
    MEMBERS = {
        'E': lambda: math.e,
        'PI': lambda: math.pi,
        'INF': lambda: math.inf,
    }


class ExponentialsUnary(Operation):
    __slots__ = ()
    DESCRIPTOR = Descriptor(None, 'Log10 | Log2 | LogE | Root2',
                            'Exponential operations that take one argument',
                            1, 1)
    MEMBERS = {
        'LOG10': _logarithm(math.log10),
        'LOG2': _logarithm(math.log2),
        'LOGE': _ln,
        'ROOT2': _nan_on_domain_error(math.sqrt),
    }


class ExponentialsBinary(Operation):
    '''
    POW raises the lower element to the top one. LOGN and ROOTN take the base
    and the degree from the lower element: "2 8 LOGN" leaves 3, "3 8 ROOTN"
    leaves 2.
    '''
    __slots__ = ()
    DESCRIPTOR = Descriptor(None, 'Pow | LogN | RootN',
                            'Exponential operations that take two arguments',
                            2, 1)
    MEMBERS = {
        'POW': _power,
        'LOGN': _log_base,
        'ROOTN': _root,
    }


class Trigonometric(Operation):
    __slots__ = ()
    DESCRIPTOR = Descriptor(None, 'Sin | Cos | Tan | ASin | ACos | ATan',
                            'Forward and inverse trigonometric functions',
                            1, 1)
    MEMBERS = {
        'SIN': _nan_on_domain_error(math.sin),
        'COS': _nan_on_domain_error(math.cos),
        'TAN': _nan_on_domain_error(math.tan),
        'ASIN': _nan_on_domain_error(math.asin),
        'ACOS': _nan_on_domain_error(math.acos),
        'ATAN': math.atan,
    }


class Cmp(Operation):
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        None, '= | != | > | >= | < | <=',
        'Binary operators that compare two elements on the stack, they '
        'return 1 for true and 0 for false. Mostly for use with the if '
        'command.',
        2, 1)
    MEMBERS = {
        'EQ': _truth(operator.__eq__),
        'NEQ': _truth(operator.__ne__),
        'GT': _truth(operator.__gt__),
        'GTE': _truth(operator.__ge__),
        'LT': _truth(operator.__lt__),
        'LTE': _truth(operator.__le__),
    }
    ALIASES = {
        '=': 'EQ',
        '!=': 'NEQ',
        '>': 'GT',
        '>=': 'GTE',
        '<': 'LT',
        '<=': 'LTE',
    }


# Simple operation families, in the order the parser tries them.
FAMILIES = (Arith, Constants, ExponentialsUnary, ExponentialsBinary,
            Trigonometric, Cmp)


__all__ = ('Descriptor', 'Number', 'Nop', 'Operation', 'Arith', 'Constants',
           'ExponentialsUnary', 'ExponentialsBinary', 'Trigonometric',
           'Cmp', 'FAMILIES')
