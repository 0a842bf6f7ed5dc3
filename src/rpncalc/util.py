from functools import wraps
import math


class RPNError(Exception):
    '''
    Base of every user-facing parse or execution error.

    Subclasses set MESSAGE, formatted with the exception's args.
    '''
    MESSAGE = '{}'

    def __str__(self):
        return self.MESSAGE.format(*self.args)


class ParseError(RPNError):
    '''
    No grammar alternative accepted the input.

    Holds the error of every alternative tried, in the order they were tried.
    '''

    def __init__(self, errors):
        super().__init__(list(errors))

    @property
    def errors(self):
        return self.args[0]

    def __str__(self):
        lines = ['Failed to parse as any command or operation:']
        for error in self.errors:
            first, *rest = str(error).splitlines() or ['']
            lines.append('  - ' + first)
            lines.extend('    ' + line for line in rest)
        return '\n'.join(lines)


class FloatParseError(RPNError):
    MESSAGE = 'Failed to parse float: \n{!r}'


class IntegerParseError(RPNError):
    MESSAGE = 'Failed to parse integer: \n{!r}'


class TokenError(RPNError):
    MESSAGE = 'Could not parse token: {}'

    @property
    def name(self):
        return self.args[0]


class StackUnderflow(RPNError):
    MESSAGE = ('Not enough elements in stack to run input.\n'
               ' Elements in stack ({}) < Elements needed ({})')

    @property
    def available(self):
        return self.args[0]

    @property
    def needed(self):
        return self.args[1]


class OutOfBounds(RPNError):
    MESSAGE = ('Command tried to access the stack out of bounds, '
               'Index {} is not within the stack sized {}')

    @property
    def index(self):
        return self.args[0]

    @property
    def length(self):
        return self.args[1]


class UnbalancedBrackets(RPNError):
    MESSAGE = 'Unbalanced Braces'


class InfiniteLoop(RPNError):
    MESSAGE = 'Possible infinite loop detected. Repetition reached maximum limit'


class BreakError(RPNError):
    MESSAGE = 'Break command was run'


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions to RPNErrors.

    Passes through RPNErrors. The message is fmt, formatted with the wrapped
    call's arguments and the original exception as the last positional.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise RPNError(fmt.format(*args, e, **kwargs), e) from e
        return wrapper
    return decorator


def _group(digits):
    '''
    Split digits into space separated groups of three.
    '''
    return ' '.join(digits[i:i + 3] for i in range(0, len(digits), 3))


def format_number(number):
    '''
    Format a float for display.

    A sign column (space or minus), then nine fractional digits, with both
    sides of the decimal point grouped by three. The integral part is left
    padded so its groups line up across numbers.
    '''
    sign = ' ' if math.copysign(1.0, number) > 0 else '-'
    if math.isnan(number):
        return sign + 'NaN'
    if math.isinf(number):
        return sign + 'Inf'
    integral, fractional = '{:.9f}'.format(abs(number)).split('.')
    integral = integral.rjust(-(-len(integral) // 3) * 3)
    return sign + _group(integral) + '.' + _group(fractional)


def format_stack(stack):
    '''
    Render the stack bottom first, indexed by distance from the top.
    '''
    if not stack:
        return '<Empty Stack>'
    return '\n'.join('{:3}: {}'.format(index, format_number(number))
                     for index, number
                     in reversed(list(enumerate(reversed(stack)))))
