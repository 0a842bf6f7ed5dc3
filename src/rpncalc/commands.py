'''
Command tree nodes other than primitive operations.

Nodes are immutable. Composite nodes (Chain, Conditional, Repeat) own their
child nodes outright; a tree is never shared or mutated once parsed.
'''

from .ops import Descriptor, node


class Drop(node('Drop', 'count')):
    '''
    Drop count elements off the top of the stack. A count of None drops all.
    '''
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        'D [int]', 'Drop [int]',
        'Takes a number of items to drop from the top of the stack. If the '
        'argument is "all", all values will be dropped. Otherwise drops one.',
        None, 0)
    KEYWORDS = ('D', 'DROP')
    ALL = None


class Duplicate(node('Duplicate', 'count')):
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        'Dup <int>', 'Duplicate <int>',
        'Duplicates the top element of the stack a specified amount of times.',
        1, None)
    KEYWORDS = ('DUP', 'DUPLICATE')


class Swap(node('Swap', 'positions')):
    '''
    Swap two elements, given as a (from, to) pair of distances from the top
    of the stack. Positions of None swaps the top two.
    '''
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        'S [int int]', 'Swap [int int]',
        'Swaps the position of any two values in the stack, counted from the '
        'top. If arguments are not provided, it swaps the top element with '
        'the previous one',
        2, 2)
    KEYWORDS = ('S', 'SWAP')
    LAST_TWO = None


class Reverse(node('Reverse', '')):
    __slots__ = ()
    DESCRIPTOR = Descriptor('Rev', 'Reverse', 'Reverses the order of the stack',
                            None, None)
    KEYWORDS = ('REV', 'REVERSE')


class Repeat(node('Repeat', 'count body')):
    '''
    Repeat body count times, or until it fails when count is None.
    '''
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        'R(int) | R', 'Repeat(int) | Repeat',
        'Repeats a command a specified number of times, or if argument not '
        'provided, until an error is yielded or a precompiled limit is '
        'reached',
        None, None)
    KEYWORDS = ('R', 'REPEAT')
    UNBOUNDED = None


class Chain(node('Chain', 'commands')):
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        None, '[ <Command Or Op>; ... ]',
        'Allows you to chain commands or operations together',
        None, None)


class Conditional(node('Conditional', 'kind first second')):
    '''
    Choose between two chains.

    IF pops the top of the stack and runs first when it is zero, second
    otherwise. TRY runs first, and if that fails runs second on whatever
    first left behind.
    '''
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        None,
        'if [ <Command or Op if zero> ] [ <Command or Op if nonzero> ] | '
        'try [ <First Command or Op> ] [ <Command or Op on failure> ]',
        'If: Pops the value at the top of the stack, executes the first '
        'command if zero, otherwise the other. Try: Runs the first command. '
        'If an error occurs during execution, the command is interrupted and '
        'the second command is run.',
        None, None)
    IF = 'IF'
    TRY = 'TRY'
    KEYWORDS = (IF, TRY)


class Break(node('Break', '')):
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        None, 'Break',
        'Unconditionally produces an error. Useful for exiting infinite '
        'loops.',
        0, 0)
    KEYWORDS = ('BREAK',)


class Input(node('Input', '')):
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        'I', 'Input',
        'Allows the user to input a floating point number, and puts it on '
        'the stack. Mostly used in scripts.',
        0, 1)
    KEYWORDS = ('I', 'INPUT')


class Display(node('Display', 'text')):
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        'Disp "<Escaped String>"', 'Display "<Escaped String>"',
        'Prints an escaped string to the command line. Only escaped '
        'characters are double quotes and backslashes, both escaped with a '
        'preceding backslash.',
        0, 0)
    KEYWORDS = ('DISP', 'DISPLAY')


class Print(node('Print', '')):
    __slots__ = ()
    DESCRIPTOR = Descriptor(
        'P', 'Print',
        'Prints the top number in the stack to the screen. Mostly used in '
        'scripts.',
        1, 0)
    KEYWORDS = ('P', 'PRINT')


__all__ = ('Drop', 'Duplicate', 'Swap', 'Reverse', 'Repeat', 'Chain',
           'Conditional', 'Break', 'Input', 'Display', 'Print')
