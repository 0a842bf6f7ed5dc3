'''
Stack-based calculator.

Each line of input is one command: a number, an operation such as + or SIN,
a stack command such as DROP or SWAP, or a composite built from those:

- [ a ; b ; c ] runs a, b and c in order;
- if [ a ] [ b ] pops the top of the stack, runs a if it was zero, b
  otherwise;
- try [ a ] [ b ] runs a, and b if a failed;
- repeat(n) a runs a n times, repeat a runs it until it fails.

    >>> from rpncalc import Machine, parse
    >>> machine = Machine()
    >>> machine.run(parse('[ 2 ; 3 ; pow ]'))
    >>> machine.stack
    [8.0]

A command that fails leaves the machine's stack as it was.
'''

from .cli import CLI
from .parser import Parser, parse, parse_script
from .machine import Machine, execute


__all__ = 'Machine', 'Parser', 'CLI', 'parse', 'parse_script', 'execute'
