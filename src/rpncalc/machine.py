from itertools import count
import io
import logging
import sys

from .util import (RPNError, StackUnderflow, OutOfBounds, InfiniteLoop,
                   BreakError, wrap_user_errors, format_number)
from .ops import Number, Nop, FAMILIES
from .commands import (Drop, Duplicate, Swap, Reverse, Repeat, Chain,
                       Conditional, Break, Input, Display, Print)
from .parser import parse_number


logger = logging.getLogger(__name__)


class Machine:
    '''
    Floating point stack machine (RPN calculator).

    Runs parsed command trees against a stack. Chains, conditionals and
    repeats run their children through execute() again, on the same stack.
    '''

    # Cap on an unbounded repeat whose body never fails.
    DEFAULT_MAX_REPETITIONS = 1_000_000
    REPETITIONS_ENDED = 'Ended Repetitions with the following error: \n{}'

    def __init__(self, stdin=None, stdout=None, max_repetitions=None):
        '''
        Create empty stack machine.

        :param stdin: Text stream the input command reads lines from.
                      Defaults to sys.stdin at the time of reading.
        :param stdout: Text stream print and display write to. Defaults to
                       sys.stdout at the time of writing.
        :param max_repetitions: Iterations after which an unbounded repeat
                                gives up.
        '''
        self.stack = []
        # Text print or display last wrote during run(), if any.
        self.last_written = None
        self.stdin = stdin
        self.stdout = stdout
        if max_repetitions is None:
            max_repetitions = type(self).DEFAULT_MAX_REPETITIONS
        self.max_repetitions = max_repetitions

    def run(self, command):
        '''
        Execute command on the machine's own stack.

        All or nothing: if the command fails, however it fails, the stack is
        restored to what it was before, and the error re-raised.
        '''
        previous = list(self.stack)
        self.last_written = None
        try:
            return self.execute(command, self.stack)
        except Exception:
            self.stack[:] = previous
            raise

    def execute(self, command, stack):
        '''
        Execute command on stack, in place.

        Returns the command's message, if any. Failures are raised as
        RPNErrors, leaving the stack as far as the command got.
        '''
        return type(self).EXECUTORS[type(command)](self, command, stack)

    def _popstack(self, stack, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(stack) < n:
            raise StackUnderflow(len(stack), n)
        return [stack.pop() for _ in range(n)]

    @wrap_user_errors('Error during IO: \n{2}')
    def _write(self, text):
        stdout = self.stdout or sys.stdout
        line = text + '\n'
        if isinstance(stdout, (io.RawIOBase, io.BufferedIOBase)):
            line = line.encode('utf-8')
        stdout.write(line)
        stdout.flush()
        self.last_written = text

    @wrap_user_errors('Error during IO: \n{1}')
    def _readline(self):
        line = (self.stdin or sys.stdin).readline()
        if isinstance(line, bytes):
            line = line.decode('utf-8')
        return line

    def _number(self, command, stack):
        stack.append(command.value)

    def _nop(self, command, stack):
        pass

    def _operation(self, command, stack):
        '''
        Apply a primitive operation, popping its arguments.
        '''
        # If you don't reverse, you'll do 2**9 when you say 9 2 POW instead
        # of 9**2.
        args = reversed(self._popstack(stack, command.arity))
        stack.append(command(*args))

    def _drop(self, command, stack):
        '''
        Drop elements from the top of the stack.

        Dropping more than there are clears the stack, unless it was already
        empty.
        '''
        if command.count is Drop.ALL:
            stack.clear()
        elif not stack and command.count != 0:
            raise StackUnderflow(0, command.count)
        elif command.count >= len(stack):
            stack.clear()
        elif command.count:
            del stack[-command.count:]

    def _duplicate(self, command, stack):
        if not stack:
            raise StackUnderflow(0, 1)
        self._extend(stack, stack[-1], command.count)

    @wrap_user_errors('Could not duplicate {3} times: \n{4}')
    def _extend(self, stack, top, count):
        stack.extend([top] * count)

    def _swap(self, command, stack):
        '''
        Swap two elements, given by their distance from the top.
        '''
        if command.positions is Swap.LAST_TWO:
            if len(stack) < 2:
                raise StackUnderflow(len(stack), 2)
            stack[-1], stack[-2] = stack[-2], stack[-1]
            return
        for position in command.positions:
            if position >= len(stack):
                raise OutOfBounds(position, len(stack))
        from_, to = (len(stack) - position - 1
                     for position
                     in command.positions)
        stack[from_], stack[to] = stack[to], stack[from_]

    def _reverse(self, command, stack):
        stack.reverse()

    def _break(self, command, stack):
        raise BreakError()

    def _print(self, command, stack):
        '''
        Pop and print element at top of stack.
        '''
        text = format_number(self._popstack(stack)[0])
        self._write(text)
        return text

    def _display(self, command, stack):
        self._write(command.text)
        return command.text

    def _input(self, command, stack):
        '''
        Read a number from stdin onto the stack. Blocks until a line comes.
        '''
        stack.append(parse_number(self._readline()))

    def _chain(self, command, stack):
        '''
        Run commands in order, stopping at the first failure.
        '''
        message = None
        for member in command.commands:
            message = self.execute(member, stack)
        return message

    def _conditional(self, command, stack):
        if command.kind == Conditional.IF:
            selector = self._popstack(stack)[0]
            branch = command.first if selector == 0.0 else command.second
            return self.execute(branch, stack)
        try:
            return self.execute(command.first, stack)
        except RPNError as e:
            # Whatever the first branch did to the stack stays.
            logger.debug('Try fell back to its second branch: %s', e)
            return self.execute(command.second, stack)

    def _repeat(self, command, stack):
        if command.count is Repeat.UNBOUNDED:
            return self._repeat_until_failure(command.body, stack)
        message = None
        for _ in range(command.count):
            message = self.execute(command.body, stack)
        return message

    def _repeat_until_failure(self, body, stack):
        '''
        Run body until it fails, which ends the repeat successfully.
        '''
        for repetitions in count():
            if repetitions >= self.max_repetitions:
                raise InfiniteLoop()
            try:
                self.execute(body, stack)
            except RPNError as e:
                logger.debug('Repeat ended after %d repetitions: %s',
                             repetitions, e)
                return type(self).REPETITIONS_ENDED.format(e)

    # Command tree node types to the method running them.
    EXECUTORS = {
        Number: _number,
        Nop: _nop,
        Drop: _drop,
        Duplicate: _duplicate,
        Swap: _swap,
        Reverse: _reverse,
        Break: _break,
        Print: _print,
        Display: _display,
        Input: _input,
        Chain: _chain,
        Conditional: _conditional,
        Repeat: _repeat,
    }
    for family in FAMILIES:
        EXECUTORS[family] = _operation


def execute(command, stack, stdin=None, stdout=None):
    '''
    Execute command on stack, in place, returning its message if any.
    '''
    return Machine(stdin=stdin, stdout=stdout).execute(command, stack)


__all__ = 'Machine', 'execute'
