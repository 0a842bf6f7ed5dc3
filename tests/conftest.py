from io import StringIO

from pytest import Item, fixture

from rpncalc.machine import Machine
from rpncalc.parser import parse


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases. Only called with enable_assertion_pass_hook set.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def stdout() -> StringIO:
    return StringIO()


@fixture
def machine(stdout: StringIO) -> Machine:
    '''
    Machine writing to a buffer, reading from an empty stdin, and giving up
    on unbounded repeats quickly.
    '''
    return Machine(stdin=StringIO(), stdout=stdout, max_repetitions=100)


@fixture
def run(machine: Machine):
    '''
    Parse and execute a line on the machine's stack, without rollback.
    '''
    def run(line, stack=None):
        if stack is not None:
            machine.stack[:] = stack
        return machine.execute(parse(line), machine.stack)
    return run
