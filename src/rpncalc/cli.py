from os import isatty, path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.shortcuts import clear

from .util import RPNError, format_stack
from .machine import Machine
from .parser import parse, parse_script
from .registry import format_help


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, history_file=None):
        self.prompt = prompt
        self.history_file = history_file

    def __iter__(self):
        history = None
        if self.history_file is not None:
            history = FileHistory(path.expanduser(self.history_file))
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Persistent
                                    history=history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpncalc_history'
    GREETING = "Type 'h' or 'help' for a list of commands"
    EXIT_KEYWORDS = ('EXIT', 'QUIT')
    HELP_KEYWORDS = ('H', 'HELP')
    LOG_FORMAT = '%(levelname)-8s %(message)s'

    def _machine(self):
        return Machine(max_repetitions=self.args.max_repetitions)

    def dumper(self):
        '''
        Dump the command tree of every expression, or why it doesn't parse.
        '''
        print('<repr(line)>\t<command tree>')
        for line in self.args.expressions:
            try:
                parsed = parse(line)
            except RPNError as e:
                parsed = e
            print(repr(line.rstrip('\n')), repr(parsed), sep='\t')

    def evaluate(self, machine, line):
        '''
        Parse and run one line on machine.

        Return the message to show, and whether it reports a failure. The
        machine's stack is left untouched by a failing line.
        '''
        try:
            command = parse(line)
        except RPNError as e:
            logger.debug('Parse failure', exc_info=True)
            return 'Could not parse last command: \n{}'.format(e), True
        try:
            return machine.run(command), False
        except RPNError as e:
            logger.debug('Execution failure', exc_info=True)
            return ('Error executing last command, '
                    'reverting stack: \n{}'.format(e)), True

    def _show(self, message, machine):
        if self.args.clear:
            clear()
        if message is not None:
            print(message)
        print(format_stack(machine.stack))

    def executor(self):
        '''
        Run machine (RPN calculator) on every line of input.
        '''
        machine = self._machine()
        interactive = self._interactive()
        if interactive:
            self._show(self.GREETING, machine)
        for line in self.args.expressions:
            keyword = line.strip().upper()
            if keyword in self.EXIT_KEYWORDS:
                break
            elif keyword in self.HELP_KEYWORDS:
                message, failed = format_help(), False
            else:
                message, failed = self.evaluate(machine, line)

            if interactive:
                self._show(message, machine)
            elif failed:
                print(message, file=sys.stderr)
            elif keyword in self.HELP_KEYWORDS:
                print(message)
            elif message not in (None, machine.last_written):
                # Print and display already wrote theirs.
                print(message)
        if interactive and self.args.clear:
            clear()
        print('Exiting Successfully with the following stack:')
        print(format_stack(machine.stack))

    def script(self):
        '''
        Run a script file as a single chain.
        '''
        machine = self._machine()
        try:
            with open(self.args.script, encoding='utf-8') as fp:
                command = parse_script(fp.read())
            message = machine.run(command)
        except OSError as e:
            print('Could not read script: \n{}'.format(e), file=sys.stderr)
            sys.exit(1)
        except RPNError as e:
            logger.debug('Script failure', exc_info=True)
            print('Error running script: \n{}'.format(e), file=sys.stderr)
            sys.exit(1)
        if message not in (None, machine.last_written):
            print(message)
        print(format_stack(machine.stack))

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.HISTORY_FILE)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Stack-based calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log every failure with its '
                                               'traceback')
        self.argument_parser.add_argument('-m', '--max-repetitions',
                                          type=int,
                                          default=Machine.DEFAULT_MAX_REPETITIONS,
                                          help='iterations after which an '
                                               'unbounded repeat gives up')
        self.argument_parser.add_argument('--no-clear',
                                          action='store_false',
                                          dest='clear',
                                          help="don't clear the screen "
                                               "between commands")
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        int_nonint_groups.add_argument('-f', '--file',
                                       dest='script',
                                       help='run a script, its whole text '
                                            'a single chain')
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(format=self.LOG_FORMAT,
                            level=(logging.DEBUG if self.args.verbose
                                   else logging.WARNING),
                            stream=sys.stderr)
        if self.args.script is not None and \
           self.args.action == self.executor:
            self.args.action = self.script
        elif self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()
