'''
Recursive-descent parser from a line of input to a command tree.
'''

from functools import reduce, partial
import operator

import regex

from .util import (RPNError, ParseError, FloatParseError, IntegerParseError,
                   TokenError, UnbalancedBrackets)
from .ops import Number, Nop, FAMILIES
from .commands import (Drop, Duplicate, Swap, Reverse, Repeat, Chain,
                       Conditional, Break, Input, Display, Print)


class Parser:
    '''
    Parser for the calculator's command grammar.

    Tries every grammar alternative in a fixed order on the trimmed input and
    returns the first that accepts it. When none does, a ParseError carries
    why each one refused. Chains, conditionals and repeats recurse into the
    same grammar for their members.

    Instances only hold the table of alternatives, built once per parser,
    and are never changed by parsing.
    '''
    # Anything float() would take, minus underscores, surrounding space and
    # non-ASCII digits.
    NUMBER = r'''
              [+-]?
              (?:
                  inf(?:inity)?
                  |
                  nan
                  |
                  (?:
                      # 1, 1., 1.5 or .5
                      [0-9]+ (?: \. [0-9]* )?
                      |
                      \. [0-9]+
                  )
                  (?:
                      e [+-]? [0-9]+
                  )?
              )
              '''
    # Counts and stack distances. No sign but an optional plus.
    INTEGER = r'\+?[0-9]+'
    # Default regex flags for matching literals
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE,
                    regex.IGNORECASE},
                   0)

    def __init__(self):
        # Grammar alternatives, in the order they are tried.
        self.alternatives = [
            self.parse_number,
            self.parse_drop,
            self.parse_duplicate,
            self.parse_swap,
            self.parse_reverse,
            self.parse_break,
            self.parse_input,
            self.parse_display,
            self.parse_print,
            self.parse_chain,
            self.parse_conditional,
            self.parse_repeat,
        ]
        self.alternatives.extend(partial(self.parse_operation, family)
                                 for family
                                 in FAMILIES)
        self.alternatives.append(self.parse_nop)

    def parse(self, text):
        '''
        Parse a command or operation.

        Unbalanced brackets abort the parse outright, whatever else might
        have matched.
        '''
        text = text.strip()
        errors = []
        for alternative in self.alternatives:
            try:
                return alternative(text)
            except UnbalancedBrackets:
                raise
            except RPNError as e:
                errors.append(e)
        raise ParseError(errors)

    def _number(self, text):
        if regex.fullmatch(type(self).NUMBER, text, flags=type(self).FLAGS):
            return float(text)
        raise FloatParseError(text)

    def _integer(self, text):
        if regex.fullmatch(type(self).INTEGER, text):
            return int(text)
        raise IntegerParseError(text)

    def _keyword(self, node_type, text):
        '''
        Parse a command taking no argument.
        '''
        if text.upper() in node_type.KEYWORDS:
            return node_type()
        raise TokenError(node_type.DESCRIPTOR.name)

    def parse_number(self, text):
        return Number(self._number(text))

    def parse_drop(self, text):
        key, space, argument = text.partition(' ')
        if key.strip().upper() not in Drop.KEYWORDS:
            raise TokenError(Drop.DESCRIPTOR.name)
        if not space:
            return Drop(1)
        argument = argument.strip()
        if argument.upper() == 'ALL':
            return Drop(Drop.ALL)
        return Drop(self._integer(argument))

    def parse_duplicate(self, text):
        # Unlike drop, there is no default count.
        key, space, argument = text.partition(' ')
        if not space or key.strip().upper() not in Duplicate.KEYWORDS:
            raise TokenError(Duplicate.DESCRIPTOR.name)
        return Duplicate(self._integer(argument.strip()))

    def parse_swap(self, text):
        key, _, arguments = text.partition(' ')
        from_, space, to = arguments.strip().partition(' ')
        if space:
            if key.strip().upper() not in Swap.KEYWORDS:
                raise TokenError(Swap.DESCRIPTOR.name)
            return Swap((self._integer(from_.strip()),
                         self._integer(to.strip())))
        if text.upper() not in Swap.KEYWORDS:
            raise TokenError(Swap.DESCRIPTOR.name)
        return Swap(Swap.LAST_TWO)

    def parse_reverse(self, text):
        return self._keyword(Reverse, text)

    def parse_break(self, text):
        return self._keyword(Break, text)

    def parse_input(self, text):
        return self._keyword(Input, text)

    def parse_print(self, text):
        return self._keyword(Print, text)

    def parse_display(self, text):
        '''
        Parse display "<string>", where \\\\ and \\" are the only escapes.
        '''
        failure = TokenError(Display.DESCRIPTOR.name)
        parts = text.split(None, 1)
        if len(parts) != 2 or parts[0].upper() not in Display.KEYWORDS:
            raise failure
        quoted = parts[1]
        if not quoted.startswith('"'):
            raise failure
        chars = iter(quoted[1:])
        decoded = []
        for char in chars:
            if char == '\\':
                escaped = next(chars, None)
                if escaped not in ('\\', '"'):
                    raise failure
                decoded.append(escaped)
            elif char == '"':
                break
            else:
                decoded.append(char)
        else:
            # Unterminated
            raise failure
        if next(chars, None) is not None:
            raise failure
        return Display(''.join(decoded))

    def parse_chain(self, text):
        if len(text) < 2 or not (text.startswith('[') and text.endswith(']')):
            raise TokenError(Chain.DESCRIPTOR.name)
        return self.parse_bare_chain(text[1:-1])

    def parse_bare_chain(self, text):
        '''
        Parse the inside of a chain: commands separated by semicolons that
        are not nested in brackets.
        '''
        pieces = []
        piece = []
        depth = 0
        for char in text.strip():
            if char == '[':
                depth += 1
            elif char == ']':
                if depth == 0:
                    raise UnbalancedBrackets()
                depth -= 1
            elif char == ';' and depth == 0:
                pieces.append(''.join(piece))
                piece = []
                continue
            piece.append(char)
        pieces.append(''.join(piece))
        if depth != 0:
            raise UnbalancedBrackets()
        return Chain(tuple(self.parse(piece) for piece in pieces))

    def parse_conditional(self, text):
        '''
        Parse if/try followed by two bracketed chains.

        Scans for the branches by bracket depth, so brackets nested in a
        branch have to close before the branch does.
        '''
        failure = TokenError(Conditional.DESCRIPTOR.name)
        parts = text.split(None, 1)
        if len(parts) != 2 or parts[0].upper() not in Conditional.KEYWORDS:
            raise failure
        kind, rest = parts[0].upper(), parts[1]

        branches = []
        branch = []
        depth = 0
        state = 'between'
        for char in rest:
            if state == 'between':
                if char == '[':
                    branch = [char]
                    depth = 1
                    state = 'branch'
                elif not branches or not char.isspace():
                    raise failure
            elif state == 'branch':
                branch.append(char)
                if char == '[':
                    depth += 1
                elif char == ']':
                    depth -= 1
                    if depth == 0:
                        branches.append(''.join(branch))
                        state = 'between' if len(branches) < 2 else 'end'
            else:
                # Trailing text after the second branch
                raise failure
        if state != 'end':
            raise failure

        first, second = branches
        return Conditional(kind, self.parse_chain(first),
                           self.parse_chain(second))

    def parse_repeat(self, text):
        '''
        Parse R, REPEAT, R(n) or REPEAT(n), a space, then any command.

        Commits to this alternative as soon as an R is seen: whatever follows
        has to be EPEAT, a parenthesised count or a space.
        '''
        failure = TokenError(Repeat.DESCRIPTOR.name)
        chars = iter(text)
        if next(chars, '').upper() != 'R':
            raise failure
        char = next(chars, None)
        if char is not None and char.upper() == 'E':
            if ''.join(next(chars, '') for _ in 'PEAT').upper() != 'PEAT':
                raise failure
            char = next(chars, None)

        count = Repeat.UNBOUNDED
        if char == '(':
            digits = []
            for char in chars:
                if not char.isalnum():
                    break
                digits.append(char)
            else:
                raise failure
            if char != ')':
                raise failure
            count = self._integer(''.join(digits))
            char = next(chars, None)

        if char != ' ':
            raise failure
        return Repeat(count, self.parse(''.join(chars)))

    def parse_operation(self, family, text):
        operation = family.lookup(text)
        if operation is None:
            raise TokenError(family.DESCRIPTOR.name)
        return operation

    def parse_nop(self, text):
        if text.strip():
            raise TokenError(Nop.DESCRIPTOR.name)
        return Nop()


def parse(line):
    '''
    Parse one line of input into a command tree.
    '''
    return Parser().parse(line)


def parse_script(text):
    '''
    Parse a script: its whole text is the inside of an implicit chain.
    '''
    return Parser().parse_bare_chain(text)


def parse_number(text):
    '''
    Parse a float literal, as typed at the prompt.
    '''
    return Parser().parse_number(text.strip()).value
