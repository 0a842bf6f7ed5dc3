'''
Names and descriptions of everything the calculator understands, in
declaration order, for the help page.
'''

from .ops import Number, Nop, FAMILIES
from .commands import (Drop, Duplicate, Swap, Reverse, Repeat, Chain,
                       Conditional, Break, Input, Display, Print)


COMMANDS = (Drop, Duplicate, Swap, Reverse, Repeat, Chain, Conditional, Break,
            Input, Display, Print)
OPERATIONS = (Number,) + FAMILIES + (Nop,)

# Understood by the interactive prompt only, never parsed into a command.
PROMPT_COMMANDS = (
    ('H', 'Help', 'Shows the current help page'),
    (None, 'Exit | Quit', 'Exits, showing the final stack'),
)


def names_descriptions(entries):
    '''
    Return (short name, name, description) of every entry.
    '''
    return [(entry.DESCRIPTOR.short_name,
             entry.DESCRIPTOR.name,
             entry.DESCRIPTOR.description)
            for entry
            in entries]


def _format_section(title, triples):
    lines = [title + ':']
    for short_name, name, description in triples:
        if short_name is None:
            lines.append('  ' + name)
        else:
            lines.append('  {} | {}'.format(short_name, name))
        lines.append('      ' + description)
    return lines


def format_help():
    '''
    Render the help page: commands, then operations, then prompt commands.
    '''
    lines = _format_section('Commands', names_descriptions(COMMANDS))
    lines.append('')
    lines.extend(_format_section('Operations', names_descriptions(OPERATIONS)))
    lines.append('')
    lines.extend(_format_section('Prompt', PROMPT_COMMANDS))
    return '\n'.join(lines)
