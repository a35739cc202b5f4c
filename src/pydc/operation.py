'''
Operations understood by the stack machine.

An operation is either a command, one of the ``Op`` members, named after the
single character that spells it, or a ``Push`` of a literal integer.
'''

from collections import namedtuple
from enum import Enum


class Op(Enum):
    # Arithmetic
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'
    DIVREM = '~'
    EXP = '^'
    SQRT = 'v'
    MODEXP = '|'

    # Stack
    DUPLICATE = 'd'
    REVERSE = 'r'
    CLEAR = 'c'

    # Output
    PRINTPEEK = 'p'
    PRINTPOP = 'n'
    PRINTALL = 'f'

    # Registers
    SETIRADIX = 'i'
    SETORADIX = 'o'
    SETPRECISION = 'k'
    GETIRADIX = 'I'
    GETORADIX = 'O'
    GETPRECISION = 'K'

    # Control
    EXIT = 'q'


Push = namedtuple('Push', 'value')


class Signal(Enum):
    '''
    Whether to keep feeding the machine after an operation.
    '''
    CONTINUE = 'continue'
    HALT = 'halt'
