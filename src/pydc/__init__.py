'''
Arbitrary precision RPN desk calculator, in the spirit of UNIX dc.

Input is a string of single character commands and integer literals (_ for
negative). Commands may be run together without spaces: 5d*p squares 5 and
prints 25. Numbers are Python ints, so there is no overflow; division
truncates toward zero.

The input/output radix and precision registers are kept, settable and
loadable, but don't affect how numbers are read or printed yet.
'''

# TODO: Honour iradix/oradix when lexing and printing.
# TODO: Named registers (s, l), macros.

from .cli import CLI
from .lexer import Lexer, tokenize
from .machine import Machine
from .executor import execute, process, Outcome
from .operation import Op, Push, Signal
from .util import RPNError, LexError, MachineError


__all__ = ('Machine', 'Lexer', 'CLI', 'tokenize', 'execute', 'process',
           'Outcome', 'Op', 'Push', 'Signal', 'RPNError', 'LexError',
           'MachineError')
