from collections import namedtuple
import sys

from .lexer import tokenize
from .operation import Signal
from .util import RPNError


Outcome = namedtuple('Outcome', 'signal errors')


def report_to_stderr(error):
    print(error.args[0], file=sys.stderr)


def execute(machine, operations, report=report_to_stderr):
    '''
    Feed operations to machine in order, until one halts it.

    A failing operation is reported and skipped; the rest still run.
    '''
    errors = []
    for operation in operations:
        try:
            signal = machine.feed(operation)
        except RPNError as e:
            errors.append(e)
            report(e)
            continue
        if signal is Signal.HALT:
            return Outcome(Signal.HALT, errors)
    return Outcome(Signal.CONTINUE, errors)


def process(machine, text, report=report_to_stderr):
    '''
    Tokenize and run a whole chunk of input (line, file, expression).

    Raises LexError, running nothing, if the chunk doesn't lex.
    '''
    return execute(machine, tokenize(text), report=report)
