from functools import reduce
import operator

import regex

from .operation import Op, Push
from .util import LexError


class Lexer:
    '''
    Lexer for the dc command language, a *regular* grammar.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Integer literal; _ is the negative sign, as in dc.
    NUMBER = r'''
              (?<sign>_)?
              (?<digits>[0-9]+)
              # Not supported, but matched so it can be rejected whole rather
              # than lexing 1.5 as 1 followed by garbage.
              (?<fraction>\.[0-9]*)?
              '''

    assert not [op for op in Op if len(op.value) != 1]
    OPERATOR = r'(?:' + r'|'.join(regex.escape(op.value) for op in Op) + r')'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Raises LexError on the first character that can't start a lexeme.
        '''
        position = 0
        while position < len(line):
            match = type(self).PATTERN.match(line, position)
            if match is None:
                char = line[position]
                raise LexError("Couldn't lex {!r}".format(char),
                               char, position)
            if match.group('fraction') is not None:
                start = match.start('fraction')
                raise LexError("Fractional literal {!r} not supported"
                               .format(match.group(0)),
                               line[start], start)
            yield match
            position = match.end()

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the top-level groups the lexeme matched.
        '''
        return {key: match.group(key)
                for key
                in ('number', 'operator', 'space')
                if match.group(key) is not None}

    def parse(self, match):
        '''
        Turn a feedable lexeme into an operation.
        '''
        if match.group('number') is not None:
            value = int(match.group('digits'))
            if match.group('sign'):
                value = -value
            return Push(value)
        return Op(match.group('operator'))

    def operations(self, line):
        '''
        Yield the operations spelt by line, in order.
        '''
        for match in self.lex(line):
            if self.isfeedable(match):
                yield self.parse(match)


def tokenize(text):
    '''
    Return the list of operations in text.

    All or nothing: raises LexError without returning any operation if any
    part of text doesn't lex.
    '''
    return list(Lexer().operations(text))
