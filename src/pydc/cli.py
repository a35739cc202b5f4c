from os import isatty
from sys import stdin, stdout, exit
import sys
from argparse import ArgumentParser, OPTIONAL
import traceback

from prompt_toolkit import PromptSession

from .util import RPNError
from .machine import Machine
from .lexer import Lexer
from .executor import process
from .operation import Signal


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Debatable. Interferes with X11 selection.
                                    mouse_support=True,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the dc calculator.
    '''

    DEFAULT_PROMPT = '> '

    def report(self, error):
        '''
        Print a user error, with its traceback if verbose.
        '''
        print(error.args[0], file=sys.stderr)
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__,
                                      file=sys.stderr)

    def _chunks(self):
        '''
        Yield every chunk of input to run, in order.
        '''
        yield from self.args.expressions
        for name in self.args.files + self.args.positional_files:
            try:
                with open(name) as fp:
                    text = fp.read()
            except OSError as e:
                print('{}: {}'.format(name, e.strerror),
                      file=sys.stderr)
                exit(1)
            yield text
        if self.args.expressions or self.args.files or \
           self.args.positional_files:
            return
        yield from self._prompting_input()

    def dumper(self):
        '''
        Dump all lexemes: groups, text, and operation.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<operation>')
        for chunk in self._chunks():
            try:
                for match in lexer.lex(chunk):
                    groups = lexer.matchedgroups(match)
                    parsed = lexer.parse(match) \
                        if lexer.isfeedable(match) else None
                    print(*groups.keys(),
                          repr(match.group(0)),
                          parsed,
                          sep='\t')
            except RPNError as e:
                self.report(e)

    def executor(self):
        '''
        Run machine (dc calculator) over all input, until it quits.
        '''
        machine = Machine()
        for chunk in self._chunks():
            try:
                outcome = process(machine, chunk, report=self.report)
            # Abort entire rest of chunk
            except RPNError as e:
                self.report(e)
                continue
            if outcome.signal is Signal.HALT:
                break

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin, if either:

        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Arbitrary precision RPN desk calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-e', '--expression',
                                          action='append',
                                          dest='expressions',
                                          metavar='EXPR',
                                          help='Run EXPR.')
        self.argument_parser.add_argument('-f', '--file',
                                          action='append',
                                          dest='files',
                                          metavar='SCRIPT',
                                          help='Run the contents of SCRIPT.')
        self.argument_parser.add_argument('-p', '--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('positional_files',
                                          nargs='*',
                                          metavar='FILE',
                                          help='Files to run one by one.')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=[],
                                          files=[])

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
