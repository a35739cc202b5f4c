from collections import deque
import math
import operator

from .operation import Op, Push, Signal
from .util import (DomainError,
                   StackEmptyError,
                   tobyte,
                   truncdivmod,
                   wrap_user_errors)


def _write(text):
    print(text, end='', flush=True)


class Machine:
    '''
    Arbitrary precision integer stack machine (dc calculator).

    Takes operations and runs them. Every operation either fully succeeds or
    raises an RPNError leaving the stack and registers untouched.
    '''

    DEFAULT_IRADIX = 10
    DEFAULT_ORADIX = 10
    DEFAULT_PRECISION = 0
    REGISTER_MAX = 255
    # Largest power ^ may build, in bits.
    EXP_MAX_BITS = 2 ** 24

    def __init__(self, emit=None):
        '''
        Create empty stack machine.

        :param emit: Output sink, called with the text of every printed value.
        '''
        self.stack = deque()
        self.iradix = type(self).DEFAULT_IRADIX
        self.oradix = type(self).DEFAULT_ORADIX
        self.precision = type(self).DEFAULT_PRECISION
        self.emit = emit or _write

    def feed(self, operation):
        '''
        Run a single operation on the machine.

        Return Signal.HALT if the machine should not be fed anymore.
        '''
        if isinstance(operation, Push):
            self.pshstack(operation.value)
            return Signal.CONTINUE
        f = type(self).FUNCTIONS[operation]
        return f(self) or Signal.CONTINUE

    def peek(self):
        '''
        Return the element on top of the stack, None if empty.
        '''
        return self.stack[-1] if self.stack else None

    def _args(self, n):
        '''
        Return the n topmost elements, bottommost first, without popping.
        '''
        if len(self.stack) < n:
            raise StackEmptyError()
        return [self.stack[i] for i in range(-n, 0)]

    def _replace(self, n, *new):
        '''
        Pop n elements, then push all of new, leftmost at the bottom.
        '''
        for _ in range(n):
            self.stack.pop()
        self.stack.extend(new)

    @wrap_user_errors('Not an integer')
    def pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend([operator.index(value) for value in new])

    def popstack(self):
        '''
        Pop and return element on top of stack.
        '''
        if not self.stack:
            raise StackEmptyError()
        return self.stack.pop()

    def add(self):
        x, y = self._args(2)
        self._replace(2, x + y)

    def sub(self):
        x, y = self._args(2)
        self._replace(2, x - y)

    def mul(self):
        x, y = self._args(2)
        self._replace(2, x * y)

    def div(self):
        '''
        Divide second from top by top, truncating toward zero.
        '''
        x, y = self._args(2)
        quotient, _ = truncdivmod(x, y)
        self._replace(2, quotient)

    def mod(self):
        '''
        Remainder of div; its sign follows the dividend.
        '''
        x, y = self._args(2)
        _, remainder = truncdivmod(x, y)
        self._replace(2, remainder)

    def divrem(self):
        '''
        Push remainder, then quotient, so the quotient ends up on top.
        '''
        x, y = self._args(2)
        quotient, remainder = truncdivmod(x, y)
        self._replace(2, remainder, quotient)

    @wrap_user_errors('Cannot raise to that power')
    def exp(self):
        x, y = self._args(2)
        if y < 0:
            raise DomainError('negative exponent')
        if (abs(x).bit_length() - 1) * y > type(self).EXP_MAX_BITS:
            raise DomainError('power too large')
        self._replace(2, x ** y)

    def sqrt(self):
        '''
        Integer square root, truncated.
        '''
        x, = self._args(1)
        if x < 0:
            raise DomainError('square root of negative number')
        self._replace(1, math.isqrt(x))

    def modexp(self):
        '''
        Compute base ^ exponent mod modulus, pushed in that order.

        Uses square and multiply, so huge exponents are fine. The result is
        always in [0, modulus).
        '''
        base, exponent, modulus = self._args(3)
        if modulus <= 0:
            raise DomainError('modulus must be positive')
        if exponent < 0:
            raise DomainError('exponent must be non-negative')
        if modulus == 1:
            result = 0
        else:
            result = pow(base, exponent, modulus)
        self._replace(3, result)

    def dupstack(self):
        '''
        Duplicate element at top of stack, if any.
        '''
        if self.stack:
            self.stack.append(self.stack[-1])

    def revstack(self):
        '''
        Swap two elements at top of stack, if there are two.
        '''
        if len(self.stack) >= 2:
            top = self.stack.pop()
            second = self.stack.pop()
            self.stack.extend((top, second))

    def clrstack(self):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()

    def printtop(self):
        '''
        Print the element on the top of the stack.
        '''
        if not self.stack:
            raise StackEmptyError()
        self.emit('{}\n'.format(self.stack[-1]))

    def printpop(self):
        '''
        Pop and print element at top of stack, without a newline.
        '''
        value, = self._args(1)
        self.emit(str(value))
        self._replace(1)

    def printstack(self):
        '''
        Print all elements on the stack, bottom of the stack first.
        '''
        if not self.stack:
            raise StackEmptyError()
        for text in ['{}\n'.format(value) for value in self.stack]:
            self.emit(text)

    def _storeregister(self, name):
        value, = self._args(1)
        converted = tobyte(value, what=name,
                           maximum=type(self).REGISTER_MAX)
        self._replace(1)
        setattr(self, name, converted)

    def storeiradix(self):
        '''
        Set input radix. Stored only; literals are always decimal.
        '''
        self._storeregister('iradix')

    def storeoradix(self):
        '''
        Set output radix. Stored only; output is always decimal.
        '''
        self._storeregister('oradix')

    def storeprecision(self):
        self._storeregister('precision')

    def loadiradix(self):
        self.pshstack(self.iradix)

    def loadoradix(self):
        self.pshstack(self.oradix)

    def loadprecision(self):
        self.pshstack(self.precision)

    def exit(self):
        return Signal.HALT

    # Language mapping to stack operations.
    FUNCTIONS = {
        Op.ADD: add,
        Op.SUB: sub,
        Op.MUL: mul,
        Op.DIV: div,
        Op.MOD: mod,
        Op.DIVREM: divrem,
        Op.EXP: exp,
        Op.SQRT: sqrt,
        Op.MODEXP: modexp,
        Op.DUPLICATE: dupstack,
        Op.REVERSE: revstack,
        Op.CLEAR: clrstack,
        Op.PRINTPEEK: printtop,
        Op.PRINTPOP: printpop,
        Op.PRINTALL: printstack,
        Op.SETIRADIX: storeiradix,
        Op.SETORADIX: storeoradix,
        Op.SETPRECISION: storeprecision,
        Op.GETIRADIX: loadiradix,
        Op.GETORADIX: loadoradix,
        Op.GETPRECISION: loadprecision,
        Op.EXIT: exit,
    }
    assert FUNCTIONS.keys() == set(Op)
