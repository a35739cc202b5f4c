from functools import wraps
import sys


# Python 3.11+ refuses int <-> str conversions past 4300 digits.
if hasattr(sys, 'set_int_max_str_digits'):
    sys.set_int_max_str_digits(0)


class RPNError(Exception):
    pass


class LexError(RPNError):
    '''
    Input that isn't part of the command language.

    Aborts the whole chunk it was found in.
    '''
    def __init__(self, message, char, position):
        super().__init__(message)
        self.char = char
        self.position = position


class MachineError(RPNError):
    '''
    Recoverable error from a single operation.
    '''


class StackEmptyError(MachineError):
    def __init__(self, message='stack empty!'):
        super().__init__(message)


class DivisionByZeroError(MachineError):
    def __init__(self, message='division by zero'):
        super().__init__(message)


class ConversionError(MachineError):
    pass


class DomainError(MachineError):
    pass


def wrap_user_errors(fmt):
    '''
    Ugly hack decorator that converts exceptions to user errors.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise RPNError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator


def truncdivmod(x, y):
    '''
    Like divmod, but the quotient is truncated toward zero.

    The remainder takes the sign of x, so x == y * q + r always holds.
    '''
    if y == 0:
        raise DivisionByZeroError()
    q = abs(x) // abs(y)
    if (x < 0) != (y < 0):
        q = -q
    return q, x - y * q


def tobyte(value, what='value', maximum=255):
    '''
    Checked conversion of a stack value into a register sized integer.
    '''
    if not 0 <= value <= maximum:
        raise ConversionError('{} out of range 0..{}'.format(what, maximum))
    return int(value)
