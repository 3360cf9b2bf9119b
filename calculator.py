from enum import Enum
from typing import Optional, Sequence, Tuple, Union


class Operation(Enum):
    PLUS = "plus"
    MINUS = "minus"
    TIMES = "times"
    DIVIDE = "divide"
    POW = "pow"
    ABS = "abs"
    FACT = "fact"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["Operation"]:
        """Parse an operation name case-insensitively, None if unknown."""
        if not name:
            return None
        try:
            return cls(name.lower())
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class CalculationError(Enum):
    NOT_ENOUGH_ARGUMENTS = "NotEnoughArguments"
    TOO_MANY_ARGUMENTS = "TooManyArguments"
    DIVIDE_BY_ZERO = "DivideByZero"
    NEGATIVE_FACTORIAL_NOT_SUPPORTED = "NegativeFactorialNotSupported"


CalculationOutcome = Tuple[bool, Union[int, CalculationError]]


INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


def to_int32(value: int) -> int:
    """Wrap an integer to 32-bit two's complement, like machine int arithmetic."""
    value &= 0xFFFFFFFF
    return value - 2 ** 32 if value > INT32_MAX else value


def add(args):
    """add two numbers together"""
    return to_int32(args[0] + args[1])


def subtract(args):
    """subtract two numbers together"""
    return to_int32(args[0] - args[1])


def multiply(args):
    """multiply two numbers together"""
    return to_int32(args[0] * args[1])


def divide(args):
    """divide two numbers, dropping the fractional part (rounds toward zero)"""
    quotient = abs(args[0]) // abs(args[1])
    return to_int32(quotient if (args[0] < 0) == (args[1] < 0) else -quotient)


def power(args):
    """raise a number to an integer power, wrapped to 32 bits"""
    base, exponent = args
    if exponent >= 0:
        return to_int32(pow(base, exponent, 2 ** 32))
    # 1 / 0 ** n saturates
    if base == 0:
        return INT32_MAX
    # |base| > 1 with a negative exponent is a proper fraction
    if base == 1:
        return 1
    if base == -1:
        return -1 if exponent % 2 else 1
    return 0


def absolute(args):
    """calculate absolute value of a number"""
    return to_int32(abs(args[0]))


def factorial(args):
    """calculate factorial of a number, wrapped to 32 bits"""
    result = 1
    # 2 ** 32 divides every factorial from 34! on
    for i in range(2, min(args[0], 34) + 1):
        result = (result * i) & 0xFFFFFFFF
    return to_int32(result)


_FUNCTION_MAP = {
    Operation.PLUS: add,
    Operation.MINUS: subtract,
    Operation.TIMES: multiply,
    Operation.DIVIDE: divide,
    Operation.POW: power,
    Operation.ABS: absolute,
    Operation.FACT: factorial,
}

_REQUIRED_ARGUMENTS = {
    Operation.PLUS: 2,
    Operation.MINUS: 2,
    Operation.TIMES: 2,
    Operation.DIVIDE: 2,
    Operation.POW: 2,
    Operation.ABS: 1,
    Operation.FACT: 1,
}

# Refuse to import with an operation that is not wired into both tables.
for _table in (_FUNCTION_MAP, _REQUIRED_ARGUMENTS):
    _missing = set(Operation) - set(_table)
    if _missing:
        raise RuntimeError(f"Operations not supported by the calculator: {sorted(op.name for op in _missing)}")


def _unsupported(operation) -> RuntimeError:
    return RuntimeError(f"Operation: {operation!r} not supported, was it added to the calculator tables?")


class Calculator:
    """
    Stateless validation and dispatch of calculator operations.

    Results are returned as ``(True, result)`` or ``(False, CalculationError)``;
    nothing here raises for bad input.
    """

    @staticmethod
    def required_argument_count(operation: Operation) -> int:
        """
        Number of arguments an operation works on.
        :param operation: calculation operation
        :return: 2 for the binary operations, 1 for abs and fact
        """
        try:
            return _REQUIRED_ARGUMENTS[operation]
        except KeyError:
            raise _unsupported(operation) from None

    def calculate(self, operation: Operation, args: Sequence[int]) -> CalculationOutcome:
        """
        Preform calculation if it can be invoked
        :param operation: calculation operation
        :param args: arguments to preform the calculation, in operand order
        :return: if the operation was successful and the result or the error.
        """
        expected_num_of_args = self.required_argument_count(operation)

        if len(args) < expected_num_of_args:
            return False, CalculationError.NOT_ENOUGH_ARGUMENTS

        if len(args) > expected_num_of_args:
            return False, CalculationError.TOO_MANY_ARGUMENTS

        if operation is Operation.DIVIDE and args[1] == 0:
            return False, CalculationError.DIVIDE_BY_ZERO

        if operation is Operation.FACT and args[0] < 0:
            return False, CalculationError.NEGATIVE_FACTORIAL_NOT_SUPPORTED

        return True, _FUNCTION_MAP[operation](list(args))
