"""Tests for the calculator dispatcher."""

import pytest

from calculator import INT32_MAX, INT32_MIN, CalculationError, Calculator, Operation, to_int32

BINARY = [Operation.PLUS, Operation.MINUS, Operation.TIMES, Operation.DIVIDE, Operation.POW]
UNARY = [Operation.ABS, Operation.FACT]


@pytest.fixture
def calc():
    return Calculator()


@pytest.mark.parametrize("operation", BINARY)
def test_binary_operations_require_two_arguments(calc, operation):
    assert calc.required_argument_count(operation) == 2


@pytest.mark.parametrize("operation", UNARY)
def test_unary_operations_require_one_argument(calc, operation):
    assert calc.required_argument_count(operation) == 1


@pytest.mark.parametrize("operation, args, expected", [
    (Operation.PLUS, [3, 4], 7),
    (Operation.MINUS, [3, 7], -4),
    (Operation.TIMES, [-3, 4], -12),
    (Operation.DIVIDE, [7, 2], 3),
    (Operation.DIVIDE, [-7, 2], -3),
    (Operation.DIVIDE, [7, -2], -3),
    (Operation.DIVIDE, [-7, -2], 3),
    (Operation.POW, [2, 10], 1024),
    (Operation.POW, [5, 0], 1),
    (Operation.POW, [2, -1], 0),
    (Operation.POW, [-1, -3], -1),
    (Operation.POW, [1, -5], 1),
    (Operation.ABS, [-8], 8),
    (Operation.ABS, [8], 8),
    (Operation.FACT, [0], 1),
    (Operation.FACT, [1], 1),
    (Operation.FACT, [5], 120),
])
def test_calculate(calc, operation, args, expected):
    assert calc.calculate(operation, args) == (True, expected)


@pytest.mark.parametrize("a", [-5, 0, 1, 100])
def test_divide_by_zero(calc, a):
    assert calc.calculate(Operation.DIVIDE, [a, 0]) == (False, CalculationError.DIVIDE_BY_ZERO)


def test_zero_to_negative_power_saturates(calc):
    assert calc.calculate(Operation.POW, [0, -1]) == (True, INT32_MAX)
    assert calc.calculate(Operation.POW, [0, -2]) == (True, INT32_MAX)


@pytest.mark.parametrize("n", [-1, -10])
def test_negative_factorial(calc, n):
    assert calc.calculate(Operation.FACT, [n]) == (False, CalculationError.NEGATIVE_FACTORIAL_NOT_SUPPORTED)


@pytest.mark.parametrize("operation", BINARY)
def test_binary_not_enough_arguments(calc, operation):
    assert calc.calculate(operation, []) == (False, CalculationError.NOT_ENOUGH_ARGUMENTS)
    assert calc.calculate(operation, [1]) == (False, CalculationError.NOT_ENOUGH_ARGUMENTS)


@pytest.mark.parametrize("operation", BINARY)
def test_binary_too_many_arguments(calc, operation):
    assert calc.calculate(operation, [1, 2, 3]) == (False, CalculationError.TOO_MANY_ARGUMENTS)


@pytest.mark.parametrize("operation", UNARY)
def test_unary_argument_count(calc, operation):
    assert calc.calculate(operation, []) == (False, CalculationError.NOT_ENOUGH_ARGUMENTS)
    assert calc.calculate(operation, [1, 2]) == (False, CalculationError.TOO_MANY_ARGUMENTS)


def test_arity_checked_before_divide_by_zero(calc):
    assert calc.calculate(Operation.DIVIDE, [1, 0, 0]) == (False, CalculationError.TOO_MANY_ARGUMENTS)


def test_unknown_operation_is_a_programming_error(calc):
    with pytest.raises(RuntimeError):
        calc.required_argument_count("plus")
    with pytest.raises(RuntimeError):
        calc.calculate("plus", [1, 2])


@pytest.mark.parametrize("name, expected", [
    ("plus", Operation.PLUS),
    ("Plus", Operation.PLUS),
    ("FACT", Operation.FACT),
    ("sqrt", None),
    ("", None),
    (None, None),
])
def test_operation_from_name(name, expected):
    assert Operation.from_name(name) is expected


def test_display_name():
    assert Operation.DIVIDE.display_name == "Divide"
    assert Operation.FACT.display_name == "Fact"


@pytest.mark.parametrize("value, expected", [
    (0, 0),
    (INT32_MAX, INT32_MAX),
    (INT32_MAX + 1, INT32_MIN),
    (INT32_MIN - 1, INT32_MAX),
    (2 ** 32, 0),
    (-1, -1),
])
def test_to_int32(value, expected):
    assert to_int32(value) == expected


@pytest.mark.parametrize("operation, args, expected", [
    (Operation.PLUS, [INT32_MAX, 1], INT32_MIN),
    (Operation.MINUS, [INT32_MIN, 1], INT32_MAX),
    (Operation.TIMES, [65536, 65536], 0),
    (Operation.DIVIDE, [INT32_MIN, -1], INT32_MIN),
    (Operation.ABS, [INT32_MIN], INT32_MIN),
    (Operation.POW, [2, 31], INT32_MIN),
    (Operation.POW, [2, 32], 0),
    (Operation.POW, [-2, 31], INT32_MIN),
    (Operation.POW, [10, 100000000], 0),
    (Operation.FACT, [12], 479001600),
    (Operation.FACT, [13], 1932053504),
    (Operation.FACT, [34], 0),
    (Operation.FACT, [2000], 0),
    (Operation.FACT, [INT32_MAX], 0),
])
def test_results_wrap_to_32_bits(calc, operation, args, expected):
    assert calc.calculate(operation, args) == (True, expected)


def test_large_power_stays_in_range(calc):
    is_success, result = calc.calculate(Operation.POW, [3, INT32_MAX])
    assert is_success
    assert INT32_MIN <= result <= INT32_MAX
