"""Integer helpers: fibonacci, factorial, primality.

All functions take non-negative integers and raise ValueError otherwise.
"""

from math import isqrt

# Results are reported as unsigned 64-bit values
U64_MAX = 2**64 - 1


class ArithmeticOverflowError(OverflowError):
    """Result does not fit in an unsigned 64-bit integer."""


def _check_non_negative(n: int) -> None:
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")


def fibonacci(n: int) -> int:
    """nth Fibonacci number by linear iteration."""
    _check_non_negative(n)
    if n == 0:
        return 0
    if n == 1:
        return 1

    prev, curr = 0, 1
    for _ in range(2, n + 1):
        prev, curr = curr, prev + curr
    return curr


def fibonacci_naive(n: int) -> int:
    """Same result as fibonacci(), by double recursion (exponential time)."""
    _check_non_negative(n)
    if n < 2:
        return n
    return fibonacci_naive(n - 1) + fibonacci_naive(n - 2)


def factorial(n: int) -> int:
    """n! as a u64; raises ArithmeticOverflowError past 20!."""
    _check_non_negative(n)
    result = 1
    for i in range(2, n + 1):
        result *= i
        if result > U64_MAX:
            raise ArithmeticOverflowError(f"factorial({n}) exceeds u64 range")
    return result


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False

    for i in range(3, isqrt(n) + 1, 2):
        if n % i == 0:
            return False
    return True
