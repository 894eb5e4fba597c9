"""Lazily evaluated vector expressions built from arithmetic operators."""

from __future__ import annotations

import argparse
import math
import operator
import sys
import time
from abc import ABC, abstractmethod
from numbers import Real
from typing import Callable, Iterable, Iterator, TextIO


class VectorExpression(ABC):
    """A vector-valued expression whose elements are computed on demand."""

    @abstractmethod
    def __getitem__(self, index: int) -> float:
        """Return the element at ``index``."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of elements."""

    def __iter__(self) -> Iterator[float]:
        return (self[i] for i in range(len(self)))

    def __add__(self, other: object) -> VectorExpression:
        if not isinstance(other, VectorExpression):
            return NotImplemented
        return VectorSum(self, other)

    def __sub__(self, other: object) -> VectorExpression:
        if not isinstance(other, VectorExpression):
            return NotImplemented
        return VectorDifference(self, other)

    def __mul__(self, scalar: object) -> VectorExpression:
        if isinstance(scalar, bool) or not isinstance(scalar, Real):
            return NotImplemented
        return VectorScaled(self, scalar)

    def __rmul__(self, scalar: object) -> VectorExpression:
        return self.__mul__(scalar)

    def evaluate(self) -> Vector:
        """Compute every element and store the result in a new vector."""
        return Vector(self)


class Vector(VectorExpression):
    """A vector that stores its elements."""

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._data = [float(v) for v in values]

    @classmethod
    def filled(cls, size: int, value: float = 0.0) -> Vector:
        """Return a vector of ``size`` elements all equal to ``value``."""
        if size < 0:
            raise ValueError("vector size must not be negative")
        return cls([value] * size)

    def __getitem__(self, index: int) -> float:
        return self._data[index]

    def __setitem__(self, index: int, value: float) -> None:
        self._data[index] = float(value)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorExpression):
            return NotImplemented
        return len(self) == len(other) and all(
            x == y for x, y in zip(self, other)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector({self._data!r})"


def _check_sizes(lhs: VectorExpression, rhs: VectorExpression) -> None:
    if not isinstance(lhs, VectorExpression) or not isinstance(rhs, VectorExpression):
        raise TypeError("operands must be vector expressions")
    if len(lhs) != len(rhs):
        raise ValueError("vector sizes do not match")


class VectorSum(VectorExpression):
    """Element-wise sum of two expressions."""

    def __init__(self, lhs: VectorExpression, rhs: VectorExpression) -> None:
        _check_sizes(lhs, rhs)
        self._lhs = lhs
        self._rhs = rhs

    def __getitem__(self, index: int) -> float:
        return self._lhs[index] + self._rhs[index]

    def __len__(self) -> int:
        return len(self._lhs)

    def __iter__(self) -> Iterator[float]:
        return map(operator.add, self._lhs, self._rhs)


class VectorDifference(VectorExpression):
    """Element-wise difference of two expressions."""

    def __init__(self, lhs: VectorExpression, rhs: VectorExpression) -> None:
        _check_sizes(lhs, rhs)
        self._lhs = lhs
        self._rhs = rhs

    def __getitem__(self, index: int) -> float:
        return self._lhs[index] - self._rhs[index]

    def __len__(self) -> int:
        return len(self._lhs)

    def __iter__(self) -> Iterator[float]:
        return map(operator.sub, self._lhs, self._rhs)


class VectorScaled(VectorExpression):
    """An expression multiplied by a scalar."""

    def __init__(self, expr: VectorExpression, scalar: float) -> None:
        if not isinstance(expr, VectorExpression):
            raise TypeError("operand must be a vector expression")
        self._expr = expr
        self._scalar = float(scalar)

    def __getitem__(self, index: int) -> float:
        return self._expr[index] * self._scalar

    def __len__(self) -> int:
        return len(self._expr)

    def __iter__(self) -> Iterator[float]:
        scalar = self._scalar
        return (x * scalar for x in self._expr)


class VectorApply(VectorExpression):
    """A function applied to every element of an expression."""

    def __init__(self, expr: VectorExpression, func: Callable[[float], float]) -> None:
        if not isinstance(expr, VectorExpression):
            raise TypeError("operand must be a vector expression")
        self._expr = expr
        self._func = func

    def __getitem__(self, index: int) -> float:
        return self._func(self._expr[index])

    def __len__(self) -> int:
        return len(self._expr)

    def __iter__(self) -> Iterator[float]:
        return map(self._func, self._expr)


def apply(expr: VectorExpression, func: Callable[[float], float]) -> VectorApply:
    """Return an expression applying ``func`` to each element of ``expr``."""
    return VectorApply(expr, func)


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def sqrt(expr: VectorExpression) -> VectorApply:
    """Element-wise square root; negative elements give NaN."""
    return apply(expr, _sqrt)


def absolute(expr: VectorExpression) -> VectorApply:
    """Element-wise absolute value."""
    return apply(expr, abs)


def square(expr: VectorExpression) -> VectorApply:
    """Element-wise square."""
    return apply(expr, lambda x: x * x)


class Timer:
    """Context manager reporting how long its block took, in microseconds."""

    def __init__(self, operation: str, out: TextIO | None = None) -> None:
        self.operation = operation
        self._out = out
        self._start = 0
        self.elapsed_us: int | None = None

    @property
    def _stream(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def __enter__(self) -> Timer:
        print(f"Starting {self.operation}", file=self._stream)
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_us = (time.perf_counter_ns() - self._start) // 1000
        print(
            f"{self.operation} finished in {self.elapsed_us} microseconds",
            file=self._stream,
        )


def format_vector(vec: VectorExpression, name: str, max_display: int = 10) -> str:
    """Render at most ``max_display`` elements of ``vec`` with its size."""
    size = len(vec)
    shown = ", ".join(format(vec[i], "g") for i in range(min(size, max_display)))
    if size > max_display:
        shown += ", ..."
    return f"{name} = [{shown}] (size: {size})"


def traditional_add(a: Vector, b: Vector) -> Vector:
    """Add two vectors eagerly."""
    if len(a) != len(b):
        raise ValueError("vector sizes do not match")
    return Vector(x + y for x, y in zip(a, b))


def traditional_complex(a: Vector, b: Vector, c: Vector, scalar: float) -> Vector:
    """Compute ``a + b * scalar - c`` eagerly."""
    if len(a) != len(b) or len(a) != len(c):
        raise ValueError("vector sizes do not match")
    return Vector(x + y * scalar - z for x, y, z in zip(a, b, c))


def compare_performance(size: int, out: TextIO | None = None) -> bool:
    """Time lazy and eager evaluation of ``a + b * s - c``; report if they agree."""
    stream = out if out is not None else sys.stdout
    a = Vector.filled(size, 1.0)
    b = Vector.filled(size, 2.0)
    c = Vector.filled(size, 3.0)
    scalar = 2.5

    with Timer("expression evaluation (a + b * scalar - c)", stream):
        lazy = (a + b * scalar - c).evaluate()
    with Timer("traditional evaluation (a + b * scalar - c)", stream):
        eager = traditional_complex(a, b, c, scalar)

    correct = all(abs(x - y) <= 1e-10 for x, y in zip(lazy[:10] if False else list(lazy)[:10], list(eager)[:10]))
    print(f"Results match: {'yes' if correct else 'no'}", file=stream)
    return correct


def main(argv: list[str] | None = None) -> int:
    """Run the vector expression demonstration."""
    argparse.ArgumentParser(description="Vector expression demonstration").parse_args(argv)
    try:
        print("===== Vector expressions demo =====")
        a = Vector.filled(5, 1.0)
        b = Vector.filled(5, 2.0)
        c = Vector.filled(5, 3.0)
        a[1], a[3] = 1.5, 1.7
        b[2], b[4] = 2.5, 2.8
        c[0], c[2] = 3.2, 3.6

        print("\n-- Initial vectors --")
        for vec, name in ((a, "a"), (b, "b"), (c, "c")):
            print(format_vector(vec, name))

        print("\n-- Basic operations --")
        diff = (a - b).evaluate()
        print(format_vector((a + b).evaluate(), "a + b"))
        print(format_vector(diff, "a - b"))
        print(format_vector((a * 2.5).evaluate(), "a * 2.5"))
        print(format_vector((3.0 * b).evaluate(), "3.0 * b"))

        print("\n-- Compound expressions --")
        print(format_vector((a + b * 2.0 - c).evaluate(), "a + b * 2.0 - c"))
        print(format_vector(((a + b) * 2.0).evaluate(), "(a + b) * 2.0"))

        print("\n-- Element-wise functions --")
        print(format_vector(sqrt(a).evaluate(), "sqrt(a)"))
        print(format_vector(absolute(diff).evaluate(), "abs(a - b)"))
        print(format_vector(square(a).evaluate(), "square(a)"))
        print(format_vector(
            sqrt(square(a) + square(b)).evaluate(), "sqrt(square(a) + square(b))"
        ))

        print("\n-- Lazy evaluation --")
        expression = a + b * 2.0 - c
        print("Expression built but not evaluated yet")
        result = expression.evaluate()
        print("Expression evaluated into a result vector")
        print(format_vector(result, "result"))

        for label, size in (("small", 1000), ("medium", 100_000), ("large", 1_000_000)):
            print(f"\n-- Performance comparison ({label} vectors) --")
            compare_performance(size)

        print("\n===== End of vector expressions demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0