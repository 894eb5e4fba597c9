"""Container classification and type-driven processing and printing."""

from __future__ import annotations

import argparse
import math
import sys
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import islice
from typing import Any

from idiomkit.expressions import Timer


@dataclass(frozen=True)
class ContainerTraits:
    """What kind of container a type is and how it may be accessed."""

    name: str | None = None
    is_container: bool = False
    is_sequential: bool = False
    is_associative: bool = False
    has_random_access: bool = False
    features: str = ""

    def __str__(self) -> str:
        if not self.is_container:
            return "Unknown container type"
        return f"Container type: {self.name}\nFeatures: {self.features}"


_UNKNOWN = ContainerTraits()
_LIST = ContainerTraits(
    "list", True, True, False, True,
    "contiguous storage, random access, dynamic array",
)
_DEQUE = ContainerTraits(
    "deque", True, True, False, False,
    "linked blocks, fast insertion and removal at both ends",
)
_DICT = ContainerTraits(
    "dict", True, False, True, False,
    "associative container, key-value pairs, hashed lookup",
)


def container_traits(container: Any) -> ContainerTraits:
    """Return the traits of ``container``, which may be an instance or a type."""
    kind = container if isinstance(container, type) else type(container)
    if issubclass(kind, dict):
        return _DICT
    if issubclass(kind, deque):
        return _DEQUE
    if issubclass(kind, list):
        return _LIST
    return _UNKNOWN


def factorial(n: int) -> int:
    """Return ``n!``."""
    if n < 0:
        raise ValueError("factorial is not defined for negative numbers")
    return math.factorial(n)


def fibonacci(n: int) -> int:
    """Return the ``n``-th Fibonacci number, with fibonacci(0) == 0."""
    if n < 0:
        raise ValueError("fibonacci is not defined for negative numbers")
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


def has_size_method(obj: Any) -> bool:
    """Whether ``obj`` reports a size, through ``len()`` or a ``size()`` method."""
    return hasattr(type(obj), "__len__") or callable(getattr(obj, "size", None))


def _size(obj: Any) -> int:
    if hasattr(type(obj), "__len__"):
        return len(obj)
    return obj.size()


def is_streamable(obj: Any) -> bool:
    """Whether ``obj``'s type defines its own text representation."""
    cls = type(obj)
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


def optimize_process(container: Any) -> str:
    """Describe ``container`` using the access pattern its traits allow."""
    traits = container_traits(container)
    if traits.has_random_access:
        lines = ["Using random-access algorithm"]
        size = len(container)
        if size > 0:
            lines.append(f"  first element: {container[0]}")
        if size > 1:
            lines.append(f"  last element: {container[size - 1]}")
    elif traits.is_sequential:
        lines = ["Using sequential algorithm"]
        if container:
            lines.append(f"  first element: {container[0]}")
            lines.append(f"  last element: {container[-1]}")
    elif traits.is_associative:
        lines = ["Using associative algorithm"]
        if container:
            lines.append("  key-value pairs:")
            lines.extend(
                f"    {key} -> {value}"
                for key, value in islice(container.items(), 3)
            )
    else:
        lines = ["Using generic algorithm"]
        if has_size_method(container) and _size(container) > 0:
            lines.append(f"  container size: {_size(container)}")
            if isinstance(container, Iterable):
                lines.append("  contents:")
                lines.extend(
                    f"    {item}" if is_streamable(item) else "    (unprintable element)"
                    for item in container
                )
    return "\n".join(lines) + "\n"


def describe_size(container: Any) -> str:
    """Return the size of ``container``, or say that it has none."""
    if has_size_method(container):
        return f"Container size: {_size(container)}"
    return "This type has no size() method"


def smart_print(value: Any) -> str:
    """Print ``value`` in the best way its type allows and return the text."""
    if is_streamable(value):
        text = f"Value: {value}"
    elif has_size_method(value):
        text = f"Object has a size() method, size: {_size(value)}"
    else:
        text = "Cannot print this type directly"
    print(text)
    return text


def _common_type_name(items: Iterable[Any]) -> str:
    names = sorted({type(item).__name__ for item in items})
    return " | ".join(names) if names else "object"


def value_type_name(container: Any) -> str | None:
    """Name the element type of a known container, or ``None`` for other objects."""
    traits = container_traits(container)
    if not traits.is_container or isinstance(container, type):
        return None
    if traits.is_associative:
        keys = _common_type_name(container.keys())
        values = _common_type_name(container.values())
        return f"tuple[{keys}, {values}]"
    return _common_type_name(container)


class ContainerProcessor:
    """Reports a container's traits, size and traits-driven processing."""

    def process(self, container: Any) -> str:
        """Return the full report for ``container``."""
        return (
            f"{container_traits(container)}\n"
            f"{describe_size(container)}\n"
            f"{optimize_process(container)}"
        )


class _UserType:
    """Has neither a size nor a text representation."""

    __slots__ = ()


class _BetterUserType:
    """Has a size and a text representation."""

    def size(self) -> int:
        return 42

    def __str__(self) -> str:
        return "BetterUserType instance"


def main(argv: list[str] | None = None) -> int:
    """Run the container traits demonstration."""
    argparse.ArgumentParser(description="Container traits demonstration").parse_args(argv)
    try:
        print("===== Container traits demo =====")

        print("\n-- Computed values --")
        print(f"Factorial of 5: {factorial(5)}")
        print(f"Fibonacci number 10: {fibonacci(10)}")

        print("\n-- Container traits --")
        vec = [1, 2, 3, 4, 5]
        lst = deque([1.1, 2.2, 3.3])
        mp = {"one": 1, "two": 2}
        for label, container in (("List", vec), ("Deque", lst), ("Dict", mp)):
            print(f"\n{label} info:")
            print(container_traits(container))

        print("\n-- Processing by container traits --")
        for label, container in (("list", vec), ("deque", lst), ("dict", mp)):
            with Timer(f"processing {label}"):
                print(optimize_process(container), end="")

        print("\n-- Interface detection --")
        user, better = _UserType(), _BetterUserType()
        yes_no = {True: "yes", False: "no"}
        print(f"UserType has size(): {yes_no[has_size_method(user)]}")
        print(f"BetterUserType has size(): {yes_no[has_size_method(better)]}")
        print(f"UserType is printable: {yes_no[is_streamable(user)]}")
        print(f"BetterUserType is printable: {yes_no[is_streamable(better)]}")

        print("\n-- Smart printing --")
        for value in (42, "hello", vec, user, better):
            smart_print(value)

        print("\n-- Container processor --")
        processor = ContainerProcessor()
        for label, container in (("List", vec), ("Deque", lst), ("Dict", mp)):
            print(f"\nProcessing {label}:")
            print(processor.process(container), end="")

        print("\n-- Element types --")
        for container in (vec, {"pi": 3.14}, user):
            name = value_type_name(container)
            if name is None:
                print("Not a known container type")
            else:
                print(f"Container element type: {name}")

        print("\n===== End of container traits demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0