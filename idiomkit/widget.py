"""A named widget holding an ordered list of features."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO


class Widget:
    """A widget with a name and a list of features."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._features: list[str] = []

    def add_feature(self, feature: str) -> None:
        """Append a feature."""
        self._features.append(feature)

    @property
    def feature_count(self) -> int:
        """Number of features."""
        return len(self._features)

    def feature(self, index: int) -> str:
        """Return the feature at ``index``, or an empty string if out of range."""
        if 0 <= index < len(self._features):
            return self._features[index]
        return ""

    @property
    def features(self) -> tuple[str, ...]:
        """All features in insertion order."""
        return tuple(self._features)

    def copy(self) -> Widget:
        """Return an independent copy."""
        clone = Widget(self.name)
        clone._features = list(self._features)
        return clone

    __copy__ = copy

    def swap(self, other: Widget) -> None:
        """Exchange the whole state with ``other``."""
        self.name, other.name = other.name, self.name
        self._features, other._features = other._features, self._features

    def describe(self) -> str:
        """Return a multi-line description of the widget."""
        lines = [f"Widget name: {self.name}", f"Features ({len(self._features)}):"]
        lines.extend(f"  {i}. {f}" for i, f in enumerate(self._features, start=1))
        return "\n".join(lines) + "\n"

    def display(self, out: TextIO | None = None) -> None:
        """Write the description to ``out`` (standard output by default)."""
        (out if out is not None else sys.stdout).write(self.describe())

    def __repr__(self) -> str:
        return f"Widget(name={self.name!r}, features={self._features!r})"


def swap(a: Widget, b: Widget) -> None:
    """Exchange the state of two widgets."""
    a.swap(b)


def main(argv: list[str] | None = None) -> int:
    """Run the widget demonstration."""
    argparse.ArgumentParser(description="Widget demonstration").parse_args(argv)
    try:
        print("===== Widget demo =====")
        widget = Widget("Smartphone")
        for feature in ("Touchscreen", "Camera", "GPS"):
            widget.add_feature(feature)

        print("\nOriginal widget:")
        widget.display()

        print("\nCopied widget:")
        copy_widget = widget.copy()
        copy_widget.name = "Tablet"
        copy_widget.add_feature("Large screen")
        copy_widget.display()

        print("\nOriginal widget unchanged:")
        widget.display()

        print("\nSwapping the two widgets:")
        swap(widget, copy_widget)
        print("Original after swap:")
        widget.display()
        print("Copy after swap:")
        copy_widget.display()

        print("\nTaking over a widget:")
        moved_widget = copy_widget
        moved_widget.display()

        print("\n===== End of widget demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0