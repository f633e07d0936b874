"""
Scriptura - Verse Numbers

A verse is identified either by a single number or by an inclusive range
("Single(5)", "Range(5, 7)").

Ordering:
    Values compare by their first number. At an equal first number a
    Single sorts before a Range, and two Ranges fall back to their end:

        Single(5) < Range(5, 7) < Range(5, 9) < Single(6)
"""
from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

from core.errors import InvalidVerseNumberError, InvalidVerseRangeError


def compare(left: "VerseNumber", right: "VerseNumber") -> int:
    """Three-way comparison implementing the verse number total order."""
    if left.first != right.first:
        return -1 if left.first < right.first else 1

    if isinstance(left, Single) and isinstance(right, Single):
        return 0
    if isinstance(left, Single):
        return -1
    if isinstance(right, Single):
        return 1

    if left.end != right.end:
        return -1 if left.end < right.end else 1
    return 0


@functools.total_ordering
class VerseNumber(ABC):
    """Base class for Single and Range."""

    __slots__ = ()

    @property
    @abstractmethod
    def first(self) -> int:
        ...

    @abstractmethod
    def expand(self) -> Iterator[int]:
        """Lazily yield every verse integer this value denotes."""

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VerseNumber):
            return NotImplemented
        return compare(self, other) < 0

    @staticmethod
    def parse(text: str) -> "VerseNumber":
        """
        Parse "5" or "5-7".

        Raises:
            ValueError: If the text is not one of the two forms.
        """
        start, sep, end = text.strip().partition("-")
        if sep:
            return Range(int(start), int(end))
        return Single(int(start))


@dataclass(frozen=True)
class Single(VerseNumber):
    number: int

    def __post_init__(self) -> None:
        if self.number < 1:
            raise InvalidVerseNumberError(self.number)

    @property
    def first(self) -> int:
        return self.number

    def expand(self) -> Iterator[int]:
        yield self.number

    def __str__(self) -> str:
        return str(self.number)


@dataclass(frozen=True)
class Range(VerseNumber):
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidVerseRangeError(self.start, self.end)
        if self.start < 1:
            raise InvalidVerseNumberError(self.start)

    @property
    def first(self) -> int:
        return self.start

    def expand(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def overlaps(self, other: "Range") -> bool:
        """Closed-interval overlap."""
        return not (self.end < other.start or other.end < self.start)

    def as_tuple(self) -> tuple:
        return (self.start, self.end)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"
