"""
Scriptura - Storage Location Tag

A closed set of two cases describing where a value lives:

    Local(value)   - materialized in memory
    Remote(url)    - only referenced; the URL is opaque to this system

Callers branch once with isinstance; nothing here fetches or resolves a
remote reference.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Local(Generic[T]):
    value: T

    @property
    def is_local(self) -> bool:
        return True


@dataclass(frozen=True)
class Remote:
    url: str

    @property
    def is_local(self) -> bool:
        return False


Storage = Union[Local[T], Remote]


def local_value(storage: "Storage[T]") -> Optional[T]:
    """Return the held value, or None for a remote reference."""
    if isinstance(storage, Local):
        return storage.value
    return None
