"""
ToyKV Value Index
=================
Secondary aggregate index: for each value, how many records hold it.

Two interchangeable implementations:
  - CountingValueIndex: value → int
  - NameSetValueIndex:  value → set of names holding it

Invariants:
  - count(v) == |{name : store[name] == v}| at every operation boundary
  - Aggregates never go negative; decrementing past zero raises
    IndexCorruptionError
  - An aggregate that reaches zero is removed, so count() of it reads 0
"""

from typing import Dict, List, Optional, Set


class IndexCorruptionError(Exception):
    """Index asked to drop a holder it never had."""
    pass


class ValueIndex:
    """
    Interface shared by both variants.

    increment/decrement take the name as well as the value. The counting
    variant ignores it; the name-set variant needs it to know which holder
    to add or drop.
    """

    kind = ""

    def count(self, value: str) -> int:
        raise NotImplementedError

    def increment(self, value: str, name: Optional[str] = None) -> None:
        raise NotImplementedError

    def decrement(self, value: str, name: Optional[str] = None) -> None:
        raise NotImplementedError

    def snapshot(self) -> Dict[str, List[str]]:
        """
        Sorted value → holders listing for dumps.
        Variants that do not track names return an empty list per value.
        """
        raise NotImplementedError

    def counts(self) -> Dict[str, int]:
        """Sorted value → holder count."""
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError


class CountingValueIndex(ValueIndex):
    """Keeps a bare counter per value."""

    kind = "count"

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def count(self, value: str) -> int:
        return self._counts.get(value, 0)

    def increment(self, value: str, name: Optional[str] = None) -> None:
        self._counts[value] = self._counts.get(value, 0) + 1

    def decrement(self, value: str, name: Optional[str] = None) -> None:
        current = self._counts.get(value, 0)
        if current <= 0:
            raise IndexCorruptionError(
                f"count for value '{value}' would go negative")
        if current == 1:
            del self._counts[value]
        else:
            self._counts[value] = current - 1

    def snapshot(self) -> Dict[str, List[str]]:
        return {value: [] for value in sorted(self._counts)}

    def counts(self) -> Dict[str, int]:
        return dict(sorted(self._counts.items()))

    def __len__(self) -> int:
        return len(self._counts)


class NameSetValueIndex(ValueIndex):
    """
    Keeps the explicit set of names per value.
    count() is the set size; names() lists the holders.
    """

    kind = "names"

    def __init__(self):
        self._holders: Dict[str, Set[str]] = {}

    def count(self, value: str) -> int:
        holders = self._holders.get(value)
        return len(holders) if holders else 0

    def names(self, value: str) -> List[str]:
        return sorted(self._holders.get(value, ()))

    def increment(self, value: str, name: Optional[str] = None) -> None:
        if name is None:
            raise ValueError("NameSetValueIndex.increment requires a name")
        self._holders.setdefault(value, set()).add(name)

    def decrement(self, value: str, name: Optional[str] = None) -> None:
        if name is None:
            raise ValueError("NameSetValueIndex.decrement requires a name")
        holders = self._holders.get(value)
        if not holders or name not in holders:
            raise IndexCorruptionError(
                f"'{name}' is not indexed under value '{value}'")
        holders.remove(name)
        if not holders:
            del self._holders[value]

    def snapshot(self) -> Dict[str, List[str]]:
        return {value: sorted(self._holders[value])
                for value in sorted(self._holders)}

    def counts(self) -> Dict[str, int]:
        return {value: len(self._holders[value])
                for value in sorted(self._holders)}

    def __len__(self) -> int:
        return len(self._holders)


INDEX_KINDS = {
    CountingValueIndex.kind: CountingValueIndex,
    NameSetValueIndex.kind: NameSetValueIndex,
}


def make_value_index(kind: str = "count") -> ValueIndex:
    """Build an empty index of the named variant ("count" or "names")."""
    cls = INDEX_KINDS.get(kind.lower())
    if cls is None:
        raise ValueError(
            f"Unknown index kind '{kind}'. "
            f"Available: {sorted(INDEX_KINDS)}"
        )
    return cls()
