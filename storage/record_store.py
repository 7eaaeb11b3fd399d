"""
ToyKV Record Store
==================
Owns the name → value mapping.

Rules:
  - At most one value per name
  - Any string is accepted as a name or a value (empty string included)
  - Absence is represented by NULL, never by a stored placeholder, so an
    erased name is indistinguishable from one that was never set
"""

from typing import Dict, List, Optional, Tuple


# Sentinel returned by read() for absent names. Python's None plays the role
# of "no value", which keeps "" a legal stored value.
NULL = None

# What GET prints for an absent name.
NULL_DISPLAY = "NULL"


class RecordStore:
    """
    Plain dict-backed record storage.

    The store performs no journaling and no index maintenance; the
    MutationEngine is its only writer and is responsible for both.
    """

    def __init__(self):
        self._records: Dict[str, str] = {}

    def read(self, name: str) -> Optional[str]:
        """Return the value stored under name, or NULL if absent."""
        return self._records.get(name, NULL)

    def write(self, name: str, value: str) -> None:
        self._records[name] = value

    def erase(self, name: str) -> None:
        """Remove name. Erasing an absent name is a no-op."""
        self._records.pop(name, None)

    def contains(self, name: str) -> bool:
        return name in self._records

    def items(self) -> List[Tuple[str, str]]:
        """Sorted (name, value) snapshot, for dump listings."""
        return sorted(self._records.items())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: str) -> bool:
        return self.contains(name)
