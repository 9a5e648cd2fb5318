"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Ordered key -> files accumulator shared by the size and content-hash stages.
"""

from collections import defaultdict
from typing import Any, DefaultDict, Hashable, Iterator, List, Tuple


class GroupingMap:
    """
    Maps a numeric key (file size or content hash) to the files sharing it.

    Keys keep their first-insertion order and files keep the order they were
    added in. A group is created on first insertion and never removed, so
    every stored list is non-empty.
    """

    def __init__(self):
        self._groups: DefaultDict[Hashable, List[Any]] = defaultdict(list)

    def add(self, key: Hashable, item: Any) -> None:
        """Append item to the group for key, creating the group if absent."""
        self._groups[key].append(item)

    def __getitem__(self, key: Hashable) -> List[Any]:
        # Lookups must not create empty groups
        if key not in self._groups:
            raise KeyError(key)
        return self._groups[key]

    def __contains__(self, key: Hashable) -> bool:
        return key in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._groups)

    def items(self) -> Iterator[Tuple[Hashable, List[Any]]]:
        return iter(self._groups.items())

    def paths(self, key: Hashable) -> List[str]:
        """Paths stored under key, in insertion order."""
        return [item.path for item in self[key]]

    def duplicate_groups(self) -> Iterator[Tuple[Hashable, List[Any]]]:
        """Groups with at least two members, in key insertion order."""
        return ((key, group) for key, group in self._groups.items() if len(group) >= 2)

    def file_count(self) -> int:
        return sum(len(group) for group in self._groups.values())

    def __repr__(self):
        return f"<GroupingMap groups={len(self._groups)}, files={self.file_count()}>"
