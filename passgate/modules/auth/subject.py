"""
Authenticated subject.

Principals are stored per contributing owner so that one login module can
withdraw its own principals without disturbing those of its siblings, even
when two modules contribute the same value.
"""

from typing import Any, Dict, FrozenSet, Hashable, Iterable


class Subject:
    """Identity container that login modules attach principals to."""

    def __init__(self):
        self._contributions: Dict[Any, FrozenSet[Hashable]] = {}

    @property
    def principals(self) -> FrozenSet[Hashable]:
        """Union of all contributed principals."""
        result: FrozenSet[Hashable] = frozenset()
        for values in self._contributions.values():
            result |= values
        return result

    def principals_of(self, owner: Any) -> FrozenSet[Hashable]:
        """Principals contributed by one owner."""
        return self._contributions.get(owner, frozenset())

    def add_principals(self, owner: Any, principals: Iterable[Hashable]) -> None:
        """Merge principals into the owner's contribution."""
        self._contributions[owner] = self.principals_of(owner) | frozenset(principals)

    def remove_principals(self, owner: Any) -> FrozenSet[Hashable]:
        """Withdraw and return everything the owner contributed."""
        return self._contributions.pop(owner, frozenset())

    def clear(self) -> None:
        self._contributions.clear()

    def __contains__(self, principal: Hashable) -> bool:
        return principal in self.principals

    def __len__(self) -> int:
        return len(self.principals)

    def __repr__(self) -> str:
        return f"Subject(principals={sorted(map(str, self.principals))})"
