"""Solution container for subset-selection problems."""

from typing import Iterable, Iterator, List, Optional, Set


class Solution:
    """
    Ordered collection of selected domain elements with a cached cost.

    Elements keep their insertion order so iteration is deterministic.
    A membership set mirrors the list for O(1) `in` checks.

    Attributes:
        elements: Selected elements, in insertion order
        cost: Cached objective value, kept in sync by the evaluator
    """

    def __init__(self, elements: Optional[Iterable[int]] = None, cost: float = float('inf')):
        self.elements: List[int] = []
        self._members: Set[int] = set()
        self.cost = cost
        if elements is not None:
            for e in elements:
                self.add(e)

    def add(self, element: int) -> None:
        self.elements.append(element)
        self._members.add(element)

    def remove(self, element: int) -> None:
        """Remove `element`; raises ValueError if it is not selected."""
        self.elements.remove(element)
        self._members.discard(element)

    def copy(self) -> 'Solution':
        """Independent copy (membership and cost)."""
        return Solution(self.elements, cost=self.cost)

    def sort(self) -> None:
        self.elements.sort()

    def __contains__(self, element) -> bool:
        return element in self._members

    def __iter__(self) -> Iterator[int]:
        # Iterate over a snapshot so callers may mutate while looping
        return iter(list(self.elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Solution):
            return NotImplemented
        return self.elements == other.elements and self.cost == other.cost

    def __repr__(self) -> str:
        return f"Solution: cost=[{self.cost}], size=[{len(self.elements)}], elements={self.elements}"
