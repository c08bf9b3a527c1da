"""Paired move representation for insertion, removal and exchange."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PairedMove:
    """
    A local-search move as an (element in, element out) pair.

    - Insertion: (e, None)
    - Removal:   (None, e)
    - Exchange:  (e_in, e_out)

    Both sides None is the null move, committed when no admissible move
    was found; it leaves the solution unchanged.
    """
    cand_in: Optional[int] = None
    cand_out: Optional[int] = None

    @classmethod
    def insertion(cls, element: int) -> 'PairedMove':
        if element is None:
            raise ValueError("insertion move needs an element")
        return cls(element, None)

    @classmethod
    def removal(cls, element: int) -> 'PairedMove':
        if element is None:
            raise ValueError("removal move needs an element")
        return cls(None, element)

    @classmethod
    def exchange(cls, elem_in: int, elem_out: int) -> 'PairedMove':
        if elem_in is None or elem_out is None:
            raise ValueError("exchange move needs both elements")
        return cls(elem_in, elem_out)

    @property
    def kind(self) -> str:
        if self.cand_in is not None and self.cand_out is not None:
            return 'exchange'
        if self.cand_in is not None:
            return 'insertion'
        if self.cand_out is not None:
            return 'removal'
        return 'null'

    @property
    def is_null(self) -> bool:
        return self.cand_in is None and self.cand_out is None


NULL_MOVE = PairedMove()
