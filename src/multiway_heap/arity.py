"""
Index arithmetic for heaps of uniform branching factor stored in a flat,
0-based array.

The children of the node at slot ``j`` occupy the contiguous slots
``first_child(j) .. first_child(j) + d - 1`` and the parent of slot ``i`` is
``(i - 1) // d``. Two interchangeable strategies are provided: one for an
arbitrary factor ``d`` and one for ``d = 2**p`` using shifts.
"""
from typing import Protocol


D_DEFAULT = 6
POWER_DEFAULT = 3
MAX_POWER = 62


class Arity(Protocol):
    """Structural interface consumed by the sift engine."""

    branching_factor: int

    def parent(self, i: int) -> int:
        ...

    def first_child(self, j: int) -> int:
        ...

    def last_child(self, j: int, size: int) -> int:
        ...

    def last_parent(self, size: int) -> int:
        ...


class DAryArity:
    """
    Arity strategy for an arbitrary positive branching factor.

    A factor of 1 is legal: every node has a single child and the heap
    degenerates into a sorted chain, costing O(N) per sift.

    Parameters
    ----------
    d : int
        The branching factor, at least 1.
    """

    __slots__ = ("branching_factor",)

    def __init__(self, d: int = D_DEFAULT) -> None:
        if isinstance(d, bool) or not isinstance(d, int):
            raise TypeError(
                f"Branching factor must be an int, got {type(d).__name__}"
            )
        if d < 1:
            raise ValueError(f"Branching factor must be >= 1, got {d}")
        self.branching_factor = d

    def parent(self, i: int) -> int:
        return (i - 1) // self.branching_factor

    def first_child(self, j: int) -> int:
        return j * self.branching_factor + 1

    def last_child(self, j: int, size: int) -> int:
        """Last child slot of ``j``, clipped to the last occupied slot."""
        last = j * self.branching_factor + self.branching_factor
        return last if last < size else size - 1

    def last_parent(self, size: int) -> int:
        """Highest slot with at least one child, ``-1`` when there is none."""
        return (size - 2) // self.branching_factor if size > 1 else -1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(d={self.branching_factor})"


class PowerOf2Arity:
    """
    Arity strategy for a branching factor of ``2**p``.

    Numerically equivalent to ``DAryArity(2**p)`` for every slot, including
    ``p = 0`` (a one-child chain).

    Parameters
    ----------
    p : int
        The exponent, between 0 and 62 inclusive.
    """

    __slots__ = ("power", "branching_factor")

    def __init__(self, p: int = POWER_DEFAULT) -> None:
        if isinstance(p, bool) or not isinstance(p, int):
            raise TypeError(f"Power must be an int, got {type(p).__name__}")
        if not 0 <= p <= MAX_POWER:
            raise ValueError(
                f"Power must be between 0 and {MAX_POWER}, got {p}"
            )
        self.power = p
        self.branching_factor = 1 << p

    def parent(self, i: int) -> int:
        return (i - 1) >> self.power

    def first_child(self, j: int) -> int:
        return (j << self.power) + 1

    def last_child(self, j: int, size: int) -> int:
        # (j << p) + 1 + (1 << p) - 1 == (j + 1) << p
        last = (j + 1) << self.power
        return last if last < size else size - 1

    def last_parent(self, size: int) -> int:
        return (size - 2) >> self.power if size > 1 else -1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(p={self.power})"
