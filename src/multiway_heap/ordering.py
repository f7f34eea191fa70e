"""Strict total orders over heap keys."""
from typing import Any, Callable, Optional


LessThan = Callable[[Any, Any], bool]


def natural_less(a: Any, b: Any) -> bool:
    """Order keys by their own ``__lt__``."""
    return a < b


class Ordering:
    """
    A strict "less than" predicate used by the sift engine.

    The engine always keeps the *greatest* key under this ordering at the
    root, so a min-oriented heap is obtained by handing it the reversed
    ordering rather than by a second copy of the sift code.

    Parameters
    ----------
    comparator : Callable[[Any, Any], bool], optional
        Returns True when its first argument is strictly less than its
        second. If None, the keys' natural ordering is used.
    reverse : bool
        If True, swap the arguments of the predicate, by default False.
    """

    __slots__ = ("comparator", "reverse", "_less")

    def __init__(
        self,
        comparator: Optional[LessThan] = None,
        reverse: bool = False
    ) -> None:
        if comparator is not None and not callable(comparator):
            raise TypeError("Comparator must be callable")
        self.comparator = comparator
        self.reverse = reverse

        less = natural_less if comparator is None else comparator
        if reverse:
            self._less = lambda a, b: less(b, a)
        else:
            self._less = less

    def less(self, a: Any, b: Any) -> bool:
        return self._less(a, b)

    def __repr__(self) -> str:
        name = "natural" if self.comparator is None else repr(self.comparator)
        return f"{self.__class__.__name__}({name}, reverse={self.reverse})"
