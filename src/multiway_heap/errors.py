class HeapError(Exception):
    """Base class for every error raised by the multiway heaps."""


class Underflow(HeapError, RuntimeError):
    """Raised when peeking at or extracting from an empty heap."""

    def __init__(self, message: str = "Priority queue underflow") -> None:
        super().__init__(message)


class HandleOutOfRange(HeapError, IndexError):
    """Raised when a handle falls outside ``[0, capacity)``."""

    def __init__(self, handle: int, capacity: int) -> None:
        super().__init__(
            f"Handle {handle} out of range for capacity {capacity}"
        )
        self.handle = handle
        self.capacity = capacity


class DuplicateHandle(HeapError, ValueError):
    """Raised when inserting a handle that is already present."""

    def __init__(self, handle: int) -> None:
        super().__init__(f"Handle {handle} is already in the priority queue")
        self.handle = handle


class NotPresent(HeapError, KeyError):
    """Raised when an operation targets a handle that is not present."""

    def __init__(self, handle: int) -> None:
        super().__init__(f"Handle {handle} is not in the priority queue")
        self.handle = handle

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message
        return self.args[0]


class InvalidKeyDirection(HeapError, ValueError):
    """Raised when increase/decrease-key does not move the key strictly."""
