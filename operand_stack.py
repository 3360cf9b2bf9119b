import threading
from typing import Iterable, List, Optional, Tuple


class OperandStack:
    """
    Thread-safe LIFO store of integer arguments for stack calculations.

    A single lock guards every read and mutation, so ``try_pop`` decides and
    removes as one step: either exactly ``amount`` values leave the stack or
    none do.
    """

    def __init__(self, values: Iterable[int] = ()):
        self._lock = threading.Lock()
        self._items: List[int] = list(values)

    def push(self, values: Iterable[int]) -> int:
        """
        Push arguments to the stack, the last one ends up on top.
        :param values: arguments to push
        :return: the stack size after the push.
        """
        with self._lock:
            self._items.extend(values)
            return len(self._items)

    def size(self) -> int:
        with self._lock:
            return len(self._items)

    def __len__(self):
        return self.size()

    def snapshot(self) -> List[int]:
        """Copy of the stack content, first == top."""
        with self._lock:
            return self._items[::-1]

    def try_pop(self, amount: int) -> Tuple[bool, Optional[List[int]]]:
        """
        Pop a number of arguments from the top of the stack, all or nothing.
        :param amount: number of arguments to pop
        :return: if the pop succeeded and the popped arguments, most recently pushed first.
        """
        if amount < 0:
            return False, None
        if amount == 0:
            return True, []

        with self._lock:
            if amount > len(self._items):
                return False, None
            popped = self._items[-amount:]
            del self._items[-amount:]

        popped.reverse()
        return True, popped
