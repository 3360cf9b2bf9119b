import threading
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from calculator import Operation


class Flavor(str, Enum):
    STACK = "STACK"
    INDEPENDENT = "INDEPENDENT"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["Flavor"]:
        """Parse a flavor case-insensitively, None for anything else."""
        if not name:
            return None
        try:
            return cls(name.upper())
        except ValueError:
            return None


class Calculation(BaseModel):
    model_config = ConfigDict(frozen=True)

    flavor: Flavor
    operation: str
    arguments: Tuple[int, ...]
    result: int


class CalculationHistory:
    """Append-only log of successful calculations, kept per flavor."""

    def __init__(self):
        self._lock = threading.Lock()
        self._history: Dict[Flavor, List[Calculation]] = {flavor: [] for flavor in Flavor}

    def add(self, flavor: Flavor, operation: Operation, arguments: Sequence[int], result: int) -> Calculation:
        """
        Log successful operation to history.
        :param flavor: execution type the calculation was performed in.
        :param operation: executed operation.
        :param arguments: arguments which the calculation was performed on.
        :param result: result of the calculation.
        :return: the logged calculation.
        """
        calculation = Calculation(
            flavor=flavor,
            operation=operation.display_name,
            arguments=tuple(arguments),
            result=result,
        )
        with self._lock:
            self._history[flavor].append(calculation)
        return calculation

    def calculations(self, flavor: Optional[Flavor] = None) -> List[Calculation]:
        """
        Get the calculations performed so far.
        :param flavor: execution type to filter by.
        :return: a copy of the calculations of the given flavor, in the order they were
                 logged. Without a flavor all of them are returned; the order between
                 the flavors is unspecified.
        """
        with self._lock:
            if flavor is not None:
                return list(self._history[flavor])
            return [calculation for segment in Flavor for calculation in self._history[segment]]

    def count(self, flavor: Flavor) -> int:
        with self._lock:
            return len(self._history[flavor])
