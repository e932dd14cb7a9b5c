"""Abstract base class for record sources."""

from abc import ABC, abstractmethod

from bizdash.core.schemas import Customer, Employee, Equipment, Job

Record = Job | Equipment | Employee | Customer


class RecordSource(ABC):
    """Base class that every record source must implement."""

    @abstractmethod
    def fetch(self, kind: str) -> list[Record]:
        """Return all records of a kind ('jobs', 'equipment', 'employees', 'customers').

        Raises ValueError for an unknown kind.
        """
