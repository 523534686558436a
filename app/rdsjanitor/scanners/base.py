"""Abstract base class for read-only scanners.

This module defines the Scanner interface shared by the profile
enumerator and the session lister.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Scanner(ABC, Generic[T]):
    """Abstract base class for all scanners.

    Scanners query one OS facility and yield a fresh snapshot of
    structured records. They never modify the system.

    Example:
        >>> scanner = ProfileScanner()
        >>> if scanner.is_available():
        ...     for profile in scanner.scan():
        ...         print(f"{profile.user_name}: {profile.is_loaded}")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short name of the facility this scanner reads."""

    @abstractmethod
    def scan(self) -> Iterator[T]:
        """Scan and yield all records from this facility.

        Yields:
            One record per item in the snapshot.

        Raises:
            RuntimeError: If the facility is not available.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying facility is available on the system.

        Returns:
            True if the facility can be queried, False otherwise.
        """

    def count(self) -> int:
        """Count the records in a fresh snapshot."""
        return sum(1 for _ in self.scan())
