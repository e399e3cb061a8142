from abc import ABC, abstractmethod
from typing import Optional, Tuple


class IPasswordHasher(ABC):
    """Password hashing - CPU bound, so the interface is synchronous"""

    @abstractmethod
    def hash(self, password: str, iterations: Optional[int] = None) -> Tuple[str, str]:
        """
        Hash a password.

        Args:
            password: Plain text password
            iterations: Cost to use instead of the configured default

        Returns:
            Tuple of (salt, derived_key)
        """
        pass

    @abstractmethod
    def verify(self, password: str, salt: str, derived_key: str) -> bool:
        """Check a plain text password against stored credentials"""
        pass
