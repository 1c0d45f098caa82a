from abc import ABC, abstractmethod

BCRYPT_COST = 12

# bcrypt only reads the first 72 bytes and refuses longer input
MAX_PASSWORD_BYTES = 72


def password_fits(plaintext: str) -> bool:
    return len(plaintext.encode("utf-8")) <= MAX_PASSWORD_BYTES


class IPasswordHasher(ABC):
    """One-way password hashing - application layer"""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """Hash a plaintext password"""
        pass

    @abstractmethod
    def compare(self, plaintext: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash"""
        pass

    @abstractmethod
    def dummy_hash(self) -> str:
        """A valid hash of a throwaway password, for equal-cost failed lookups"""
        pass
