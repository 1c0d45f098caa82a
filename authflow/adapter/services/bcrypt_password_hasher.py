import bcrypt

from authflow.app.services.password_hasher import BCRYPT_COST, IPasswordHasher

# One dummy hash per cost factor, computed on first use
_dummy_hashes: dict[int, str] = {}


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt implementation of IPasswordHasher"""

    def __init__(self, rounds: int = BCRYPT_COST):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        password_hash = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return password_hash.decode("utf-8")

    def compare(self, plaintext: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Not a bcrypt hash, or a password over 72 bytes
            return False

    def dummy_hash(self) -> str:
        if self.rounds not in _dummy_hashes:
            _dummy_hashes[self.rounds] = self.hash("dummy_password")
        return _dummy_hashes[self.rounds]
