import secrets

from authflow.domain.exceptions import EntropyError

RESET_TOKEN_BYTES = 32


class TokenGenerator:
    """Opaque reset tokens from the OS CSPRNG, hex encoded"""

    def __init__(self, nbytes: int = RESET_TOKEN_BYTES):
        self.nbytes = nbytes

    def generate(self) -> str:
        try:
            return secrets.token_hex(self.nbytes)
        except (NotImplementedError, OSError) as exc:
            # os.urandom has no fallback; neither do we
            raise EntropyError("Secure random source unavailable") from exc
