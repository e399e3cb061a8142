from typing import Optional, Tuple

import bcrypt

from src.app.services.password_hasher import IPasswordHasher

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72

# Cost factors gensalt accepts
BCRYPT_MIN_COST = 4
BCRYPT_MAX_COST = 31


class BcryptPasswordHasher(IPasswordHasher):
    """
    Password hasher backed by bcrypt.

    `iterations` is the bcrypt cost factor (log2 rounds). Counts outside the
    bcrypt range, such as PBKDF2 iteration counts left by an older scheme,
    fall back to the default cost. The salt is kept in its own field next to
    the derived key, the derived key also embeds it.
    """

    def __init__(self, iterations: int = 12):
        self.iterations = iterations

    def _cost(self, iterations: Optional[int]) -> int:
        if iterations and BCRYPT_MIN_COST <= iterations <= BCRYPT_MAX_COST:
            return iterations
        return self.iterations

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode()[:BCRYPT_MAX_BYTES]

    def hash(self, password: str, iterations: Optional[int] = None) -> Tuple[str, str]:
        salt = bcrypt.gensalt(rounds=self._cost(iterations))
        derived_key = bcrypt.hashpw(self._encode(password), salt)
        return salt.decode(), derived_key.decode()

    def verify(self, password: str, salt: str, derived_key: str) -> bool:
        if not salt or not derived_key:
            return False
        if not derived_key.startswith(salt):
            return False
        return bcrypt.checkpw(self._encode(password), derived_key.encode())
