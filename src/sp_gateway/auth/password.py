"""Password hashing utilities using bcrypt.

Uses the ``bcrypt`` library directly (>=4.0). ``checkpw`` also accepts the
``$2a$`` hashes of the seeded test users.
"""

import bcrypt

# Work factor; the seeded test users were hashed with 8 rounds
_ROUNDS = 10


def hash_password(plain: str) -> str:
    """Hash a plain-text password with bcrypt. Returns a utf-8 hash string."""
    hashed_bytes: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=_ROUNDS))
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
