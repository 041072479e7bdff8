# Overview: Service-layer password hashing; one-way salted bcrypt hashes and timing-safe checks.

"""
Password hashing.

Hashes are bcrypt modular-crypt strings ($2b$<cost>$<22-char salt><31-char
digest>): algorithm, cost and salt travel with the digest, so verification needs
nothing but the stored string.

SECURITY NOTES:
- Default cost factor 12; tests drop it to 4 (bcrypt's minimum)
- Neither the plaintext nor the hash is ever logged
- A corrupted stored hash verifies as False instead of raising
"""

import bcrypt


DEFAULT_ROUNDS = 12

# bcrypt reads at most 72 bytes; newer releases raise instead of truncating.
BCRYPT_MAX_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash password using bcrypt with a fresh random salt.

    Two calls with the same password return different strings.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(_secret_bytes(password), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Verify password against bcrypt hash.

    Returns True if password matches hash, False otherwise, including when the
    stored hash is empty or malformed. bcrypt.checkpw compares in constant time.
    """
    if not password_hash or password is None:
        return False

    try:
        return bcrypt.checkpw(_secret_bytes(password), password_hash.encode('utf-8'))
    except (ValueError, TypeError):
        return False
