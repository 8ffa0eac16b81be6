"""Password Hashing — bcrypt hashes for member sign-in.

Invariants:
    - Only bcrypt hashes are stored; plaintext never leaves this module
    - verify_password never raises: a malformed or missing hash is a mismatch
    - Passwords are encoded UTF-8 and cut to bcrypt's 72-byte input limit on
      both hash and verify, so the two always agree

Design Decisions:
    - bcrypt over a hand-rolled KDF; cost factor from settings so tests can run
      at the library minimum
    - Sync functions: callers push them onto a worker thread (asyncio.to_thread)
      to keep the event loop free while bcrypt runs
"""

import bcrypt

from groupdesk.config import get_settings

_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or get_settings().password_hash_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        return False
