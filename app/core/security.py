"""
Password storage for users.

Stored form is "salt:hash", both hex, hashed with PBKDF2-SHA256. The plain
password never reaches the store.
"""

import binascii
import hashlib
import hmac
import os

ITERATIONS = 100000
SALT_BYTES = 32
KEY_BYTES = 64


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, ITERATIONS, dklen=KEY_BYTES)


def get_password_hash(password: str) -> str:
    salt = os.urandom(SALT_BYTES)
    return f"{salt.hex()}:{_derive(password, salt).hex()}"


def verify_password(plain_password: str, stored_hash: str) -> bool:
    """False for a wrong password or a stored value that is not salt:hash."""
    try:
        salt_hex, key_hex = stored_hash.split(":")
        salt = binascii.unhexlify(salt_hex)
        expected = binascii.unhexlify(key_hex)
    except (ValueError, binascii.Error):
        return False
    return hmac.compare_digest(_derive(plain_password, salt), expected)
