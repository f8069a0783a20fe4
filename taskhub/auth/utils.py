"""Credential hashing: salted argon2 digests, never reversible."""

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    return _pwd_context.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """True when ``plain_password`` matches the stored ``password_hash``."""
    return _pwd_context.verify(plain_password, password_hash)
