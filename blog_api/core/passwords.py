from __future__ import annotations

from passlib.context import CryptContext

# Users are stored in memory only; pbkdf2 keeps hashing pure-python.
user_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_user_password(raw_password: str) -> str:
    if not raw_password:
        raise ValueError("password must not be empty")
    return user_pwd_context.hash(raw_password)


def user_password_matches(raw_password: str, password_hash: str | None) -> bool:
    if not raw_password or not password_hash:
        return False
    return user_pwd_context.verify(raw_password, password_hash)
