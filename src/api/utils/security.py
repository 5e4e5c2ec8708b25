import hashlib
import secrets

import bcrypt

from config import ApplicationConfig


def hash_password(password: str) -> str:
    """bcrypt hash with the configured cost factor"""
    salt = bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


def burn_password_check() -> None:
    """Spend the time of a real check so unknown emails are not distinguishable"""
    bcrypt.checkpw(b"dummy_password", bcrypt.hashpw(b"other", bcrypt.gensalt(4)))


def generate_refresh_token() -> str:
    return secrets.token_urlsafe(32)


def hash_refresh_token(token: str) -> str:
    """SHA-256 digest used to look sessions up by refresh token"""
    return hashlib.sha256(token.encode()).hexdigest()


def generate_one_time_token() -> str:
    """URL-safe token mailed for password reset or email verification"""
    return secrets.token_urlsafe(32)


def hash_one_time_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
