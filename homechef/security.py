from werkzeug.security import generate_password_hash, check_password_hash

from .settings import settings


def hash_password(password: str) -> str:
    """Salted hash suitable for users.password_hash."""
    return generate_password_hash(password, method=settings.password_hash_method)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)
