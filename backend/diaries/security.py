# Password hashing
from werkzeug.security import check_password_hash, generate_password_hash
import logging


def hash_password(password: str, method: str = 'scrypt') -> str:
    """Return a salted hash in werkzeug's ``method$salt$hash`` format."""
    return generate_password_hash(password, method=method)


def verify_password(password: str, encoded: str) -> bool:
    if not encoded:
        return False
    try:
        return check_password_hash(encoded, password)
    except ValueError:
        logging.debug('Stored password hash is malformed or uses an unknown method')
        return False
