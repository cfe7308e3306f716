import bcrypt
from datetime import datetime, timezone
import jwt

from .config import settings
from .utils.durations import parse_duration

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = None) -> str:
    """Return a salted bcrypt hash; the salt and cost factor are embedded in the result."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# Verified against when the email is unknown so both login failures cost the same
DUMMY_PASSWORD_HASH = hash_password("timing-equalization-dummy")


def create_access_token(
    claims: dict,
    secret: str = None,
    expires_in=None,
    algorithm: str = None,
    now: datetime = None,
) -> str:
    """
    Sign a claim set into a JWT with issued-at and expiry timestamps.

    Args:
        claims: Payload claims, e.g. {"email": ..., "role": ...}
        secret: Signing secret, defaults to JWT_SECRET
        expires_in: Lifetime as seconds or a duration string like "1h", defaults to EXPIRES_IN
        algorithm: Signing algorithm, defaults to JWT_ALGORITHM
        now: Issue time, defaults to the current UTC time

    Returns:
        Encoded token string
    """
    issued_at = int((now or datetime.now(timezone.utc)).timestamp())
    lifetime = parse_duration(expires_in if expires_in is not None else settings.EXPIRES_IN)
    payload = {**claims, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(
        payload,
        secret if secret is not None else settings.JWT_SECRET,
        algorithm=algorithm or settings.JWT_ALGORITHM,
    )
