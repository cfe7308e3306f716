"""
Registration and login for users stored in MongoDB.

Handles:
- Creating a user with a bcrypt-hashed password
- Checking an email/password pair
- Issuing the access token for a successful login
"""
import logging

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from .auth import DUMMY_PASSWORD_HASH, create_access_token, hash_password, verify_password
from .errors import AuthError, ConflictError, InfrastructureError
from .models import DEFAULT_ROLE, User

logger = logging.getLogger(__name__)


def register_user(users: Collection, username: str, email: str, password: str) -> User:
    """
    Create a new user account.

    The unique index on email makes the insert itself the existence check, so
    two concurrent registrations for one email cannot both succeed.

    Raises:
        ConflictError: If the email is already registered
        InfrastructureError: If the database call fails
    """
    user = User(
        username=username,
        email=email,
        password=hash_password(password),
        role=DEFAULT_ROLE,
    )
    try:
        users.insert_one(user.to_document())
    except DuplicateKeyError as e:
        raise ConflictError() from e
    except PyMongoError as e:
        raise InfrastructureError(f"Registration insert failed: {e}") from e

    logger.info("Registered user email=%s", email)
    return user


def get_user_by_email(users: Collection, email: str):
    try:
        document = users.find_one({"email": email})
    except PyMongoError as e:
        raise InfrastructureError(f"User lookup failed: {e}") from e
    if document is None:
        return None
    return User.from_document(document)


def authenticate_user(users: Collection, email: str, password: str) -> User:
    """
    Return the user owning email if password matches.

    An unknown email and a wrong password raise the same AuthError, and both
    paths run one bcrypt check.
    """
    user = get_user_by_email(users, email)
    if user is None:
        verify_password(password, DUMMY_PASSWORD_HASH)
        logger.info("Login rejected email=%s", email)
        raise AuthError()
    if not verify_password(password, user.password):
        logger.info("Login rejected email=%s", email)
        raise AuthError()
    return user


def login_user(users: Collection, email: str, password: str) -> str:
    """Authenticate and return a signed access token carrying email and role."""
    user = authenticate_user(users, email, password)
    token = create_access_token(user.token_claims())
    logger.info("Login succeeded email=%s", email)
    return token
