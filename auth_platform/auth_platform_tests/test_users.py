from unittest.mock import MagicMock, patch

import pytest
from pymongo.errors import AutoReconnect

from auth_platform.auth_platform.auth_service import users as users_module
from auth_platform.auth_platform.auth_service.errors import AuthError, ConflictError, InfrastructureError
from auth_platform.auth_platform.auth_service.users import (
    authenticate_user,
    get_user_by_email,
    login_user,
    register_user,
)


def test_register_user_creates_record(users):
    user = register_user(users, "alice", "a@x.com", "p1")

    assert user.role == "user"
    stored = get_user_by_email(users, "a@x.com")
    assert stored.username == "alice"
    assert stored.password == user.password


def test_register_user_conflict_leaves_single_record(users):
    register_user(users, "alice", "a@x.com", "p1")

    with pytest.raises(ConflictError) as exc_info:
        register_user(users, "mallory", "a@x.com", "other")

    assert exc_info.value.message == "User already exists!"
    assert users.count_documents({"email": "a@x.com"}) == 1
    assert get_user_by_email(users, "a@x.com").username == "alice"


def test_email_lookup_is_exact(users):
    register_user(users, "alice", "a@x.com", "p1")
    assert get_user_by_email(users, "A@X.com") is None


def test_register_user_wraps_database_errors():
    broken = MagicMock()
    broken.insert_one.side_effect = AutoReconnect("connection reset")

    with pytest.raises(InfrastructureError):
        register_user(broken, "alice", "a@x.com", "p1")


def test_authenticate_user_returns_user(users):
    register_user(users, "alice", "a@x.com", "p1")
    assert authenticate_user(users, "a@x.com", "p1").email == "a@x.com"


def test_authenticate_user_failures_share_message(users):
    register_user(users, "alice", "a@x.com", "p1")

    with pytest.raises(AuthError) as wrong_password:
        authenticate_user(users, "a@x.com", "wrong")
    with pytest.raises(AuthError) as unknown_email:
        authenticate_user(users, "nobody@x.com", "p1")

    assert str(wrong_password.value) == str(unknown_email.value) == "Invalid email or password"


def test_unknown_email_still_runs_password_check(users):
    with patch.object(users_module, "verify_password", return_value=False) as verify:
        with pytest.raises(AuthError):
            authenticate_user(users, "nobody@x.com", "p1")

    verify.assert_called_once_with("p1", users_module.DUMMY_PASSWORD_HASH)


def test_login_user_signs_stored_claims(users):
    register_user(users, "alice", "a@x.com", "p1")

    with patch.object(users_module, "create_access_token", return_value="signed") as create:
        assert login_user(users, "a@x.com", "p1") == "signed"

    create.assert_called_once_with({"email": "a@x.com", "role": "user"})
