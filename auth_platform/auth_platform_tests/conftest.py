import os

# Must be set before the service modules build their settings
os.environ["JWT_SECRET"] = "test-secret-with-enough-length-123"
os.environ["EXPIRES_IN"] = "1h"
os.environ["BCRYPT_ROUNDS"] = "4"

import mongomock
import pytest
from fastapi.testclient import TestClient

from auth_platform.auth_platform.auth_service.db import ensure_indexes
from auth_platform.auth_platform.auth_service.main import app


@pytest.fixture
def users():
    collection = mongomock.MongoClient()["authentication"]["users"]
    ensure_indexes(collection)
    return collection


@pytest.fixture
def client(users):
    app.state.users = users
    with TestClient(app) as c:
        yield c
    app.state.users = None
