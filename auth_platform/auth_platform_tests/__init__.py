"""
Tests for the auth_service package.

The MongoDB collection is replaced by a mongomock collection installed on
app.state before the TestClient starts, so no database server is needed.
"""
