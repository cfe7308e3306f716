"""
auth_service package

Registration and login over HTTP with users kept in MongoDB:

- FastAPI application (`main.py`) and entrypoint (`__main__.py`)
- MongoDB connection and user documents (`db.py`, `models.py`)
- Password hashing and JWT issuing (`auth.py`)
- Registration and login logic (`users.py`)
"""
