from fastapi import FastAPI, Depends, status
from fastapi.middleware.cors import CORSMiddleware
from pymongo.collection import Collection
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from .config import settings
from .db import close_db, get_users, init_db
from .errors import register_exception_handlers
from .schemas import UserCreate, UserLogin, RegistrationResponse, LoginResponse, StatusResponse
from .users import register_user, login_user
from .utils.logging_setup import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB unless the entry point already installed a collection"""
    owns_connection = getattr(app.state, "users", None) is None
    if owns_connection:
        # Served by an external ASGI runner; __main__ has not configured logging
        configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
        app.state.users = init_db(settings)
    try:
        yield
    finally:
        if owns_connection:
            close_db(app.state.users)
            app.state.users = None


app = FastAPI(
    title="Auth Service",
    description="User registration and login backed by MongoDB",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/", response_model=StatusResponse)
def root():
    """Liveness check, independent of the database"""
    return StatusResponse(
        message="Server is running smoothly",
        timestamp=datetime.now(timezone.utc)
    )


@app.post("/api/v1/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, users: Collection = Depends(get_users)):
    register_user(users, user.username, user.email, user.password)
    return RegistrationResponse()


@app.post("/api/v1/login", response_model=LoginResponse)
def login(credentials: UserLogin, users: Collection = Depends(get_users)):
    token = login_user(users, credentials.email, credentials.password)
    return LoginResponse(access_token=token)
