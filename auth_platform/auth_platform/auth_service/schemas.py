from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    username: str
    email: str
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class RegistrationResponse(BaseModel):
    success: bool = True
    message: str = "User registered successfully!"


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "User successfully logged in!"
    access_token: str = Field(alias="accessToken")


class StatusResponse(BaseModel):
    message: str
    timestamp: datetime
