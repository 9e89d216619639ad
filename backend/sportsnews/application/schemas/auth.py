"""Pydantic DTOs for sign-in and session inspection."""

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=3, examples=["editor@example.com"])
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: str
    email: str | None = None

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Whether the caller is signed in, and as whom."""

    authenticated: bool
    user: UserResponse | None = None
    access_token: str | None = None
    refresh_token: str | None = None
