from typing import Annotated, Optional
from pydantic import AfterValidator, EmailStr, StringConstraints

from .base import CamelModel


def _limit_email(value: str) -> str:
    if len(value) > 255:
        raise ValueError("Email must be at most 255 characters")
    return value


Email = Annotated[EmailStr, AfterValidator(_limit_email)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Password = Annotated[str, StringConstraints(min_length=8, max_length=100)]
OptionalText = Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]]


class SignupRequest(CamelModel):
    email: Email
    password: Password
    first_name: Name
    last_name: Name


class LoginRequest(CamelModel):
    email: Email
    password: Annotated[str, StringConstraints(min_length=1, max_length=100)]


class ProfileUpdateRequest(CamelModel):
    first_name: Name
    last_name: Name
    job_title: OptionalText = None
    location: OptionalText = None
    bio: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]] = None


class PasswordUpdateRequest(CamelModel):
    current_password: Annotated[str, StringConstraints(min_length=1, max_length=100)]
    new_password: Password


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    job_title: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None


class UserEnvelope(CamelModel):
    user: UserResponse


class SuccessResponse(CamelModel):
    success: bool = True
