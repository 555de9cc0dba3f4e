import re

from pydantic import EmailStr, Field, field_validator
from zxcvbn import zxcvbn

from src.portfolio.core.validators import validate_username
from src.portfolio.schemas.base import CamelModel
from src.portfolio.schemas.user import UserRead

# Minimum zxcvbn score (0-4 scale): 3 = "safely unguessable"
MIN_PASSWORD_SCORE = 3
_PASSWORD_CLASSES = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def check_password_strength(v: str) -> str:
    """Require mixed character classes and a zxcvbn score of at least 3."""
    if not _PASSWORD_CLASSES.match(v):
        raise ValueError(
            "Password must contain at least one lowercase letter, "
            "one uppercase letter, and one number"
        )

    result = zxcvbn(v)
    if result["score"] < MIN_PASSWORD_SCORE:
        feedback = result.get("feedback", {})
        warning = feedback.get("warning", "")
        suggestions = feedback.get("suggestions", [])

        if warning:
            raise ValueError(f"Weak password: {warning}")
        elif suggestions:
            raise ValueError(f"Weak password: {suggestions[0]}")
        else:
            raise ValueError("Password is too weak. Use a longer password with a mix of characters.")
    return v


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower().strip()


class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower().strip()

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8, max_length=100)

    @field_validator("new_password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class AuthResponse(CamelModel):
    """Login/register result: the user plus a bearer token."""

    success: bool = True
    message: str
    user: UserRead
    token: str
    expires_in: str


class TokenVerifyResponse(CamelModel):
    success: bool = True
    valid: bool = True
    user: UserRead
