"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field

from shared.schemas import CamelModel

# --- Request Schemas ---


class RegisterUserRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Salma Adel",
                    "email": "salma@student.campus.edu",
                    "password": "correct-horse",
                    "role": "customer",
                    "birthDate": "2003-04-12",
                }
            ]
        }
    }

    # Required-ness is enforced by the domain so the error names every missing field together
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    password: str | None = None
    role: str | None = None
    birth_date: date | None = None


class LoginRequest(CamelModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "salma@student.campus.edu", "password": "correct-horse"}]}
    }

    email: str | None = None
    password: str | None = None


# --- Response Schemas ---


class UserResponse(CamelModel):
    user_id: int
    name: str
    email: str
    role: str
    birth_date: date
    created_at: datetime


class LoggedInUserResponse(UserResponse):
    truck_id: int | None = None
    truck_name: str | None = None


class RegisterUserResponse(CamelModel):
    message: str = "User created successfully"
    user: UserResponse


class LoginResponse(CamelModel):
    message: str = "Login successful"
    user: LoggedInUserResponse
