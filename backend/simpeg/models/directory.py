"""Login directory entries offered to the login screen."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class LoginEntry(BaseModel):
    login_key: str
    display_name: str
    role: Role = Role.EMPLOYEE
