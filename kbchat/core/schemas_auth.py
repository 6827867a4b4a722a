"""Pydantic schemas for shared-password login."""

from typing import Any

from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Any JSON value; only a string can match, anything else is a 401.
    password: Any = None


class LoginResponse(BaseModel):
    ok: bool
