# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Agent authentication models."""

from beartype import beartype
from pydantic import EmailStr, Field, model_validator

from .base import WireModel


@beartype
class LoginRequest(WireModel):
    """Credentials for ``POST /auth/login``."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


@beartype
class SignupRequest(WireModel):
    """Registration form for ``POST /auth/signup``."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, description="At least 6 characters")
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr = Field(...)
    confirm_password: str | None = Field(
        None, exclude=True, description="Form-only confirmation, never sent"
    )

    @model_validator(mode="after")
    @beartype
    def validate_passwords_match(self) -> "SignupRequest":
        """Ensure the confirmation matches when the form supplies one."""
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


@beartype
class AgentSession(WireModel):
    """Login response: bearer token plus the agent's profile."""

    token: str = Field(..., min_length=1)
    agent_id: int | None = None
    username: str
    full_name: str | None = None
    email: str | None = None
