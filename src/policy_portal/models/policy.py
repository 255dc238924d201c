# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy domain models with strict validation.

This module defines the policy entity as the backend returns it (with the
holder's contact details denormalized onto each row) and the payloads used
to create a policy or change its status.
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import EmailStr, Field, field_serializer, model_validator

from .base import WireModel


class PolicyType(str, Enum):
    """Enumeration of available policy types."""

    LIFE = "LIFE"
    HEALTH = "HEALTH"
    AUTO = "AUTO"
    VEHICLE = "VEHICLE"
    HOME = "HOME"
    TRAVEL = "TRAVEL"
    BUSINESS = "BUSINESS"


class PolicyStatus(str, Enum):
    """Enumeration of policy lifecycle states, as set by the backend."""

    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    RENEWED = "RENEWED"
    CANCELLED = "CANCELLED"


class PremiumFrequency(str, Enum):
    """How often the premium is billed."""

    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


@beartype
class Policy(WireModel):
    """One insurance contract with its holder's contact details."""

    policy_id: int = Field(..., description="Backend identifier")
    policy_number: str = Field(
        ..., min_length=1, max_length=100, description="Agent-assigned policy number"
    )
    policy_type: PolicyType = Field(..., description="Line of business")
    policy_status: PolicyStatus = Field(..., description="Authoritative status")
    start_date: date = Field(..., description="Date when coverage begins")
    expiry_date: date = Field(..., description="Date when coverage ends")
    premium: Decimal = Field(..., ge=Decimal("0"), description="Premium amount")
    premium_frequency: PremiumFrequency = Field(..., description="Billing cycle")
    policy_description: str | None = Field(
        None, max_length=2000, description="Free-text notes"
    )

    client_full_name: str = Field(..., description="Policy holder's name")
    client_email: str = Field(..., description="Policy holder's email")
    client_phone_number: str = Field(..., description="Policy holder's phone")
    client_address: str | None = Field(None, description="Policy holder's address")


@beartype
class PolicyCreate(WireModel):
    """Payload for ``POST /policies/create``.

    The backend creates (or reuses) the client from the ``client_*`` fields
    and attaches the new policy to it.
    """

    client_full_name: str = Field(..., min_length=1, max_length=200)
    client_email: EmailStr = Field(...)
    client_phone_number: str = Field(..., min_length=1, max_length=30)
    client_address: str | None = Field(None, max_length=500)

    policy_number: str = Field(..., min_length=1, max_length=100)
    policy_type: PolicyType = Field(default=PolicyType.LIFE)
    start_date: date = Field(...)
    expiry_date: date = Field(...)
    premium: Decimal = Field(..., ge=Decimal("0"))
    premium_frequency: PremiumFrequency = Field(default=PremiumFrequency.YEARLY)
    policy_description: str | None = Field(None, max_length=2000)

    @model_validator(mode="after")
    @beartype
    def validate_dates(self) -> "PolicyCreate":
        """Ensure expiry date is after start date."""
        if self.expiry_date <= self.start_date:
            raise ValueError("Expiry date must be after start date")
        return self

    @field_serializer("premium", when_used="json")
    def serialize_premium(self, value: Decimal) -> float:
        """The backend expects a JSON number."""
        return float(value)


@beartype
class PolicyStatusUpdate(WireModel):
    """Payload for ``PUT /policies/{id}/status``."""

    status: PolicyStatus = Field(..., description="New authoritative status")
