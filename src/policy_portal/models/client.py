# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Client (policy holder) models."""

from datetime import date
from decimal import Decimal

from beartype import beartype
from pydantic import EmailStr, Field

from .base import WireModel
from .policy import PolicyStatus, PolicyType, PremiumFrequency


@beartype
class ClientPolicy(WireModel):
    """Policy summary embedded in the client detail response."""

    id: int = Field(..., description="Backend policy identifier")
    policy_number: str = Field(..., min_length=1)
    policy_type: PolicyType
    status: PolicyStatus
    start_date: date
    expiry_date: date
    premium: Decimal = Field(..., ge=Decimal("0"))
    premium_frequency: PremiumFrequency
    description: str | None = None


@beartype
class Client(WireModel):
    """Client owned by the logged-in agent."""

    id: int = Field(..., description="Backend client identifier")
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., description="Contact email")
    phone_number: str = Field(..., description="Contact phone")
    address: str | None = Field(None, description="Postal address")
    policies: list[ClientPolicy] = Field(
        default_factory=list, description="Policies held by this client"
    )


@beartype
class ClientCreate(WireModel):
    """Payload for ``POST /clients``."""

    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr = Field(...)
    phone_number: str = Field(..., min_length=1, max_length=30)
    address: str | None = Field(None, max_length=500)
