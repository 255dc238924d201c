# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Document extraction response and the create-policy form draft it fills.

The extraction service is opaque: whatever it returns is only ever used to
pre-populate the form, which the agent reviews before submitting.
"""

from typing import Any

from beartype import beartype
from pydantic import ConfigDict, Field, field_validator

from .base import WireModel
from .policy import PolicyType, PremiumFrequency


@beartype
class ExtractionResult(WireModel):
    """Response of ``POST /policies/extract-from-pdf``."""

    success: bool = Field(..., description="Whether any fields were extracted")
    message: str = Field(default="", description="Service message for the agent")
    confidence: float | None = Field(
        None, ge=0.0, le=1.0, description="Overall extraction confidence"
    )

    client_full_name: str | None = None
    client_email: str | None = None
    client_phone_number: str | None = None
    client_address: str | None = None
    policy_number: str | None = None
    policy_type: str | None = None
    start_date: str | None = None
    expiry_date: str | None = None
    premium: str | None = None
    premium_frequency: str | None = None
    policy_description: str | None = None

    @field_validator("premium", mode="before")
    @classmethod
    def stringify_premium(cls, v: Any) -> Any:
        """The service sends premium as a number or a string."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> Any:
        """Keep out-of-range scores inside 0..1."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return min(max(float(v), 0.0), 1.0)
        return v


@beartype
class PolicyDraft(WireModel):
    """Create-policy form state: raw strings, exactly as the inputs hold them."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
        populate_by_name=True,
    )

    client_full_name: str = ""
    client_email: str = ""
    client_phone_number: str = ""
    client_address: str = ""
    policy_number: str = ""
    policy_type: str = PolicyType.LIFE.value
    start_date: str = ""
    expiry_date: str = ""
    premium: str = ""
    premium_frequency: str = PremiumFrequency.YEARLY.value
    policy_description: str = ""
