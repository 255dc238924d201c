# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Create-policy form drafts and their validation."""

from beartype import beartype
from pydantic import ValidationError

from ..core.result_types import Err, Ok, Result
from ..models.client import Client
from ..models.extraction import ExtractionResult, PolicyDraft
from ..models.policy import PolicyCreate, PolicyType, PremiumFrequency
from ..models.views import ExtractionPrefill


@beartype
def draft_from_extraction(extraction: ExtractionResult) -> PolicyDraft:
    """Pre-populate the form; missing fields stay blank, selects keep defaults."""
    return PolicyDraft(
        client_full_name=extraction.client_full_name or "",
        client_email=extraction.client_email or "",
        client_phone_number=extraction.client_phone_number or "",
        client_address=extraction.client_address or "",
        policy_number=extraction.policy_number or "",
        policy_type=extraction.policy_type or PolicyType.LIFE.value,
        start_date=extraction.start_date or "",
        expiry_date=extraction.expiry_date or "",
        premium=extraction.premium or "",
        premium_frequency=extraction.premium_frequency or PremiumFrequency.YEARLY.value,
        policy_description=extraction.policy_description or "",
    )


@beartype
def draft_for_client(client: Client, draft: PolicyDraft) -> PolicyDraft:
    """Attach a policy-only form to an existing client.

    The client fields always come from the loaded client; whatever the draft
    held for them is replaced.
    """
    return draft.model_copy(
        update={
            "client_full_name": client.full_name,
            "client_email": client.email,
            "client_phone_number": client.phone_number,
            "client_address": client.address or "",
        }
    )


@beartype
def confidence_warning(confidence: float | None, threshold: float) -> str | None:
    """Review prompt for low-confidence extractions, else ``None``."""
    if confidence is None:
        return "Extraction confidence unknown, please review all fields"
    if confidence < threshold:
        return (
            f"Low extraction confidence ({round(confidence * 100)}%), "
            "please review all fields before saving"
        )
    return None


@beartype
def prefill_from_extraction(
    extraction: ExtractionResult, threshold: float
) -> ExtractionPrefill:
    """Form draft plus confidence details for the agent."""
    return ExtractionPrefill(
        draft=draft_from_extraction(extraction),
        confidence=extraction.confidence,
        message=extraction.message,
        warning=confidence_warning(extraction.confidence, threshold),
    )


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "form"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


@beartype
def draft_to_policy_create(draft: PolicyDraft) -> Result[PolicyCreate, str]:
    """Validate the submitted form into a create payload."""
    if not draft.premium:
        return Err("premium: Field required")
    try:
        policy_data = PolicyCreate(
            client_full_name=draft.client_full_name,
            client_email=draft.client_email,
            client_phone_number=draft.client_phone_number,
            client_address=draft.client_address or None,
            policy_number=draft.policy_number,
            policy_type=draft.policy_type,
            start_date=draft.start_date,
            expiry_date=draft.expiry_date,
            premium=draft.premium,
            premium_frequency=draft.premium_frequency,
            policy_description=draft.policy_description or None,
        )
    except ValidationError as e:
        return Err(_describe(e))
    return Ok(policy_data)
