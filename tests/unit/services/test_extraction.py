"""Tests for extraction prefill and form validation."""

from datetime import date
from decimal import Decimal

import pytest

from policy_portal.core.result_types import Err
from policy_portal.models.extraction import ExtractionResult, PolicyDraft
from policy_portal.models.policy import PolicyType, PremiumFrequency
from policy_portal.services.extraction import (
    confidence_warning,
    draft_from_extraction,
    draft_to_policy_create,
    prefill_from_extraction,
)


@pytest.fixture
def extraction() -> ExtractionResult:
    return ExtractionResult.model_validate(
        {
            "success": True,
            "message": "Extracted 6 fields",
            "confidence": 0.92,
            "clientFullName": "Asha Verma",
            "clientEmail": "asha.verma@example.com",
            "clientPhoneNumber": "9811122233",
            "policyNumber": "LIC-2025-0042",
            "policyType": "HEALTH",
            "startDate": "2025-01-01",
            "expiryDate": "2026-01-01",
            "premium": 2400.5,
        }
    )


class TestDraft:
    """Pre-populating the form."""

    def test_missing_fields_stay_blank(self) -> None:
        draft = draft_from_extraction(ExtractionResult(success=True))

        assert draft.client_full_name == ""
        assert draft.premium == ""
        assert draft.policy_type == PolicyType.LIFE.value
        assert draft.premium_frequency == PremiumFrequency.YEARLY.value

    def test_extracted_fields_are_copied(self, extraction: ExtractionResult) -> None:
        draft = draft_from_extraction(extraction)

        assert draft.client_full_name == "Asha Verma"
        assert draft.policy_type == "HEALTH"
        assert draft.premium == "2400.5"
        assert draft.client_address == ""

    def test_confidence_is_clamped(self) -> None:
        assert ExtractionResult(success=True, confidence=1.4).confidence == 1.0
        assert ExtractionResult(success=True, confidence=-0.2).confidence == 0.0


class TestConfidenceWarning:
    """Low-confidence review prompt."""

    def test_high_confidence_has_no_warning(self) -> None:
        assert confidence_warning(0.92, 0.7) is None

    def test_threshold_itself_is_not_low(self) -> None:
        assert confidence_warning(0.7, 0.7) is None

    def test_low_confidence(self) -> None:
        warning = confidence_warning(0.45, 0.7)
        assert warning is not None
        assert warning.startswith("Low extraction confidence (45%)")

    def test_unknown_confidence(self) -> None:
        assert "unknown" in (confidence_warning(None, 0.7) or "")

    def test_prefill_carries_details(self, extraction: ExtractionResult) -> None:
        prefill = prefill_from_extraction(extraction, 0.95)

        assert prefill.confidence == pytest.approx(0.92)
        assert prefill.message == "Extracted 6 fields"
        assert prefill.warning is not None


class TestSubmit:
    """Validating the reviewed form."""

    def test_valid_draft(self, extraction: ExtractionResult) -> None:
        result = draft_to_policy_create(draft_from_extraction(extraction))

        policy_data = result.unwrap()
        assert policy_data.policy_type == PolicyType.HEALTH
        assert policy_data.premium == Decimal("2400.5")
        assert policy_data.expiry_date == date(2026, 1, 1)
        assert policy_data.client_address is None

    def test_low_confidence_does_not_block(self, extraction: ExtractionResult) -> None:
        low = extraction.model_copy(update={"confidence": 0.1})
        assert draft_to_policy_create(draft_from_extraction(low)).is_ok()

    def test_blank_premium(self) -> None:
        result = draft_to_policy_create(PolicyDraft(client_full_name="Asha Verma"))
        assert result == Err("premium: Field required")

    def test_describes_invalid_fields(self, extraction: ExtractionResult) -> None:
        draft = draft_from_extraction(extraction).model_copy(
            update={"client_email": "not-an-email"}
        )

        message = draft_to_policy_create(draft).unwrap_err()

        assert "clientEmail" in message or "client_email" in message

    def test_expiry_before_start(self, extraction: ExtractionResult) -> None:
        draft = draft_from_extraction(extraction).model_copy(
            update={"expiry_date": "2024-12-31"}
        )

        message = draft_to_policy_create(draft).unwrap_err()

        assert "Expiry date must be after start date" in message
