# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Domain models package for the policy portal.

This package exports all Pydantic domain models with strict validation
and immutability.
"""

from .agent import AgentSession, LoginRequest, SignupRequest
from .base import BaseModelConfig, WireModel
from .client import Client, ClientCreate, ClientPolicy
from .extraction import ExtractionResult, PolicyDraft
from .filters import (
    AdvancedFilters,
    DashboardStats,
    FilterCriteria,
    PolicyStats,
    StatusBucket,
)
from .policy import (
    Policy,
    PolicyCreate,
    PolicyStatus,
    PolicyStatusUpdate,
    PolicyType,
    PremiumFrequency,
)
from .renewal import RenewalInfo, RenewalState, UrgencyTier
from .views import ClientPolicyRow, ExtractionPrefill, PolicyListView, PolicyRow

__all__ = [
    # Base models
    "BaseModelConfig",
    "WireModel",
    # Policy models
    "Policy",
    "PolicyCreate",
    "PolicyStatusUpdate",
    "PolicyType",
    "PolicyStatus",
    "PremiumFrequency",
    # Client models
    "Client",
    "ClientCreate",
    "ClientPolicy",
    # Agent models
    "AgentSession",
    "LoginRequest",
    "SignupRequest",
    # Renewal models
    "RenewalInfo",
    "RenewalState",
    "UrgencyTier",
    # Filter models
    "AdvancedFilters",
    "FilterCriteria",
    "StatusBucket",
    "PolicyStats",
    "DashboardStats",
    # Extraction models
    "ExtractionResult",
    "PolicyDraft",
    # Read models
    "PolicyRow",
    "PolicyListView",
    "ClientPolicyRow",
    "ExtractionPrefill",
]
