# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Business logic service layer."""

from policy_portal.core.result_types import Err, Ok, Result

from .client_service import ClientService
from .policy_filter import (
    CriteriaMemo,
    LatestCriteriaGate,
    aggregate,
    dashboard_stats,
    filter_policies,
    sort_by_expiry,
)
from .policy_service import PolicyService
from .portal_client import PortalClient
from .renewal import classify, classify_status, days_until_expiry, urgency_tier

__all__ = [
    "Result",
    "Ok",
    "Err",
    "PolicyService",
    "ClientService",
    "PortalClient",
    "classify",
    "classify_status",
    "days_until_expiry",
    "urgency_tier",
    "filter_policies",
    "aggregate",
    "dashboard_stats",
    "sort_by_expiry",
    "CriteriaMemo",
    "LatestCriteriaGate",
]
