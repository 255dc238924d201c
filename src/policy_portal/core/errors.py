# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Error values carried by ``Err`` results at the collaborator boundary.

None of these are raised. Callers branch on the type to pick the
user-facing message (for instance an ``AuthError`` sends the agent back to
the login screen).
"""

from attrs import field, frozen


@frozen
class AuthError:
    """The backend rejected the bearer token (HTTP 401/403)."""

    status_code: int = field()
    message: str = field(default="Authentication required")

    def __str__(self) -> str:
        return f"{self.message} (HTTP {self.status_code})"


@frozen
class NetworkError:
    """Transport failure, timeout or non-success response from the backend."""

    message: str = field()
    status_code: int | None = field(default=None)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


@frozen
class ExtractionFailed:
    """Document extraction was refused or returned no usable data."""

    message: str = field()

    def __str__(self) -> str:
        return self.message


@frozen
class StaleCriteria:
    """A filter request was superseded by a newer one before it completed."""

    ticket: int = field()
    latest: int = field()

    def __str__(self) -> str:
        return f"Filter request {self.ticket} superseded by {self.latest}"


PortalError = AuthError | NetworkError | ExtractionFailed
