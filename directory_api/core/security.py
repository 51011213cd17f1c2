"""Principal model and company-level authorization.

Authentication happens upstream: the gateway in front of this service
validates the caller's token and forwards the resolved role and owned
companies as request headers. Nothing in here issues or verifies tokens.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import Header

from directory_api.core.config import settings
from directory_api.core.exceptions import UnauthorizedError


@dataclass(frozen=True)
class Principal:
    """The authenticated actor behind a request."""

    role: str
    company_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return self.role == settings.admin_role


def authorize(principal: Principal, company_id: str) -> bool:
    """True when *principal* may act on *company_id*'s roster."""
    return principal.is_admin or company_id in principal.company_ids


def require_company_access(principal: Principal, company_id: str, action: str) -> None:
    """Raise :class:`UnauthorizedError` unless *principal* may act on the company.

    Callers run this before touching storage or reading an upload.
    """
    if not authorize(principal, company_id):
        raise UnauthorizedError(
            f"not enough permission to {action} in company {company_id}"
        )


async def get_current_principal(
    x_user_role: str | None = Header(default=None),
    x_user_companies: str | None = Header(default=None),
) -> Principal:
    """FastAPI dependency building the :class:`Principal` from gateway headers."""
    if not x_user_role:
        raise UnauthorizedError()
    companies = frozenset(
        c.strip() for c in (x_user_companies or "").split(",") if c.strip()
    )
    return Principal(role=x_user_role.strip(), company_ids=companies)
