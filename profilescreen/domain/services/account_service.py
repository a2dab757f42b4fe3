from __future__ import annotations

from typing import Protocol

from profilescreen.domain.entities.profile import ProfileRecord
from profilescreen.domain.entities.session import Session

ENTRY_ROUTE = "/"
DASHBOARD_ROUTE = "/dashboard"


class AccountService(Protocol):
    """Session, profile and sign-out operations the profile screen relies on.

    Implementations raise ``ServiceError`` on transport or auth failures and
    ``NotFoundError`` from ``get_profile`` when the user has no profile row.
    """

    async def get_current_session(self) -> Session | None: ...

    async def get_profile(self, user_id: str) -> ProfileRecord: ...

    async def update_profile(self, user_id: str, *, display_name: str) -> None: ...

    async def sign_out(self) -> None: ...

    async def aclose(self) -> None:
        """Release connections held for this screen."""
        ...


class Navigator(Protocol):
    def go_to(self, route: str) -> None: ...
