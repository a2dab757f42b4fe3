from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from uuid import uuid4

from profilescreen.domain.services.account_service import ENTRY_ROUTE, AccountService
from profilescreen.domain.services.profile_screen import ProfileScreen
from profilescreen.infrastructure.navigation import RecordingNavigator

logger = logging.getLogger(__name__)


def _owner_key(access_token: str | None) -> str | None:
    if not access_token:
        return None
    return hashlib.sha256(access_token.encode()).hexdigest()


@dataclass
class MountedScreen:
    id: str
    screen: ProfileScreen
    navigator: RecordingNavigator
    owner: str | None


class ScreenRegistry:
    """
    Profile screens mounted by remote clients.

    A screen is only visible to requests carrying the access token it was
    mounted with (or no token, for anonymous mounts). Screens that navigate
    to the entry route are released right away; the client cannot return to
    them.
    """

    def __init__(self) -> None:
        self._screens: dict[str, MountedScreen] = {}

    def __len__(self) -> int:
        return len(self._screens)

    async def mount(self, account: AccountService, access_token: str | None) -> MountedScreen:
        navigator = RecordingNavigator()
        mounted = MountedScreen(
            id=uuid4().hex,
            screen=ProfileScreen(account, navigator),
            navigator=navigator,
            owner=_owner_key(access_token),
        )
        self._screens[mounted.id] = mounted
        logger.info("Mounted profile screen %s", mounted.id)
        await mounted.screen.initialize()
        await self.release_if_left(mounted)
        return mounted

    def get(self, screen_id: str, access_token: str | None) -> MountedScreen | None:
        mounted = self._screens.get(screen_id)
        if mounted is None or mounted.owner != _owner_key(access_token):
            return None
        return mounted

    async def unmount(self, screen_id: str, access_token: str | None) -> bool:
        mounted = self.get(screen_id, access_token)
        if mounted is None:
            return False
        await self._release(mounted)
        return True

    async def release_if_left(self, mounted: MountedScreen) -> bool:
        """Unmount ``mounted`` if it has navigated to the entry route."""
        if mounted.navigator.current_route != ENTRY_ROUTE:
            return False
        await self._release(mounted)
        return True

    async def _release(self, mounted: MountedScreen) -> None:
        if self._screens.pop(mounted.id, None) is None:
            return
        mounted.screen.unmount()
        logger.info("Unmounted profile screen %s", mounted.id)
        await mounted.screen.account.aclose()
