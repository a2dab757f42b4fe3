"""View state for the profile screen.

The screen shows the user's display name, lets them edit it and offers a
logout guarded by a confirmation prompt. Every backend call goes through the
injected ``AccountService`` and every route change through the ``Navigator``,
so the screen can be driven by a real Supabase client or by a fake in tests.

Handlers are coroutines. ``dispatch`` runs one as a task owned by the screen;
``unmount`` cancels those tasks, and from then on any late response that tries
to write view state, queue a notice or navigate is dropped.
"""
from __future__ import annotations

import asyncio
import logging
from collections import deque
from enum import Enum
from typing import Any, Coroutine

from profilescreen.domain.entities.notice import Notice
from profilescreen.domain.errors import NotFoundError, ServiceError, ValidationError, validate_display_name
from profilescreen.domain.services.account_service import (
    DASHBOARD_ROUTE,
    ENTRY_ROUTE,
    AccountService,
    Navigator,
)

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER = "Set your name"

LOAD_FAILED = "Failed to load profile information"
NOT_SIGNED_IN = "You must be logged in to update your profile"
SAVE_SUCCEEDED = "Username updated successfully"
SAVE_FAILED = "Failed to update username"
LOGOUT_FAILED = "Failed to log out"
LOGOUT_UNEXPECTED = "An unexpected error occurred during logout"


class EditState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"


class LogoutState(str, Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    PROCESSING = "processing"  # prompt closed, sign-out in flight


class ProfileScreen:
    def __init__(self, account: AccountService, navigator: Navigator) -> None:
        self.account = account
        self.navigator = navigator

        self.loading = True
        self.committed_name = ""
        self.draft_name = ""
        self.edit_state = EditState.VIEWING
        self.logout_state = LogoutState.IDLE
        self.notices: deque[Notice] = deque()

        self.mounted = True
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def heading(self) -> str:
        return self.committed_name or NAME_PLACEHOLDER

    @property
    def can_edit(self) -> bool:
        return self.edit_state is EditState.VIEWING and not self.loading

    @property
    def can_save(self) -> bool:
        return self.edit_state is EditState.EDITING

    # State writes

    def _set(self, **changes: Any) -> None:
        if not self.mounted:
            logger.debug("Dropping state update after unmount: %s", ", ".join(sorted(changes)))
            return
        for name, value in changes.items():
            setattr(self, name, value)

    def _notify(self, notice: Notice) -> None:
        if not self.mounted:
            logger.debug("Dropping notice after unmount: %s", notice.message)
            return
        self.notices.append(notice)

    def _navigate(self, route: str) -> None:
        if not self.mounted:
            logger.debug("Dropping navigation to %s after unmount", route)
            return
        self.navigator.go_to(route)

    # Lifetime

    def dispatch(self, handler: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Run ``handler`` as a task that is cancelled when the screen unmounts."""
        task = asyncio.ensure_future(handler)
        if not self.mounted:
            task.cancel()
            return task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def unmount(self) -> None:
        self.mounted = False
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    # Session bootstrap

    async def initialize(self) -> None:
        """Load the signed-in user's display name, or leave for the entry route."""
        self._set(loading=True)
        try:
            session = await self.account.get_current_session()
            if session is None:
                self._navigate(ENTRY_ROUTE)
                return

            try:
                record = await self.account.get_profile(session.user_id)
            except NotFoundError:
                logger.info("No profile row for user %s, starting with an empty name", session.user_id)
                return

            if record.display_name:
                self._set(committed_name=record.display_name, draft_name=record.display_name)
        except Exception:
            logger.exception("Error fetching profile")
            self._notify(Notice.error(LOAD_FAILED))
        finally:
            self._set(loading=False)

    # Edit / save

    def begin_edit(self) -> None:
        if not self.can_edit:
            return
        self._set(draft_name=self.committed_name, edit_state=EditState.EDITING)

    def change_draft(self, text: str) -> None:
        if self.edit_state is not EditState.EDITING:
            return
        self._set(draft_name=text)

    async def save(self) -> None:
        """Write the trimmed draft back as the display name.

        Only one save runs at a time: a call made while a save is in flight,
        or outside editing mode, does nothing.
        """
        if self.edit_state is not EditState.EDITING:
            logger.debug("Ignoring save while %s", self.edit_state.value)
            return
        try:
            name = validate_display_name(self.draft_name)
        except ValidationError as exc:
            self._notify(Notice.error(str(exc)))
            return

        self._set(edit_state=EditState.SAVING)
        try:
            # Never reuse the session from initialize(); it may have expired.
            session = await self.account.get_current_session()
            if session is None:
                self._notify(Notice.error(NOT_SIGNED_IN))
                return

            await self.account.update_profile(session.user_id, display_name=name)
            self._set(committed_name=name, draft_name=name, edit_state=EditState.VIEWING)
            self._notify(Notice.success(SAVE_SUCCEEDED))
        except Exception:
            logger.exception("Error updating username")
            self._notify(Notice.error(SAVE_FAILED))
        finally:
            if self.edit_state is EditState.SAVING:
                self._set(edit_state=EditState.EDITING)

    # Logout

    def request_logout(self) -> None:
        if self.logout_state is LogoutState.IDLE:
            self._set(logout_state=LogoutState.CONFIRMING)

    def cancel_logout(self) -> None:
        if self.logout_state is LogoutState.CONFIRMING:
            self._set(logout_state=LogoutState.IDLE)

    async def confirm_logout(self) -> None:
        """Close the prompt and sign out; only one sign-out runs at a time."""
        if self.logout_state is not LogoutState.CONFIRMING:
            return
        self._set(logout_state=LogoutState.PROCESSING)
        try:
            await self.account.sign_out()
        except ServiceError as exc:
            logger.warning("Sign-out rejected: %s", exc)
            self._notify(Notice.error(f"{LOGOUT_FAILED}: {exc}"))
            return
        except Exception:
            logger.exception("Logout error")
            self._notify(Notice.error(LOGOUT_UNEXPECTED))
            return
        finally:
            self._set(logout_state=LogoutState.IDLE)
        self._navigate(ENTRY_ROUTE)

    # Misc

    def go_back(self) -> None:
        self._navigate(DASHBOARD_ROUTE)

    def acknowledge_notice(self) -> Notice | None:
        if not self.notices:
            return None
        return self.notices.popleft()
