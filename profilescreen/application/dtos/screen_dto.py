from __future__ import annotations

from pydantic import BaseModel, Field

from profilescreen.application.use_cases.screen_registry import MountedScreen
from profilescreen.domain.entities.notice import Notice, NoticeKind
from profilescreen.domain.services.profile_screen import EditState, LogoutState


class NoticeItem(BaseModel):
    """A blocking message the client must show until acknowledged."""
    kind: NoticeKind = Field(..., description="Notice category", example="error")
    title: str = Field(..., description="Dialog title", example="Error")
    message: str = Field(..., description="Dialog body", example="Failed to update username")

    @classmethod
    def from_entity(cls, notice: Notice) -> "NoticeItem":
        return cls(kind=notice.kind, title=notice.title, message=notice.message)


class ScreenStateResponse(BaseModel):
    """Everything a client needs to render the profile screen."""
    screen_id: str = Field(..., description="Identifier of the mounted screen")
    loading: bool = Field(..., description="True while the profile is being fetched")
    heading: str = Field(..., description="Display name, or a placeholder when none is set", example="Alice")
    committed_name: str = Field(..., description="Last saved display name")
    draft_name: str = Field(..., description="Display name being edited")
    edit_state: EditState = Field(..., description="viewing, editing or saving")
    logout_state: LogoutState = Field(..., description="idle or confirming")
    can_edit: bool = Field(..., description="Whether the edit action is available")
    can_save: bool = Field(..., description="Whether the save action is available")
    notices: list[NoticeItem] = Field(default_factory=list, description="Pending notices, oldest first")
    route: str | None = Field(None, description="Route the screen navigated to, if any", example="/")

    @classmethod
    def from_mounted(cls, mounted: MountedScreen) -> "ScreenStateResponse":
        screen = mounted.screen
        return cls(
            screen_id=mounted.id,
            loading=screen.loading,
            heading=screen.heading,
            committed_name=screen.committed_name,
            draft_name=screen.draft_name,
            edit_state=screen.edit_state,
            logout_state=screen.logout_state,
            can_edit=screen.can_edit,
            can_save=screen.can_save,
            notices=[NoticeItem.from_entity(n) for n in screen.notices],
            route=mounted.navigator.current_route,
        )


class DraftBody(BaseModel):
    """Request model for draft text changes."""
    text: str = Field(..., description="Current contents of the name field", example="Alice")
