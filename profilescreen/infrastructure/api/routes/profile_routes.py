from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from profilescreen.application.dtos.screen_dto import DraftBody, ScreenStateResponse
from profilescreen.application.use_cases.screen_registry import MountedScreen, ScreenRegistry
from profilescreen.infrastructure.account_service import SupabaseAccountService
from profilescreen.infrastructure.api.dependencies import (
    get_access_token,
    get_account_service,
    get_mounted_screen,
    get_screen_registry,
)

router = APIRouter(
    prefix="/screens/profile",
    tags=["Profile Screen"],
    responses={
        404: {"description": "Not Found - Screen does not exist or belongs to another token"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)


@router.post(
    "",
    response_model=ScreenStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Mount Profile Screen",
    description="""
    Mount a new profile screen and load the signed-in user's display name.

    - Without a valid session the returned state carries `route: "/"`
      and the screen is unmounted right away
    - A user without a profile row gets an empty name and no error notice
    - Load failures are reported as a notice, never as an HTTP error

    **Authentication**: Optional (Bearer token)
    """,
    response_description="Screen state after the initial load",
)
async def mount_screen(
    access_token: str | None = Depends(get_access_token),
    account: SupabaseAccountService = Depends(get_account_service),
    registry: ScreenRegistry = Depends(get_screen_registry),
):
    """Mount a profile screen and run its initial load."""
    mounted = await registry.mount(account, access_token)
    return ScreenStateResponse.from_mounted(mounted)


@router.get(
    "/{screen_id}",
    response_model=ScreenStateResponse,
    summary="Get Screen State",
)
async def get_screen(mounted: MountedScreen = Depends(get_mounted_screen)):
    """Get the current state of a mounted screen."""
    return ScreenStateResponse.from_mounted(mounted)


@router.post(
    "/{screen_id}/edit",
    response_model=ScreenStateResponse,
    summary="Start Editing",
    description="Enter editing mode. The draft starts as the current display name.",
)
async def begin_edit(mounted: MountedScreen = Depends(get_mounted_screen)):
    mounted.screen.begin_edit()
    return ScreenStateResponse.from_mounted(mounted)


@router.put(
    "/{screen_id}/draft",
    response_model=ScreenStateResponse,
    summary="Change Draft",
    description="Replace the draft text. Ignored outside editing mode.",
)
async def change_draft(body: DraftBody, mounted: MountedScreen = Depends(get_mounted_screen)):
    mounted.screen.change_draft(body.text)
    return ScreenStateResponse.from_mounted(mounted)


@router.post(
    "/{screen_id}/save",
    response_model=ScreenStateResponse,
    summary="Save Display Name",
    description="""
    Save the trimmed draft as the display name.

    **Outcomes:**
    - Empty draft: error notice, still editing, nothing sent to the backend
    - Success: name updated, back to viewing, success notice
    - Failure: error notice, still editing, draft kept
    - A save already in flight makes this call a no-op
    """,
)
async def save(mounted: MountedScreen = Depends(get_mounted_screen)):
    await mounted.screen.save()
    return ScreenStateResponse.from_mounted(mounted)


@router.post(
    "/{screen_id}/back",
    response_model=ScreenStateResponse,
    summary="Go Back",
    description="Navigate back to the dashboard.",
)
async def go_back(mounted: MountedScreen = Depends(get_mounted_screen)):
    mounted.screen.go_back()
    return ScreenStateResponse.from_mounted(mounted)


@router.post(
    "/{screen_id}/logout",
    response_model=ScreenStateResponse,
    summary="Request Logout",
    description="Open the logout confirmation prompt. Nothing is signed out yet.",
)
async def request_logout(mounted: MountedScreen = Depends(get_mounted_screen)):
    mounted.screen.request_logout()
    return ScreenStateResponse.from_mounted(mounted)


@router.post(
    "/{screen_id}/logout/cancel",
    response_model=ScreenStateResponse,
    summary="Cancel Logout",
)
async def cancel_logout(mounted: MountedScreen = Depends(get_mounted_screen)):
    mounted.screen.cancel_logout()
    return ScreenStateResponse.from_mounted(mounted)


@router.post(
    "/{screen_id}/logout/confirm",
    response_model=ScreenStateResponse,
    summary="Confirm Logout",
    description="""
    Close the prompt and sign out.

    On success the state carries `route: "/"` and the screen is unmounted.
    On failure the user stays on the screen and an error notice includes the
    service's message.
    """,
)
async def confirm_logout(
    mounted: MountedScreen = Depends(get_mounted_screen),
    registry: ScreenRegistry = Depends(get_screen_registry),
):
    await mounted.screen.confirm_logout()
    state = ScreenStateResponse.from_mounted(mounted)
    await registry.release_if_left(mounted)
    return state


@router.post(
    "/{screen_id}/notices/ack",
    response_model=ScreenStateResponse,
    summary="Acknowledge Notice",
    description="Dismiss the oldest pending notice.",
)
async def acknowledge_notice(mounted: MountedScreen = Depends(get_mounted_screen)):
    mounted.screen.acknowledge_notice()
    return ScreenStateResponse.from_mounted(mounted)


@router.delete(
    "/{screen_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unmount Screen",
    description="Unmount the screen. Responses still in flight for it are discarded.",
)
async def unmount_screen(
    screen_id: str,
    access_token: str | None = Depends(get_access_token),
    registry: ScreenRegistry = Depends(get_screen_registry),
):
    if not await registry.unmount(screen_id, access_token):
        raise HTTPException(status_code=404, detail="Screen not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
