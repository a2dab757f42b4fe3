from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Path, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from profilescreen.application.use_cases.screen_registry import MountedScreen, ScreenRegistry
from profilescreen.infrastructure.account_service import SupabaseAccountService, build_account_service

_bearer_scheme = HTTPBearer(auto_error=False)

_REGISTRY = ScreenRegistry()


def get_access_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(_bearer_scheme)] = None,
) -> str | None:
    # A missing token is not an error here: the screen itself sends the
    # user back to the entry route when there is no session.
    if not credentials or not credentials.scheme or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials or None


async def get_account_service(
    access_token: Annotated[str | None, Depends(get_access_token)] = None,
) -> SupabaseAccountService:
    return await build_account_service(access_token)


def get_screen_registry() -> ScreenRegistry:
    return _REGISTRY


async def get_mounted_screen(
    screen_id: Annotated[str, Path(description="Identifier returned when the screen was mounted")],
    access_token: Annotated[str | None, Depends(get_access_token)] = None,
    registry: Annotated[ScreenRegistry, Depends(get_screen_registry)] = None,
) -> MountedScreen:
    mounted = registry.get(screen_id, access_token)
    if mounted is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Screen not found")
    return mounted
