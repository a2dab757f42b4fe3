from __future__ import annotations

from dataclasses import dataclass

from supabase import AsyncClient

from profilescreen.domain.entities.profile import ProfileRecord
from profilescreen.domain.entities.session import Session
from profilescreen.infrastructure.config import Settings, get_settings
from profilescreen.infrastructure.database.repositories.profile_repository import ProfileRepository
from profilescreen.infrastructure.database.supabase_client import (
    SupabaseAuthAdapter,
    close_client,
    create_user_client,
    get_supabase_client,
)


@dataclass
class SupabaseAccountService:
    """AccountService backed by Supabase Auth and the profiles table."""

    auth: SupabaseAuthAdapter
    profiles: ProfileRepository
    # Per-token clients belong to one screen; the shared singleton does not
    owned_client: AsyncClient | None = None

    async def get_current_session(self) -> Session | None:
        return await self.auth.get_current_session()

    async def get_profile(self, user_id: str) -> ProfileRecord:
        return await self.profiles.get(user_id)

    async def update_profile(self, user_id: str, *, display_name: str) -> None:
        await self.profiles.set_display_name(user_id, display_name)

    async def sign_out(self) -> None:
        await self.auth.sign_out()

    async def aclose(self) -> None:
        client, self.owned_client = self.owned_client, None
        if client is not None:
            await close_client(client)


async def build_account_service(
    access_token: str | None, settings: Settings | None = None
) -> SupabaseAccountService:
    settings = settings or get_settings()
    if access_token:
        client = await create_user_client(access_token, settings)
        owned = client
    else:
        client = await get_supabase_client(settings)
        owned = None
    return SupabaseAccountService(
        auth=SupabaseAuthAdapter(client, access_token, disabled=settings.disabled),
        profiles=ProfileRepository(client, table=settings.profiles_table, disabled=settings.disabled),
        owned_client=owned,
    )
