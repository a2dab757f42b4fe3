from __future__ import annotations

import hashlib
import logging

from supabase import AsyncClient, AuthApiError, AuthError, acreate_client

from profilescreen.domain.entities.session import Session
from profilescreen.domain.errors import ServiceError
from profilescreen.infrastructure.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Supabase Auth answers these for expired or revoked tokens
_SIGNED_OUT_STATUSES = (401, 403)


class SupabaseAuthAdapter:
    """Session lookup and sign-out against Supabase Auth.

    With an ``access_token`` the session is the one that token proves;
    without one it is whatever session the client itself holds.
    When SUPABASE_DISABLED=1 (or no client), any token yields a fake session.
    """

    def __init__(
        self,
        client: AsyncClient | None,
        access_token: str | None = None,
        *,
        disabled: bool = False,
    ) -> None:
        self.client = client
        self.access_token = access_token
        self.disabled = disabled

    async def get_current_session(self) -> Session | None:
        if self.disabled or self.client is None:
            if not self.access_token:
                return None
            # Deterministic fake user based on token digest
            digest = hashlib.sha256(self.access_token.encode()).hexdigest()
            return Session(user_id=f"fake-{digest[:12]}", access_token=self.access_token)

        try:
            if self.access_token:
                res = await self.client.auth.get_user(self.access_token)
                user = res.user if res else None
                if not user:
                    return None
                return Session(user_id=user.id, access_token=self.access_token, email=user.email)

            session = await self.client.auth.get_session()
            if session is None:
                return None
            return Session(
                user_id=session.user.id,
                access_token=session.access_token,
                email=session.user.email,
            )
        except AuthApiError as exc:
            if exc.status in _SIGNED_OUT_STATUSES:
                logger.info("Access token rejected by Supabase Auth: %s", exc.message)
                return None
            raise ServiceError(f"Session lookup failed: {exc.message}") from exc
        except Exception as exc:
            raise ServiceError(f"Session lookup failed: {exc}") from exc

    async def sign_out(self) -> None:
        if self.disabled or self.client is None:
            return
        try:
            if self.access_token:
                await self.client.auth.admin.sign_out(self.access_token)
            else:
                await self.client.auth.sign_out()
        except AuthError as exc:
            raise ServiceError(exc.message) from exc
        except Exception as exc:
            raise ServiceError(str(exc)) from exc


# Shared client for requests that carry no access token
_CLIENT_SINGLETON: AsyncClient | None = None


async def get_supabase_client(settings: Settings | None = None) -> AsyncClient | None:
    global _CLIENT_SINGLETON
    settings = settings or get_settings()
    if not settings.supabase_configured:
        return None
    if _CLIENT_SINGLETON is None:
        _CLIENT_SINGLETON = await acreate_client(settings.supabase_url, settings.supabase_key)
    return _CLIENT_SINGLETON


async def create_user_client(access_token: str, settings: Settings | None = None) -> AsyncClient | None:
    """Client whose database requests carry the user's JWT, so row-level security applies."""
    settings = settings or get_settings()
    if not settings.supabase_configured:
        return None
    client = await acreate_client(settings.supabase_url, settings.supabase_key)
    client.postgrest.auth(access_token)
    return client


async def close_client(client: AsyncClient) -> None:
    """Close the HTTP connections of a client made by ``create_user_client``."""
    try:
        await client.postgrest.aclose()
    finally:
        await client.auth.close()
