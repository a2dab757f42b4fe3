from __future__ import annotations

from supabase import AsyncClient, PostgrestAPIError

from profilescreen.domain.entities.profile import ProfileRecord
from profilescreen.domain.errors import NotFoundError, ServiceError

# PostgREST: ``.single()`` matched no rows
NO_ROWS_CODE = "PGRST116"

# Rows kept when SUPABASE_DISABLED=1, shared by every repository instance
_MEM: dict[str, ProfileRecord] = {}


class ProfileRepository:
    def __init__(
        self,
        client: AsyncClient | None,
        *,
        table: str = "profiles",
        disabled: bool = False,
        store: dict[str, ProfileRecord] | None = None,
    ) -> None:
        self.client = client
        self.table = table
        self.disabled = disabled
        self._mem = _MEM if store is None else store

    def _row_to_entity(self, user_id: str, row: dict) -> ProfileRecord:
        """Convert database row to ProfileRecord."""
        return ProfileRecord(
            user_id=row.get("user_id", user_id),
            display_name=row.get("display_name"),
        )

    @property
    def in_memory(self) -> bool:
        return self.disabled or self.client is None

    async def get(self, user_id: str) -> ProfileRecord:
        # In-memory mode
        if self.in_memory:
            record = self._mem.get(user_id)
            if record is None:
                raise NotFoundError(f"No profile for user {user_id}")
            return record

        # Supabase mode
        try:
            res = await (
                self.client.table(self.table)
                .select("user_id, display_name")
                .eq("user_id", user_id)
                .single()
                .execute()
            )
        except PostgrestAPIError as exc:
            if exc.code == NO_ROWS_CODE:
                raise NotFoundError(f"No profile for user {user_id}") from exc
            raise ServiceError(f"DB fetch profile failed: {exc.message}") from exc
        except Exception as exc:
            raise ServiceError(f"DB fetch profile failed: {exc}") from exc
        return self._row_to_entity(user_id, res.data or {})

    async def set_display_name(self, user_id: str, name: str) -> None:
        """Overwrite the display name; the last write wins."""
        # In-memory mode
        if self.in_memory:
            self._mem[user_id] = ProfileRecord(user_id=user_id, display_name=name)
            return

        # Supabase mode
        try:
            await (
                self.client.table(self.table)
                .update({"display_name": name})
                .eq("user_id", user_id)
                .execute()
            )
        except PostgrestAPIError as exc:
            raise ServiceError(f"DB update profile failed: {exc.message}") from exc
        except Exception as exc:
            raise ServiceError(f"DB update profile failed: {exc}") from exc
