from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProfileRecord:
    user_id: str  # user id from Supabase auth
    display_name: str | None = None
