from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: str | None
    supabase_key: str | None
    disabled: bool
    profiles_table: str
    env: str
    log_level: str

    @property
    def supabase_configured(self) -> bool:
        return not self.disabled and bool(self.supabase_url and self.supabase_key)


def get_settings() -> Settings:
    """Read settings from the environment (and ``.env``) on every call.

    When SUPABASE_DISABLED=1, adapters fall back to in-memory fakes.
    """
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_ANON_KEY"),
        disabled=os.getenv("SUPABASE_DISABLED", "0") == "1",
        profiles_table=os.getenv("PROFILES_TABLE", "profiles"),
        env=os.getenv("ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
