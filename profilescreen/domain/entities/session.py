from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Session:
    user_id: str
    access_token: str | None = None
    email: str | None = None
