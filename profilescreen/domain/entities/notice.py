from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NoticeKind(str, Enum):
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class Notice:
    """A blocking message the user has to acknowledge."""

    kind: NoticeKind
    message: str

    @property
    def title(self) -> str:
        return "Error" if self.kind is NoticeKind.ERROR else "Success"

    @classmethod
    def error(cls, message: str) -> Notice:
        return cls(NoticeKind.ERROR, message)

    @classmethod
    def success(cls, message: str) -> Notice:
        return cls(NoticeKind.SUCCESS, message)
