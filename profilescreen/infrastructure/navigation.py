from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class RecordingNavigator:
    """Navigator for server-driven screens: the client reads the route back."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def current_route(self) -> str | None:
        return self.history[-1] if self.history else None

    def go_to(self, route: str) -> None:
        logger.info("Navigating to %s", route)
        self.history.append(route)
