from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from profilescreen.infrastructure.config import get_settings


def add_default_middlewares(app: FastAPI) -> None:
    env = get_settings().env

    if env in ("development", "staging"):
        # Expo web and common dev servers
        allowed_origins = [
            "http://localhost:8081",
            "http://localhost:19006",
            "http://localhost:3000",
            "http://127.0.0.1:8081",
            "http://127.0.0.1:19006",
            "http://127.0.0.1:3000",
        ]
    else:
        # Production: native clients send no Origin header
        allowed_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allowed_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
