from __future__ import annotations

from fastapi import FastAPI

from profilescreen.application.dtos.common_dto import HealthResponse, RootResponse
from profilescreen.infrastructure.api.middlewares import add_default_middlewares
from profilescreen.infrastructure.api.routes.profile_routes import router as profile_router
from profilescreen.infrastructure.config import get_settings
from profilescreen.infrastructure.logging_setup import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Profile Screen",
        version="0.1.0",
        description="""
        ## Profile Screen API

        Server-driven profile screen for the mobile app, backed by Supabase for
        auth and the `profiles` table.

        ### Features
        - **Display name**: Load, edit and save the signed-in user's display name
        - **Logout**: Sign out behind a confirmation prompt
        - **Notices**: Success and error messages the client shows as dialogs

        ### Flow
        Mount a screen with `POST /screens/profile`, send user events to
        `/screens/profile/{screen_id}/...` and render the returned state.
        Send the user's Supabase access token on every call:
        ```
        Authorization: Bearer your-jwt-token
        ```
        When the returned state has a `route`, navigate there.
        """,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )
    add_default_middlewares(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the Profile Screen API",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "profile-screen", "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the API service is running and healthy",
    )
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(profile_router)
    return app


app = create_app()
