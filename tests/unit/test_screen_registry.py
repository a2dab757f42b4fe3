"""
Tests for mounting, looking up and releasing profile screens.
"""
from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from profilescreen.application.use_cases.screen_registry import ScreenRegistry
from profilescreen.domain.entities.profile import ProfileRecord
from profilescreen.domain.entities.session import Session
from profilescreen.infrastructure.account_service import SupabaseAccountService


def run(coro):
    return asyncio.run(coro)


class TestScreenRegistry:
    def test_signed_out_mounts_are_not_kept(self, registry, make_account):
        accounts = [make_account(session=None) for _ in range(20)]

        for account in accounts:
            mounted = run(registry.mount(account, None))
            assert mounted.navigator.current_route == "/"

        assert len(registry) == 0
        for account in accounts:
            account.aclose.assert_awaited_once()

    def test_signed_in_mount_is_kept_until_unmount(self, registry, make_account):
        account = make_account()

        mounted = run(registry.mount(account, "tok"))

        assert len(registry) == 1
        assert registry.get(mounted.id, "tok") is mounted
        assert registry.get(mounted.id, "other") is None
        account.aclose.assert_not_awaited()

        assert run(registry.unmount(mounted.id, "tok")) is True
        assert len(registry) == 0
        assert mounted.screen.mounted is False
        account.aclose.assert_awaited_once()
        assert run(registry.unmount(mounted.id, "tok")) is False

    def test_released_after_logout(self, registry, make_account):
        account = make_account()
        mounted = run(registry.mount(account, "tok"))
        mounted.screen.request_logout()
        run(mounted.screen.confirm_logout())

        assert run(registry.release_if_left(mounted)) is True

        assert len(registry) == 0
        account.aclose.assert_awaited_once()

    def test_dashboard_navigation_keeps_screen(self, registry, make_account):
        mounted = run(registry.mount(make_account(), "tok"))
        mounted.screen.go_back()

        assert run(registry.release_if_left(mounted)) is False
        assert len(registry) == 1


class TestAccountServiceClose:
    def test_owned_client_is_closed_once(self):
        client = Mock()
        client.postgrest.aclose = AsyncMock(return_value=None)
        client.auth.close = AsyncMock(return_value=None)
        service = SupabaseAccountService(auth=Mock(), profiles=Mock(), owned_client=client)

        run(service.aclose())
        run(service.aclose())

        client.postgrest.aclose.assert_awaited_once()
        client.auth.close.assert_awaited_once()

    def test_shared_client_is_left_open(self):
        service = SupabaseAccountService(auth=Mock(), profiles=Mock())

        run(service.aclose())

        assert service.owned_client is None


@pytest.fixture
def registry():
    return ScreenRegistry()


@pytest.fixture
def make_account():
    def factory(session=Session(user_id="user_1", access_token="tok")):
        acc = Mock()
        acc.get_current_session = AsyncMock(return_value=session)
        acc.get_profile = AsyncMock(return_value=ProfileRecord(user_id="user_1", display_name="Bob"))
        acc.update_profile = AsyncMock(return_value=None)
        acc.sign_out = AsyncMock(return_value=None)
        acc.aclose = AsyncMock(return_value=None)
        return acc

    return factory
