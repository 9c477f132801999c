"""
Tests for the table-backed installation store and uninstall listeners.
"""

from types import SimpleNamespace

import pytest
from slack_bolt.async_app import AsyncApp
from slack_sdk.oauth.installation_store import Installation

from slack_integrations.slack.bot import UninstallListeners, create_bolt_app
from tests.conftest import make_credential


def _installation(team_id="T1", user_id="U1"):
    return Installation(
        app_id="A1",
        team_id=team_id,
        team_name="Acme",
        bot_token="xoxb-1",
        bot_id="B1",
        bot_user_id="UBOT",
        bot_scopes="channels:read,chat:write",
        user_id=user_id,
    )


def _context(team_id="T1"):
    return SimpleNamespace(team_id=team_id, enterprise_id=None)


class TestTableInstallationStore:
    """Tests for TableInstallationStore."""

    @pytest.mark.asyncio
    async def test_save_and_find(self, installation_store):
        await installation_store.async_save(_installation())

        found = await installation_store.async_find_installation(enterprise_id=None, team_id="T1")

        assert found.team_id == "T1"
        assert found.bot_token == "xoxb-1"
        assert found.bot_scopes == ["channels:read", "chat:write"]

    @pytest.mark.asyncio
    async def test_find_filters_by_user(self, installation_store):
        await installation_store.async_save(_installation(user_id="U1"))

        assert await installation_store.async_find_installation(
            enterprise_id=None, team_id="T1", user_id="U2"
        ) is None
        assert await installation_store.async_find_installation(
            enterprise_id=None, team_id="T1", user_id="U1"
        ) is not None

    @pytest.mark.asyncio
    async def test_find_bot(self, installation_store):
        await installation_store.async_save(_installation())

        bot = await installation_store.async_find_bot(enterprise_id=None, team_id="T1")

        assert bot.bot_token == "xoxb-1"
        assert bot.bot_user_id == "UBOT"
        assert await installation_store.async_find_bot(enterprise_id=None, team_id="T9") is None

    @pytest.mark.asyncio
    async def test_save_without_team_is_ignored(self, installation_store, token_store):
        await installation_store.async_save(Installation(user_id="U1", enterprise_id="E1", team_id=None))
        assert await installation_store.async_find_installation(enterprise_id="E1", team_id=None) is None

    @pytest.mark.asyncio
    async def test_delete_bot_removes_credential(self, installation_store, token_store):
        await token_store.put_workspace_credential(make_credential())
        await installation_store.async_save(_installation())

        await installation_store.async_delete_bot(enterprise_id=None, team_id="T1")

        assert await token_store.get_installation("T1") is None
        assert await token_store.get_workspace_credential("T1") is None

    @pytest.mark.asyncio
    async def test_user_level_delete_is_ignored(self, installation_store, token_store):
        await token_store.put_workspace_credential(make_credential())
        await installation_store.async_save(_installation())

        await installation_store.async_delete_installation(enterprise_id=None, team_id="T1", user_id="U1")

        assert await token_store.get_installation("T1") is not None
        assert await token_store.get_workspace_credential("T1") is not None


class TestUninstallListeners:
    """Tests for the app_uninstalled and tokens_revoked handlers."""

    @pytest.mark.asyncio
    async def test_app_uninstalled_drops_team(self, installation_store, token_store):
        await token_store.put_workspace_credential(make_credential())
        await installation_store.async_save(_installation())

        await UninstallListeners(installation_store).app_uninstalled(_context())

        assert await token_store.get_installation("T1") is None
        assert await token_store.get_workspace_credential("T1") is None

    @pytest.mark.asyncio
    async def test_bot_token_revoked_drops_team(self, installation_store, token_store):
        await token_store.put_workspace_credential(make_credential())
        await installation_store.async_save(_installation())
        event = {"type": "tokens_revoked", "tokens": {"oauth": ["U1"], "bot": ["UBOT"]}}

        await UninstallListeners(installation_store).tokens_revoked(event, _context())

        assert await token_store.get_workspace_credential("T1") is None

    @pytest.mark.asyncio
    async def test_user_token_revoked_keeps_team(self, installation_store, token_store):
        await token_store.put_workspace_credential(make_credential())
        event = {"type": "tokens_revoked", "tokens": {"oauth": ["U1"]}}

        await UninstallListeners(installation_store).tokens_revoked(event, _context())

        assert await token_store.get_workspace_credential("T1") is not None


class TestCreateBoltApp:
    """Tests for create_bolt_app."""

    def test_disabled_without_signing_secret(self, test_settings, installation_store):
        test_settings.SLACK_SIGNING_SECRET = ""
        assert create_bolt_app(test_settings, installation_store) is None

    def test_builds_app_when_configured(self, test_settings, installation_store):
        test_settings.SLACK_SIGNING_SECRET = "signing-secret"

        bolt_app = create_bolt_app(test_settings, installation_store)

        assert isinstance(bolt_app, AsyncApp)
        assert bolt_app.installation_store is installation_store
