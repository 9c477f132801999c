"""
Shared pytest fixtures for the Slack integrations test suite.

The process runs against the in-memory table backend and a fake Slack
Web API client; nothing talks to AWS, Redis or Slack.
"""

import os
import tempfile
from typing import Optional
from unittest.mock import AsyncMock

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="slack-integrations-tests-")
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["SLACK_STATE_DIR"] = os.path.join(_TMP_DIR, "states")
os.environ["SLACK_CLIENT_ID"] = "111.222"
os.environ["SLACK_CLIENT_SECRET"] = "client-secret"
os.environ["SLACK_REDIRECT_URI"] = "https://example.com/slack/oauth/callback"
os.environ.pop("SLACK_SIGNING_SECRET", None)

from slack_sdk.errors import SlackApiError  # noqa: E402

from slack_integrations.core.config import Settings  # noqa: E402
from slack_integrations.models import WorkspaceCredential  # noqa: E402
from slack_integrations.services.integration_service import IntegrationService  # noqa: E402
from slack_integrations.slack.installation_store import TableInstallationStore  # noqa: E402
from slack_integrations.slack.oauth import SlackOAuthHandler  # noqa: E402
from slack_integrations.store.memory_table import MemoryTable  # noqa: E402
from slack_integrations.store.token_store import TokenStore  # noqa: E402


def slack_error(code: str) -> SlackApiError:
    """SlackApiError as raised by the Web API client for ``ok: false``"""
    return SlackApiError(f"The request to the Slack API failed: {code}", {"ok": False, "error": code})


class FakeSlackClient:
    """Stands in for AsyncWebClient; every Web API method is an AsyncMock"""

    def __init__(self):
        self.tokens = []
        self.conversations_info = AsyncMock(return_value={"ok": True, "channel": {"id": "C1", "name": "general"}})
        self.team_info = AsyncMock(return_value={"ok": True, "team": {"id": "T1", "name": "Acme"}})
        self.conversations_kick = AsyncMock(return_value={"ok": True})
        self.chat_postMessage = AsyncMock(return_value={"ok": True, "ts": "1700000000.000100"})
        self.conversations_list = AsyncMock(return_value={
            "ok": True,
            "channels": [{"id": "C1", "name": "general"}, {"id": "C2", "name": "random"}],
        })
        self.oauth_v2_access = AsyncMock(return_value={
            "ok": True,
            "access_token": "xoxb-new-token",
            "token_type": "bot",
            "scope": "channels:read,chat:write",
            "bot_user_id": "UBOT",
            "app_id": "A1",
            "team": {"id": "T1", "name": "Acme"},
            "authed_user": {"id": "U1"},
        })
        self.auth_test = AsyncMock(return_value={"ok": True, "bot_id": "B1"})

    def factory(self, token: Optional[str] = None):
        self.tokens.append(token)
        return self


@pytest.fixture
def table():
    return MemoryTable()


@pytest.fixture
def token_store(table):
    return TokenStore(table)


@pytest.fixture
def fake_slack():
    return FakeSlackClient()


@pytest.fixture
def integration_service(token_store, fake_slack):
    return IntegrationService(token_store, client_factory=fake_slack.factory)


@pytest.fixture
def test_settings():
    return Settings(
        SLACK_CLIENT_ID="111.222",
        SLACK_CLIENT_SECRET="client-secret",
        SLACK_REDIRECT_URI="https://example.com/slack/oauth/callback",
        SLACK_SCOPES="channels:read,chat:write,team:read,users:read,incoming-webhook",
        SLACK_STATE_DIR=os.path.join(_TMP_DIR, "states"),
    )


@pytest.fixture
def installation_store(token_store):
    return TableInstallationStore(token_store)


@pytest.fixture
def oauth_handler(test_settings, token_store, installation_store, fake_slack):
    return SlackOAuthHandler(
        test_settings,
        token_store,
        installation_store=installation_store,
        client_factory=fake_slack.factory,
    )


def make_credential(workspace_id: str = "T1", access_token: Optional[str] = "tok-A",
                    name: str = "Acme", bot_user_id: str = "UBOT") -> WorkspaceCredential:
    return WorkspaceCredential(
        workspace_id=workspace_id,
        access_token=access_token,
        team={"id": workspace_id, "name": name},
        bot_user_id=bot_user_id,
        scope="channels:read,chat:write",
        app_id="A1",
        token_type="bot",
    )
