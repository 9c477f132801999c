"""
Slack OAuth handler: authorize URL, code exchange, workspace and channel listing
"""

import secrets
from typing import Any, Dict, Optional

from slack_sdk.errors import SlackApiError
from slack_sdk.oauth import AuthorizeUrlGenerator
from slack_sdk.oauth.installation_store import Installation

from slack_integrations.core.config import Settings
from slack_integrations.core.logging_config import get_logger
from slack_integrations.models import ApiResponse, WorkspaceCredential
from slack_integrations.slack.client import WebClientFactory, create_web_client, slack_error_code
from slack_integrations.slack.installation_store import TableInstallationStore
from slack_integrations.store.token_store import TokenStore

CHANNEL_TYPES = "public_channel,private_channel"
CHANNEL_LIST_LIMIT = 1000

OAUTH_SUCCESS_MESSAGE = "Slackワークスペース連携が完了しました。画面を閉じてください。"
OAUTH_FAILED_PREFIX = "Slack OAuth失敗: "
OAUTH_ERROR_PREFIX = "Slack OAuthエラー: "
MISSING_TEAM_ID_MESSAGE = "team.idが取得できません"
ACCESS_TOKEN_NOT_FOUND = "アクセストークンが見つかりません"


class SlackOAuthHandler:
    """Handles the Slack OAuth v2 flow and workspace lookups"""

    def __init__(
        self,
        settings: Settings,
        token_store: TokenStore,
        installation_store: Optional[TableInstallationStore] = None,
        client_factory: WebClientFactory = create_web_client,
    ):
        self.client_id = settings.SLACK_CLIENT_ID
        self.client_secret = settings.SLACK_CLIENT_SECRET
        self.redirect_uri = settings.SLACK_REDIRECT_URI
        self.scopes = settings.slack_scopes
        self.token_store = token_store
        self.installation_store = installation_store or TableInstallationStore(token_store)
        self.client_factory = client_factory
        self.logger = get_logger("slack_integrations.slack.oauth")

        self.authorize_url_generator = AuthorizeUrlGenerator(
            client_id=self.client_id,
            redirect_uri=self.redirect_uri,
            scopes=self.scopes,
        )

    def get_oauth_url(self) -> ApiResponse:
        """Generate OAuth authorization URL"""
        # TODO: persist the state and check it in the callback; it is currently only an opaque nonce
        state = secrets.token_urlsafe(16)
        url = self.authorize_url_generator.generate(state=state)
        self.logger.info("Generated OAuth URL")
        return ApiResponse(done=True, url=url)

    async def exchange_code_for_token(self, code: Optional[str]) -> ApiResponse:
        """Exchange an authorization code and store the workspace credential"""
        if not code:
            return ApiResponse.fail("code is required")

        try:
            client = self.client_factory()
            oauth_response = await client.oauth_v2_access(
                client_id=self.client_id,
                client_secret=self.client_secret,
                redirect_uri=self.redirect_uri,
                code=code,
            )
        except SlackApiError as e:
            error_code = slack_error_code(e)
            self.logger.error(f"Slack OAuth error: {error_code}")
            return ApiResponse.fail(OAUTH_FAILED_PREFIX + error_code)
        except Exception as e:
            self.logger.error(f"Error during token exchange: {e}")
            return ApiResponse.fail(OAUTH_ERROR_PREFIX + str(e))

        if not oauth_response.get("ok", False):
            error_code = oauth_response.get("error", "Unknown error")
            self.logger.error(f"Slack OAuth error: {error_code}")
            return ApiResponse.fail(OAUTH_FAILED_PREFIX + error_code)

        team = oauth_response.get("team") or {}
        if not team.get("id"):
            self.logger.error("Slack OAuth response has no team id")
            return ApiResponse.fail(OAUTH_ERROR_PREFIX + MISSING_TEAM_ID_MESSAGE)

        try:
            credential = WorkspaceCredential.from_oauth_response(_response_data(oauth_response))
            await self.token_store.put_workspace_credential(credential)
            await self._save_installation(oauth_response)
        except Exception as e:
            self.logger.error(f"Error saving workspace credential: {e}")
            return ApiResponse.fail(OAUTH_ERROR_PREFIX + str(e))

        self.logger.info(f"Workspace authorized: {credential.name} ({credential.workspace_id})")
        return ApiResponse(done=True, message=OAUTH_SUCCESS_MESSAGE)

    async def _save_installation(self, oauth_response) -> None:
        installed_team = oauth_response.get("team") or {}
        installed_enterprise = oauth_response.get("enterprise") or {}
        installer = oauth_response.get("authed_user") or {}
        incoming_webhook = oauth_response.get("incoming_webhook") or {}
        bot_token = oauth_response.get("access_token")

        bot_id = None
        if bot_token:
            try:
                auth_test = await self.client_factory(token=bot_token).auth_test()
                bot_id = auth_test.get("bot_id")
            except Exception as e:
                self.logger.warning(f"auth.test failed, saving installation without bot id: {slack_error_code(e)}")

        installation = Installation(
            app_id=oauth_response.get("app_id"),
            enterprise_id=installed_enterprise.get("id"),
            enterprise_name=installed_enterprise.get("name"),
            team_id=installed_team.get("id"),
            team_name=installed_team.get("name"),
            bot_token=bot_token,
            bot_id=bot_id,
            bot_user_id=oauth_response.get("bot_user_id"),
            bot_scopes=oauth_response.get("scope"),
            user_id=installer.get("id"),
            user_token=installer.get("access_token"),
            user_scopes=installer.get("scope"),
            incoming_webhook_url=incoming_webhook.get("url"),
            incoming_webhook_channel=incoming_webhook.get("channel"),
            incoming_webhook_channel_id=incoming_webhook.get("channel_id"),
            incoming_webhook_configuration_url=incoming_webhook.get("configuration_url"),
            is_enterprise_install=oauth_response.get("is_enterprise_install"),
            token_type=oauth_response.get("token_type"),
        )
        await self.installation_store.async_save(installation)

    async def list_workspaces(self) -> ApiResponse:
        """List every authorized workspace as ``{id, name}``"""
        credentials = await self.token_store.list_workspace_credentials()
        workspaces = [{"id": c.workspace_id, "name": c.name} for c in credentials]
        self.logger.info(f"Fetched {len(workspaces)} workspaces")
        return ApiResponse.ok(workspaces)

    async def list_channels(self, workspace_id: Optional[str]) -> ApiResponse:
        """List the channels of a workspace as ``{id, name}``"""
        if not workspace_id:
            return ApiResponse.fail("workspaceId is required")

        credential = await self.token_store.get_workspace_credential(workspace_id)
        if credential is None or not credential.access_token:
            return ApiResponse.fail(ACCESS_TOKEN_NOT_FOUND)

        try:
            client = self.client_factory(token=credential.access_token)
            response = await client.conversations_list(types=CHANNEL_TYPES, limit=CHANNEL_LIST_LIMIT)
        except SlackApiError as e:
            error_code = slack_error_code(e)
            self.logger.error(f"conversations.list failed for {workspace_id}: {error_code}")
            return ApiResponse.fail(error_code)

        channels = [{"id": ch.get("id"), "name": ch.get("name")} for ch in response.get("channels") or []]
        return ApiResponse.ok(channels)


def _response_data(response) -> Dict[str, Any]:
    """Plain dict of a Web API response (``SlackResponse`` or dict)"""
    data = getattr(response, "data", response)
    return dict(data) if isinstance(data, dict) else {}
