"""
Integration service: CRUD and test delivery for project Slack integrations
"""
import asyncio
import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import ValidationError
from slack_sdk.errors import SlackApiError

from slack_integrations.core.errors import IntegrationValidationError
from slack_integrations.core.logging_config import get_logger
from slack_integrations.models import ApiResponse, Integration, IntegrationSummary, integration_name
from slack_integrations.slack.client import WebClientFactory, create_web_client, slack_error_code
from slack_integrations.slack.oauth import ACCESS_TOKEN_NOT_FOUND
from slack_integrations.slack.resolver import SlackNameResolver
from slack_integrations.store.token_store import TokenStore

WORKSPACE_REQUIRED = "ワークスペースは必須です"
CHANNEL_REQUIRED = "Slackチャネルは必須です"
EVENTS_REQUIRED = "通知イベントは1つ以上選択してください"
INTEGRATION_NOT_FOUND = "Integration not found"

# Kick errors meaning the bot is already out of the channel
IGNORED_KICK_ERRORS = ("not_in_channel", "cant_kick_self")


def build_test_message(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"テストメッセージ送信: {now.strftime('%Y/%m/%d %H:%M:%S')}"


def invalid_field_message(error: ValidationError) -> str:
    """``"<field>: <reason>"`` for the first failing field"""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first.get('msg')}" if field else first.get("msg", str(error))


class IntegrationService:
    """List, add, get, edit, delete and test project integrations"""

    def __init__(
        self,
        token_store: TokenStore,
        resolver: Optional[SlackNameResolver] = None,
        client_factory: WebClientFactory = create_web_client,
    ):
        self.token_store = token_store
        self.client_factory = client_factory
        self.resolver = resolver or SlackNameResolver(token_store, client_factory)
        self.logger = get_logger("slack_integrations.services.integrations")

    async def list_integrations(self, project_id: str) -> ApiResponse:
        integrations = await self.token_store.query_integrations(project_id)
        self.logger.info(f"Found {len(integrations)} integrations for project {project_id}")
        if not integrations:
            return ApiResponse.ok([])

        # gather keeps the query order regardless of completion order
        summaries = await asyncio.gather(*(self._summarize(i) for i in integrations))
        return ApiResponse.ok([s.model_dump(by_alias=True) for s in summaries])

    async def _summarize(self, integration: Integration) -> IntegrationSummary:
        channel_name, workspace_name = await self.resolver.resolve_names(
            integration.slack_workspace_id, integration.slack_channel_id
        )
        return IntegrationSummary(
            integration_id=integration.integration_id,
            name=integration.name,
            slack_channel_name=channel_name,
            slack_workspace_name=workspace_name,
            description=integration.description,
            notification_events=integration.notification_events,
        )

    async def add_integration(
        self,
        project_id: str,
        slack_workspace_id: Optional[str],
        slack_channel_id: Optional[str],
        notification_events: Any,
        description: Optional[str] = None,
    ) -> ApiResponse:
        """Create an integration.

        Raises:
            IntegrationValidationError: a required field is missing; nothing is written
        """
        if not slack_workspace_id:
            raise IntegrationValidationError(WORKSPACE_REQUIRED)
        if not slack_channel_id:
            raise IntegrationValidationError(CHANNEL_REQUIRED)
        if not isinstance(notification_events, list) or len(notification_events) == 0:
            raise IntegrationValidationError(EVENTS_REQUIRED)

        channel_name, workspace_name = await self.resolver.resolve_names(slack_workspace_id, slack_channel_id)

        integration = Integration(
            integration_id=str(uuid.uuid4()),
            name=integration_name(workspace_name, channel_name),
            slack_workspace_id=slack_workspace_id,
            slack_channel_id=slack_channel_id,
            project_id=project_id,
            notification_events=notification_events,
            description=description or "",
        )
        await self.token_store.put_integration(integration)
        self.logger.info(f"Created integration {integration.integration_id} for project {project_id}")
        return ApiResponse.ok(integration.to_api())

    async def get_integration(self, project_id: str, integration_id: str) -> ApiResponse:
        integration = await self.token_store.get_integration(project_id, integration_id)
        if integration is None:
            return ApiResponse.fail(INTEGRATION_NOT_FOUND)
        return ApiResponse.ok(integration.to_api())

    async def edit_integration(
        self,
        project_id: str,
        integration_id: str,
        description: Optional[str] = None,
        notification_events: Optional[List[str]] = None,
    ) -> ApiResponse:
        integration = await self.token_store.get_integration(project_id, integration_id)
        if integration is None:
            return ApiResponse.fail(INTEGRATION_NOT_FOUND)

        # Workspace, channel and name stay as created
        try:
            updated = Integration.model_validate({
                **integration.to_api(),
                "description": description or "",
                "notificationEvents": notification_events or [],
            })
        except ValidationError as e:
            message = invalid_field_message(e)
            self.logger.info(f"Rejected update of integration {integration_id}: {message}")
            return ApiResponse.fail(message)

        await self.token_store.put_integration(updated)
        self.logger.info(f"Updated integration {integration_id} for project {project_id}")
        return ApiResponse.ok(updated.to_api())

    async def delete_integration(self, project_id: str, integration_id: str) -> ApiResponse:
        integration = await self.token_store.get_integration(project_id, integration_id)
        if integration is not None:
            await self._remove_bot_from_channel(integration)

        await self.token_store.delete_integration(project_id, integration_id)
        self.logger.info(f"Deleted integration {integration_id} for project {project_id}")
        return ApiResponse(done=True)

    async def _remove_bot_from_channel(self, integration: Integration) -> None:
        credential = await self.token_store.get_workspace_credential(integration.slack_workspace_id)
        if credential is None or not credential.access_token:
            return

        client = self.client_factory(token=credential.access_token)
        try:
            await client.conversations_kick(
                channel=integration.slack_channel_id,
                user=credential.bot_user_id,
            )
            self.logger.info(f"Removed bot from channel {integration.slack_channel_id}")
        except Exception as e:
            error_code = slack_error_code(e)
            if error_code not in IGNORED_KICK_ERRORS:
                self.logger.warning(
                    f"Failed to remove bot from channel {integration.slack_channel_id}: {error_code}"
                )

    async def send_test_message(self, project_id: str, integration_id: str) -> ApiResponse:
        integration = await self.token_store.get_integration(project_id, integration_id)
        if integration is None:
            return ApiResponse.fail(INTEGRATION_NOT_FOUND)

        credential = await self.token_store.get_workspace_credential(integration.slack_workspace_id)
        if credential is None or not credential.access_token:
            return ApiResponse.fail(ACCESS_TOKEN_NOT_FOUND)

        text = build_test_message()
        client = self.client_factory(token=credential.access_token)
        try:
            await client.chat_postMessage(channel=integration.slack_channel_id, text=text)
        except SlackApiError as e:
            error_code = slack_error_code(e)
            self.logger.error(f"Test message to {integration.slack_channel_id} failed: {error_code}")
            return ApiResponse.fail(error_code)
        except Exception as e:
            self.logger.error(f"Test message to {integration.slack_channel_id} failed: {e}")
            return ApiResponse.fail(str(e))

        self.logger.info(f"Test message sent to {integration.slack_channel_id}")
        return ApiResponse(done=True)
