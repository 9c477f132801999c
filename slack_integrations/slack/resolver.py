"""
Resolves Slack workspace and channel ids to display names
"""
from typing import Tuple

from slack_integrations.core.logging_config import get_logger
from slack_integrations.slack.client import WebClientFactory, create_web_client, slack_error_code
from slack_integrations.store.token_store import TokenStore


class SlackNameResolver:
    """Looks names up with the workspace's stored token.

    Never raises: a missing credential or any failed Web API call leaves the
    corresponding raw id in place.
    """

    def __init__(self, token_store: TokenStore, client_factory: WebClientFactory = create_web_client):
        self.token_store = token_store
        self.client_factory = client_factory
        self.logger = get_logger("slack_integrations.slack.resolver")

    async def resolve_names(self, workspace_id: str, channel_id: str) -> Tuple[str, str]:
        """Return ``(channel_name, workspace_name)``"""
        channel_name = channel_id
        workspace_name = workspace_id

        try:
            credential = await self.token_store.get_workspace_credential(workspace_id)
        except Exception as e:
            self.logger.error(f"Credential lookup failed for workspace {workspace_id}: {e}")
            return channel_name, workspace_name

        if credential is None or not credential.access_token:
            self.logger.warning(f"No access token for workspace {workspace_id}, keeping raw ids")
            return channel_name, workspace_name

        client = self.client_factory(token=credential.access_token)

        try:
            response = await client.conversations_info(channel=channel_id)
            name = (response.get("channel") or {}).get("name")
            if name:
                channel_name = name
        except Exception as e:
            self.logger.error(
                f"conversations.info failed for {workspace_id}/{channel_id}: {slack_error_code(e)}"
            )

        try:
            response = await client.team_info(team=workspace_id)
            name = (response.get("team") or {}).get("name")
            if name:
                workspace_name = name
        except Exception as e:
            self.logger.error(f"team.info failed for {workspace_id}: {slack_error_code(e)}")

        return channel_name, workspace_name
