"""
Slack Bolt app receiving workspace lifecycle events
"""

from typing import Any, Dict, Optional

from slack_bolt.async_app import AsyncApp
from slack_bolt.context.async_context import AsyncBoltContext
from slack_bolt.oauth.async_oauth_settings import AsyncOAuthSettings
from slack_sdk.oauth.state_store import FileOAuthStateStore

from slack_integrations.core.config import Settings
from slack_integrations.core.logging_config import get_logger
from slack_integrations.slack.installation_store import TableInstallationStore

logger = get_logger("slack_integrations.slack.bot")


class UninstallListeners:
    """Drops stored tokens when Slack reports an uninstall or revocation"""

    def __init__(self, installation_store: TableInstallationStore):
        self.installation_store = installation_store

    async def app_uninstalled(self, context: AsyncBoltContext):
        logger.info(f"App uninstalled from team {context.team_id}")
        await self.installation_store.async_delete_all(
            enterprise_id=context.enterprise_id,
            team_id=context.team_id,
        )

    async def tokens_revoked(self, event: Dict[str, Any], context: AsyncBoltContext):
        tokens = event.get("tokens") or {}
        user_ids = tokens.get("oauth") or []
        bot_user_ids = tokens.get("bot") or []

        for user_id in user_ids:
            await self.installation_store.async_delete_installation(
                enterprise_id=context.enterprise_id,
                team_id=context.team_id,
                user_id=user_id,
            )
        if bot_user_ids:
            logger.info(f"Bot token revoked for team {context.team_id}")
            await self.installation_store.async_delete_bot(
                enterprise_id=context.enterprise_id,
                team_id=context.team_id,
            )


def create_bolt_app(settings: Settings, installation_store: TableInstallationStore) -> Optional[AsyncApp]:
    """Build the Bolt app, or None when Slack app credentials are not configured"""
    if not (settings.SLACK_SIGNING_SECRET and settings.SLACK_CLIENT_ID and settings.SLACK_CLIENT_SECRET):
        logger.warning("Slack signing secret or client credentials missing, events endpoint disabled")
        return None

    bolt_app = AsyncApp(
        signing_secret=settings.SLACK_SIGNING_SECRET,
        logger=get_logger("slack_integrations.slack.bolt"),
        oauth_settings=AsyncOAuthSettings(
            client_id=settings.SLACK_CLIENT_ID,
            client_secret=settings.SLACK_CLIENT_SECRET,
            scopes=settings.slack_scopes,
            installation_store=installation_store,
            state_store=FileOAuthStateStore(
                expiration_seconds=600,
                base_dir=settings.SLACK_STATE_DIR,
                client_id=settings.SLACK_CLIENT_ID,
            ),
            install_path="/slack/install",
            redirect_uri_path="/slack/install/callback",
        ),
        process_before_response=True,
    )

    listeners = UninstallListeners(installation_store)
    bolt_app.event("app_uninstalled")(listeners.app_uninstalled)
    bolt_app.event("tokens_revoked")(listeners.tokens_revoked)

    logger.info("Slack Bolt app initialized")
    return bolt_app
