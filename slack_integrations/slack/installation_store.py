"""
slack_sdk installation store backed by the token store table
"""
from logging import Logger
from typing import Optional

from slack_sdk.oauth.installation_store import Bot, Installation
from slack_sdk.oauth.installation_store.async_installation_store import AsyncInstallationStore

from slack_integrations.core.logging_config import get_logger
from slack_integrations.store.token_store import TokenStore


class TableInstallationStore(AsyncInstallationStore):
    """Keeps one installation per team under ``INSTALLATION#``.

    Enterprise ids are not part of the key. Removing a team's bot also
    removes its workspace credential, which is the only way credentials are
    ever deleted.
    """

    def __init__(self, token_store: TokenStore, logger: Optional[Logger] = None):
        self.token_store = token_store
        self._logger = logger or get_logger("slack_integrations.slack.installation_store")

    @property
    def logger(self) -> Logger:
        return self._logger

    async def async_save(self, installation: Installation):
        if not installation.team_id:
            self.logger.warning("Ignoring installation without a team id")
            return
        await self.token_store.put_installation(installation.team_id, dict(installation.__dict__))

    async def async_find_installation(
        self,
        *,
        enterprise_id: Optional[str],
        team_id: Optional[str],
        user_id: Optional[str] = None,
        is_enterprise_install: Optional[bool] = False,
    ) -> Optional[Installation]:
        if not team_id:
            return None
        data = await self.token_store.get_installation(team_id)
        if data is None:
            self.logger.debug(f"No installation found for team: {team_id}")
            return None
        installation = Installation(**data)
        if user_id is not None and installation.user_id != user_id:
            return None
        return installation

    async def async_find_bot(
        self,
        *,
        enterprise_id: Optional[str],
        team_id: Optional[str],
        is_enterprise_install: Optional[bool] = False,
    ) -> Optional[Bot]:
        installation = await self.async_find_installation(
            enterprise_id=enterprise_id,
            team_id=team_id,
            is_enterprise_install=is_enterprise_install,
        )
        if installation is None or not installation.bot_token:
            return None
        return installation.to_bot()

    async def async_delete_bot(self, *, enterprise_id: Optional[str], team_id: Optional[str]) -> None:
        await self._delete_team(team_id)

    async def async_delete_installation(
        self,
        *,
        enterprise_id: Optional[str],
        team_id: Optional[str],
        user_id: Optional[str] = None,
    ) -> None:
        if user_id is not None:
            # User tokens are not stored separately
            self.logger.info(f"Ignoring user-level uninstall for {team_id}/{user_id}")
            return
        await self._delete_team(team_id)

    async def async_delete_all(self, *, enterprise_id: Optional[str], team_id: Optional[str]):
        await self._delete_team(team_id)

    async def _delete_team(self, team_id: Optional[str]) -> None:
        if not team_id:
            return
        await self.token_store.delete_installation(team_id)
        await self.token_store.delete_workspace_credential(team_id)
