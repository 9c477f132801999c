"""
Token store: workspace credentials, integrations and bot installations in one table
"""
from typing import Any, Dict, List, Optional

from slack_integrations.core.logging_config import get_logger
from slack_integrations.models.integration import (
    Integration,
    INTEGRATION_PREFIX,
    integration_key,
    project_key,
)
from slack_integrations.models.workspace import (
    INSTALLATION_PARTITION,
    WORKSPACE_PARTITION,
    WorkspaceCredential,
)
from slack_integrations.store.base import TableInterface


class TokenStore:
    """Typed access to the three record shapes kept in the table.

    No operation is transactional. Read-modify-write sequences done by the
    callers (edit, delete) race with concurrent writers and the last write
    wins.
    """

    def __init__(self, table: TableInterface):
        self.table = table
        self.logger = get_logger("slack_integrations.store.token_store")

    # Workspace credentials

    async def get_workspace_credential(self, workspace_id: str) -> Optional[WorkspaceCredential]:
        if not workspace_id:
            return None
        item = await self.table.get_item(WORKSPACE_PARTITION, workspace_id)
        if item is None:
            self.logger.debug(f"No credential found for workspace: {workspace_id}")
            return None
        return WorkspaceCredential.from_item(item)

    async def put_workspace_credential(self, credential: WorkspaceCredential) -> None:
        await self.table.put_item(credential.to_item())
        self.logger.info(f"Stored credential for workspace: {credential.workspace_id}")

    async def delete_workspace_credential(self, workspace_id: str) -> None:
        await self.table.delete_item(WORKSPACE_PARTITION, workspace_id)
        self.logger.info(f"Deleted credential for workspace: {workspace_id}")

    async def list_workspace_credentials(self) -> List[WorkspaceCredential]:
        items = await self.table.query(WORKSPACE_PARTITION)
        return [WorkspaceCredential.from_item(item) for item in items]

    # Integrations

    async def query_integrations(self, project_id: str) -> List[Integration]:
        # Unbounded: every integration of the project is loaded
        items = await self.table.query(project_key(project_id), INTEGRATION_PREFIX)
        return [Integration.from_item(item) for item in items]

    async def get_integration(self, project_id: str, integration_id: str) -> Optional[Integration]:
        item = await self.table.get_item(project_key(project_id), integration_key(integration_id))
        return Integration.from_item(item) if item is not None else None

    async def put_integration(self, integration: Integration) -> None:
        await self.table.put_item(integration.to_item())

    async def delete_integration(self, project_id: str, integration_id: str) -> None:
        await self.table.delete_item(project_key(project_id), integration_key(integration_id))

    # Bot installations

    async def get_installation(self, workspace_id: str) -> Optional[Dict[str, Any]]:
        item = await self.table.get_item(INSTALLATION_PARTITION, workspace_id)
        return item.get("installation") if item else None

    async def put_installation(self, workspace_id: str, installation: Dict[str, Any]) -> None:
        await self.table.put_item({
            "PK": INSTALLATION_PARTITION,
            "SK": workspace_id,
            "installation": installation,
        })
        self.logger.info(f"Stored installation for workspace: {workspace_id}")

    async def delete_installation(self, workspace_id: str) -> None:
        await self.table.delete_item(INSTALLATION_PARTITION, workspace_id)
        self.logger.info(f"Deleted installation for workspace: {workspace_id}")
