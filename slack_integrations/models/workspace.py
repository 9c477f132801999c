from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

WORKSPACE_PARTITION = "WORKSPACE#"
INSTALLATION_PARTITION = "INSTALLATION#"


class WorkspaceCredential(BaseModel):
    """OAuth credential of an authorized Slack workspace (team)"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    workspace_id: str
    access_token: Optional[str] = None
    team: Dict[str, Any] = Field(default_factory=dict)
    authed_user: Optional[Dict[str, Any]] = None
    bot_user_id: Optional[str] = None
    scope: Optional[str] = None
    app_id: Optional[str] = None
    token_type: Optional[str] = None
    updated_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="updatedAt",
    )

    @property
    def name(self) -> str:
        return self.team.get("name") or self.workspace_id

    def to_item(self) -> dict:
        item = self.model_dump(by_alias=True, exclude={"workspace_id"})
        item.update({"PK": WORKSPACE_PARTITION, "SK": self.workspace_id})
        return item

    @classmethod
    def from_item(cls, item: dict) -> "WorkspaceCredential":
        data = {k: v for k, v in item.items() if k not in ("PK", "SK")}
        return cls(workspace_id=item["SK"], **data)

    @classmethod
    def from_oauth_response(cls, response: Dict[str, Any]) -> "WorkspaceCredential":
        """Build a credential from an ``oauth.v2.access`` payload"""
        team = response.get("team") or {}
        return cls(
            workspace_id=team.get("id"),
            access_token=response.get("access_token"),
            team=team,
            authed_user=response.get("authed_user"),
            bot_user_id=response.get("bot_user_id"),
            scope=response.get("scope"),
            app_id=response.get("app_id"),
            token_type=response.get("token_type"),
        )
