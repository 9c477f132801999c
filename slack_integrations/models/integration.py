from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

PROJECT_PREFIX = "PROJECT#"
INTEGRATION_PREFIX = "INTEGRATION#"
NAME_SUFFIX = "連携"


def project_key(project_id: str) -> str:
    return f"{PROJECT_PREFIX}{project_id}"


def integration_key(integration_id: str) -> str:
    return f"{INTEGRATION_PREFIX}{integration_id}"


def integration_name(workspace_name: str, channel_name: str) -> str:
    """Display name, fixed at creation time"""
    return f"{workspace_name} - {channel_name} {NAME_SUFFIX}"


class Integration(BaseModel):
    """A project-scoped binding of a Slack channel, stored under ``settings``"""
    model_config = ConfigDict(populate_by_name=True)

    integration_id: str = Field(alias="integrationId")
    name: str
    slack_workspace_id: str = Field(alias="slackWorkspaceId")
    slack_channel_id: str = Field(alias="slackChannelId")
    project_id: str = Field(alias="projectId")
    notification_events: List[str] = Field(default_factory=list, alias="notificationEvents")
    description: str = ""

    def to_item(self) -> dict:
        return {
            "PK": project_key(self.project_id),
            "SK": integration_key(self.integration_id),
            "settings": self.to_api(),
        }

    @classmethod
    def from_item(cls, item: dict) -> "Integration":
        return cls.model_validate(item.get("settings") or {})

    def to_api(self) -> dict:
        return self.model_dump(by_alias=True)


class IntegrationSummary(BaseModel):
    """List entry with live-resolved channel and workspace names"""
    model_config = ConfigDict(populate_by_name=True)

    integration_id: str = Field(alias="integrationId")
    name: str
    slack_channel_name: str = Field(alias="slackChannelName")
    slack_workspace_name: str = Field(alias="slackWorkspaceName")
    description: Optional[str] = None
    notification_events: List[str] = Field(default_factory=list, alias="notificationEvents")
