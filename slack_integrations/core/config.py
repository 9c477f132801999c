import os
from typing import List, Optional, Union
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SLACK_SCOPES = "channels:read,chat:write,team:read,users:read,incoming-webhook"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Slack Integrations"
    VERSION: str = "0.1.0"

    # Storage
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "dynamodb")  # "dynamodb", "redis", "memory"
    DYNAMODB_TABLE: str = os.getenv("DYNAMODB_TABLE", "SlackIntegrations")
    DYNAMODB_REGION: str = os.getenv("DYNAMODB_REGION", "ap-northeast-1")
    DYNAMODB_ENDPOINT_URL: Optional[str] = os.getenv("DYNAMODB_ENDPOINT_URL")  # e.g. DynamoDB Local

    # Redis
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379")) if os.getenv("REDIS_PORT") else 6379
    REDIS_PASSWORD: Optional[str] = os.getenv("REDIS_PASSWORD")
    REDIS_DB: Union[str, int] = os.getenv("REDIS_DB", "0") if os.getenv("REDIS_DB") else 0
    REDIS_SSL: bool = False
    REDIS_USER: Optional[str] = os.getenv("REDIS_USER")
    REDIS_KEY_PREFIX: str = os.getenv("REDIS_KEY_PREFIX", "slack-integrations:")
    STORE_HEALTH_CHECK_TIMEOUT: int = int(os.getenv("STORE_HEALTH_CHECK_TIMEOUT", "5"))

    # Slack Configuration
    SLACK_CLIENT_ID: Optional[str] = os.getenv("SLACK_CLIENT_ID")
    SLACK_CLIENT_SECRET: Optional[str] = os.getenv("SLACK_CLIENT_SECRET")
    SLACK_SIGNING_SECRET: Optional[str] = os.getenv("SLACK_SIGNING_SECRET")
    SLACK_REDIRECT_URI: Optional[str] = os.getenv("SLACK_REDIRECT_URI")
    SLACK_SCOPES: str = os.getenv("SLACK_SCOPES", DEFAULT_SLACK_SCOPES)
    SLACK_STATE_DIR: str = os.getenv("SLACK_STATE_DIR", "data/oauth-states")  # Bolt install-flow states

    # HTTP
    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")

    @property
    def slack_scopes(self) -> List[str]:
        return [scope.strip() for scope in self.SLACK_SCOPES.split(",") if scope.strip()]

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]

    @property
    def REDIS_URL(self) -> str:
        protocol = "rediss" if self.REDIS_SSL else "redis"
        password = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        user = f"{self.REDIS_USER}" if self.REDIS_USER else ""
        return f"{protocol}://{user}{password}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
