"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPENWEATHER_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/weatherdash.db"


class UiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    notification_seconds: float = Field(default=6.0, gt=0.0)
    host: str = "127.0.0.1"
    port: int = Field(default=8778, ge=1, le=65535)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    storage: StorageConfig = StorageConfig()
    ui: UiConfig = UiConfig()
