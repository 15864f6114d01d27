"""Configuration management for the mapping engine."""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from mapping_engine.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_DELAY_SECONDS,
    DEFAULT_RETRY_COUNT,
    MAX_RETRY_COUNT,
)
from mapping_engine.models.mapping import WeightConfiguration

# Load environment variables from .env file in ops folder
env_path = Path(__file__).parent.parent / "ops" / ".env"
load_dotenv(dotenv_path=env_path)


class AIConfig(BaseSettings):
    """Remote similarity service (LLM) configuration."""

    enabled: bool = Field(default=True, alias="AI_ENABLED")
    provider: str = Field(default="azure", alias="AI_PROVIDER")
    endpoint: Optional[str] = Field(default=None, alias="AI_ENDPOINT")
    api_key: Optional[str] = Field(default=None, alias="AI_API_KEY")
    deployment: Optional[str] = Field(default=None, alias="AI_DEPLOYMENT")
    model: Optional[str] = Field(default=None, alias="AI_MODEL")
    api_version: str = Field(default=DEFAULT_API_VERSION, alias="AI_API_VERSION")
    temperature: float = Field(default=0.2, alias="AI_TEMPERATURE")
    retry_count: int = Field(default=DEFAULT_RETRY_COUNT, alias="AI_RETRY_COUNT")
    base_delay_seconds: float = Field(
        default=DEFAULT_BASE_DELAY_SECONDS, alias="AI_BASE_DELAY_SECONDS"
    )
    timeout: int = Field(default=60, alias="AI_TIMEOUT")
    log_request: bool = Field(default=True, alias="AI_LOG_REQUEST")
    log_raw: bool = Field(default=False, alias="AI_LOG_RAW")
    reasoning_model: bool = Field(default=True, alias="AI_REASONING_MODEL")

    class Config:
        env_file = "ops/.env"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True

    @field_validator("retry_count")
    @classmethod
    def _clamp_retry_count(cls, value: int) -> int:
        return max(0, min(MAX_RETRY_COUNT, value))

    @property
    def deployment_name(self) -> Optional[str]:
        """Deployment to call; falls back to the model name when no deployment is set."""
        return self.deployment or self.model

    @property
    def is_configured(self) -> bool:
        """True when the service is enabled and both endpoint and key are present."""
        return bool(
            self.enabled
            and self.endpoint and self.endpoint.strip()
            and self.api_key and self.api_key.strip()
        )


class WeightsSettings(BaseSettings):
    """Deployment-level defaults for the scoring weights and thresholds."""

    ai_similarity: float = Field(default=1.0, alias="MAPPING_AI_SIMILARITY_WEIGHT")
    high_threshold: float = Field(default=0.70, alias="MAPPING_HIGH_THRESHOLD")
    review_threshold: float = Field(default=0.40, alias="MAPPING_REVIEW_THRESHOLD")

    class Config:
        env_file = "ops/.env"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True

    def to_weights(self) -> WeightConfiguration:
        """Build the immutable weight configuration handed to the resolution engine."""
        return WeightConfiguration(
            ai_similarity=self.ai_similarity,
            high_threshold=self.high_threshold,
            review_threshold=self.review_threshold,
        )


class MLflowConfig(BaseSettings):
    """MLflow tracking configuration."""

    tracking_uri: Optional[str] = Field(
        default="sqlite:///mlflow.db", alias="MLFLOW_TRACKING_URI"
    )
    experiment_name: str = Field(default="mapping-engine", alias="MLFLOW_EXPERIMENT_NAME")
    enabled: bool = Field(default=False, alias="MLFLOW_ENABLED")

    class Config:
        env_file = "ops/.env"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True


class AppConfig(BaseSettings):
    """Main application configuration."""

    app_name: str = Field(default="mapping-engine", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    ai: AIConfig = Field(default_factory=AIConfig)
    weights: WeightsSettings = Field(default_factory=WeightsSettings)
    mlflow: MLflowConfig = Field(default_factory=MLflowConfig)

    class Config:
        env_file = "ops/.env"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config


def reload_config() -> AppConfig:
    """Reload configuration from environment variables."""
    global config
    config = AppConfig()
    return config
