"""Shared fixtures."""

import pytest

from mapping_engine import config as config_module
from mapping_engine.config import AppConfig
from mapping_engine.models import Column, Schema, SchemaOrigin

_ENV_VARS = (
    "AI_ENABLED",
    "AI_PROVIDER",
    "AI_ENDPOINT",
    "AI_API_KEY",
    "AI_DEPLOYMENT",
    "AI_MODEL",
    "AI_API_VERSION",
    "AI_TEMPERATURE",
    "AI_RETRY_COUNT",
    "AI_BASE_DELAY_SECONDS",
    "AI_TIMEOUT",
    "AI_LOG_REQUEST",
    "AI_LOG_RAW",
    "AI_REASONING_MODEL",
    "MAPPING_AI_SIMILARITY_WEIGHT",
    "MAPPING_HIGH_THRESHOLD",
    "MAPPING_REVIEW_THRESHOLD",
    "MLFLOW_ENABLED",
    "MLFLOW_TRACKING_URI",
    "MLFLOW_EXPERIMENT_NAME",
    "APP_NAME",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings read during a test independent of the developer's shell."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "config", AppConfig())


@pytest.fixture
def source_schema():
    return Schema(
        name="dbo.Customer",
        origin=SchemaOrigin.PARSED_SCRIPT,
        columns=(
            Column(name="customer_id", data_type="int", is_nullable=False, is_identity=True),
            Column(name="customer_name", data_type="nvarchar", length=100, is_nullable=False),
            Column(name="email", data_type="nvarchar", length=255),
            Column(name="created_date", data_type="datetime"),
            Column(name="status", data_type="int"),
        ),
    )


@pytest.fixture
def target_schema():
    return Schema(
        name="account",
        origin=SchemaOrigin.PLATFORM_EXPORT,
        columns=(
            Column(name="name", data_type="String", length=160, is_primary_name=True, is_required=True),
            Column(name="emailaddress1", data_type="String", length=100),
            Column(name="createdon", data_type="DateTime"),
            Column(name="statecode", data_type="State"),
        ),
    )


@pytest.fixture
def empty_target_schema():
    return Schema(name="empty", origin=SchemaOrigin.PLATFORM_EXPORT, columns=())
