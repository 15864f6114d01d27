"""LLM client selection and configuration based on config."""

import logging
from typing import Optional

from openai import AzureOpenAI, OpenAI

from mapping_engine.config import AIConfig, get_config
from mapping_engine.exceptions import ConfigurationError
from mapping_engine.utils.sanitize import mask_key

logger = logging.getLogger(__name__)


def create_llm_client(ai_config: Optional[AIConfig] = None) -> OpenAI:
    """
    Create an OpenAI SDK client for the configured provider.

    SDK-level retries are disabled; the suggestion source runs its own bounded
    retry loop.

    Args:
        ai_config: AI settings (defaults to the global config)

    Returns:
        Configured ``AzureOpenAI`` or ``OpenAI`` client

    Raises:
        ConfigurationError: If endpoint, key or deployment is missing, or the provider is unknown
    """
    ai_config = ai_config or get_config().ai

    if not ai_config.endpoint or not ai_config.api_key:
        raise ConfigurationError("AI endpoint and API key must both be configured")
    if not ai_config.deployment_name:
        raise ConfigurationError("AI deployment (or model) must be configured")

    provider = ai_config.provider.lower()

    if provider == "azure":
        client = AzureOpenAI(
            azure_endpoint=ai_config.endpoint,
            api_key=ai_config.api_key,
            api_version=ai_config.api_version,
            timeout=ai_config.timeout,
            max_retries=0,
        )
    elif provider == "openai":
        client = OpenAI(
            base_url=ai_config.endpoint,
            api_key=ai_config.api_key,
            timeout=ai_config.timeout,
            max_retries=0,
        )
    else:
        raise ConfigurationError(
            f"Unknown LLM provider: {provider}. Available: azure, openai"
        )

    logger.info(
        f"LLM client configured provider={provider} endpoint={ai_config.endpoint} "
        f"deployment={ai_config.deployment_name} apiVersion={ai_config.api_version} "
        f"reasoning={ai_config.reasoning_model} apiKey={mask_key(ai_config.api_key)}"
    )
    return client
