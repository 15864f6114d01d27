"""LLM client construction."""

from mapping_engine.llms.llm import create_llm_client

__all__ = ["create_llm_client"]
