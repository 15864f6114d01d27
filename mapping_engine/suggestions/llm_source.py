"""Suggestion source backed by a remote LLM similarity service."""

import json
import logging
import threading
import time
from typing import Any, Iterable, List, Optional, Tuple

from openai import OpenAI

from mapping_engine.config import AIConfig, MLflowConfig, get_config
from mapping_engine.constants import LOG_PREVIEW_MAX_LENGTH, SUGGESTION_SUMMARY_LIMIT
from mapping_engine.exceptions import OperationCancelledError, RetryExhaustedError
from mapping_engine.llms.llm import create_llm_client
from mapping_engine.models.mapping import CandidatePairing
from mapping_engine.models.schema import Schema
from mapping_engine.suggestions.base import SuggestionSource
from mapping_engine.suggestions.parsing import parse_suggestions
from mapping_engine.suggestions.prompt import build_chat_request, build_request_payload
from mapping_engine.utils.mlflow import setup_mlflow_tracing
from mapping_engine.utils.retry import call_with_retry, get_status_code
from mapping_engine.utils.sanitize import sanitize_for_logging

logger = logging.getLogger(__name__)


class LLMSuggestionSource(SuggestionSource):
    """Asks an OpenAI-compatible chat deployment for column pairings.

    One request per call, at most one in flight. Transient failures are retried
    with exponential backoff; every other failure, and a response without a
    usable JSON array, degrades to an empty list. Only cancellation propagates.
    """

    def __init__(
        self,
        ai_config: Optional[AIConfig] = None,
        client: Optional[OpenAI] = None,
        enable_tracing: Optional[bool] = None,
        mlflow_config: Optional[MLflowConfig] = None,
    ):
        """
        Initialize the LLM suggestion source

        Args:
            ai_config: AI settings (if None, uses global config)
            client: OpenAI SDK client (if None, one is built from ``ai_config``)
            enable_tracing: Whether to enable MLflow tracing (if None, follows MLflow config)
            mlflow_config: MLflow settings (if None, uses global config)
        """
        config = get_config()
        self.ai_config = ai_config or config.ai
        self.mlflow_config = mlflow_config or config.mlflow

        self.tracing_enabled = setup_mlflow_tracing(
            mlflow_config=self.mlflow_config, enabled=enable_tracing
        )

        self.client = client if client is not None else create_llm_client(self.ai_config)
        self.deployment = self.ai_config.deployment_name or ""

    def suggest(
        self,
        source: Schema,
        target: Schema,
        requested_source_columns: Optional[Iterable[str]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[CandidatePairing]:
        if len(target) == 0:
            return []

        requested = {name.casefold() for name in (requested_source_columns or []) if name}
        payload = build_request_payload(source, target, requested)
        user_json = json.dumps(payload)
        request = build_chat_request(
            deployment=self.deployment,
            user_json=user_json,
            reasoning_model=self.ai_config.reasoning_model,
            temperature=self.ai_config.temperature,
        )

        self._log_request(source, target, requested, user_json)

        started_at = time.monotonic()
        try:
            completion = call_with_retry(
                lambda: self.client.chat.completions.create(**request),
                retry_count=self.ai_config.retry_count,
                base_delay=self.ai_config.base_delay_seconds,
                cancel_event=cancel_event,
                description="AI mapping request",
            )
        except OperationCancelledError:
            raise
        except RetryExhaustedError as e:
            logger.info(f"AI invoke failed after {e.attempts} attempts (no response)")
            return []
        except Exception as e:
            status = get_status_code(e)
            logger.warning(
                f"AI request failed{f' with status {status}' if status is not None else ''}, "
                f"not retrying: {e}"
            )
            return []

        content, prompt_tokens, completion_tokens = self._read_completion(completion)
        if content is None or not content.strip():
            logger.info("AI returned no content")
            return []

        if self.ai_config.log_raw:
            logger.info(f"AI response raw: {content}")
        elif self.ai_config.log_request:
            logger.info(f"AI response raw: {sanitize_for_logging(content, LOG_PREVIEW_MAX_LENGTH)}")

        elapsed_ms = (time.monotonic() - started_at) * 1000
        logger.info(
            f"AI invoke success in {elapsed_ms:.0f} ms; "
            f"promptTokens={prompt_tokens} completionTokens={completion_tokens}"
        )

        suggestions = parse_suggestions(content)

        if self.ai_config.log_request:
            summary = [
                f"{s.source_column}->{s.target_column}({s.confidence:.2f})"
                for s in suggestions[:SUGGESTION_SUMMARY_LIMIT]
            ]
            logger.info(
                f"AI parsed {len(suggestions)} suggestions (showing {len(summary)}): {', '.join(summary)}"
            )

        return suggestions

    def _log_request(self, source: Schema, target: Schema, requested: set, user_json: str) -> None:
        if self.ai_config.log_request:
            logger.info(
                f"AI request prepared deployment={self.deployment} "
                f"reasoning={self.ai_config.reasoning_model} temperature={self.ai_config.temperature} "
                f"retryCount={self.ai_config.retry_count} sourceCols={len(source)} "
                f"targetCols={len(target)} requestedFilter={len(requested)} "
                f"payloadBytes={len(user_json.encode('utf-8'))} "
                f"payloadPreview={sanitize_for_logging(user_json, LOG_PREVIEW_MAX_LENGTH)}"
            )
        else:
            logger.info(
                f"AI invoke start: deployment={self.deployment} "
                f"reasoning={self.ai_config.reasoning_model} sourceCols={len(source)} "
                f"targetCols={len(target)} requestedFilter={len(requested)}"
            )

    @staticmethod
    def _read_completion(completion: Any) -> Tuple[Optional[str], Optional[int], Optional[int]]:
        """Pull message content and token usage out of a chat completion."""
        choices = getattr(completion, "choices", None) or []
        if not choices:
            return None, None, None

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)

        usage = getattr(completion, "usage", None)
        prompt_tokens = getattr(usage, "prompt_tokens", None)
        completion_tokens = getattr(usage, "completion_tokens", None)
        return content, prompt_tokens, completion_tokens
