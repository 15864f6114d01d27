"""Shared test doubles for suggestion sources and the OpenAI chat client."""

from types import SimpleNamespace

import httpx
import openai

from mapping_engine.suggestions.base import SuggestionSource

FAKE_URL = "https://example.test/openai/deployments/mapper/chat/completions"


class ScriptedSuggestionSource(SuggestionSource):
    """Returns a fixed list of candidates, or raises the configured error."""

    def __init__(self, candidates=None, error=None):
        self.candidates = list(candidates or [])
        self.error = error
        self.calls = []

    def suggest(self, source, target, requested_source_columns=None, cancel_event=None):
        self.calls.append(
            {"source": source, "target": target, "requested": requested_source_columns}
        )
        if self.error is not None:
            raise self.error
        return list(self.candidates)


class FakeChatClient:
    """Stands in for ``openai.OpenAI``; replays queued completions or errors in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_completion(content, prompt_tokens=120, completion_tokens=40):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def make_status_error(status, message="service error"):
    request = httpx.Request("POST", FAKE_URL)
    response = httpx.Response(status, request=request)
    return openai.APIStatusError(message, response=response, body=None)


def make_connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", FAKE_URL))


def make_timeout_error():
    return openai.APITimeoutError(request=httpx.Request("POST", FAKE_URL))


__all__ = [
    "ScriptedSuggestionSource",
    "FakeChatClient",
    "make_completion",
    "make_status_error",
    "make_connection_error",
    "make_timeout_error",
]
