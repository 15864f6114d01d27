"""Tests for the LLM-backed suggestion source."""

import json
import threading

import pytest

from mapping_engine.classification import SystemFieldClassifier
from mapping_engine.config import AIConfig
from mapping_engine.exceptions import OperationCancelledError
from mapping_engine.suggestions import LLMSuggestionSource
from mapping_engine.suggestions.prompt import SYSTEM_PROMPT
from tests.fakes import FakeChatClient, make_completion, make_status_error

GOOD_RESPONSE = (
    '[{"source":"customer_name","target":"name","confidence":0.93,"rationale":"Primary name"},'
    '{"source":"created_date","target":"createdon","confidence":0.8,"rationale":"Audit timestamp"}]'
)


def make_source(client, **overrides):
    settings = {
        "endpoint": "https://example.test",
        "api_key": "sk-test-0123456789",
        "deployment": "mapper",
        "retry_count": 2,
        "base_delay_seconds": 0.0,
    }
    settings.update(overrides)
    return LLMSuggestionSource(ai_config=AIConfig(**settings), client=client, enable_tracing=False)


def sent_payload(call):
    """Decode the structured request out of the recorded chat call."""
    content = call["messages"][-1]["content"]
    return json.loads(content[content.index("{"):])


class TestSuggest:
    def test_parses_successful_response(self, source_schema, target_schema):
        client = FakeChatClient([make_completion(GOOD_RESPONSE)])
        candidates = make_source(client).suggest(source_schema, target_schema)

        assert [(c.source_column, c.target_column, c.confidence) for c in candidates] == [
            ("customer_name", "name", 0.93),
            ("created_date", "createdon", 0.8),
        ]
        assert len(client.calls) == 1

    def test_rate_limited_then_success(self, source_schema, target_schema):
        client = FakeChatClient([make_status_error(429), make_completion(GOOD_RESPONSE)])
        candidates = make_source(client).suggest(source_schema, target_schema)

        assert len(client.calls) == 2
        assert len(candidates) == 2

    def test_persistent_server_error_gives_empty_list(self, source_schema, target_schema):
        client = FakeChatClient([make_status_error(503)] * 3)
        assert make_source(client).suggest(source_schema, target_schema) == []
        assert len(client.calls) == 3

    def test_unauthorized_is_not_retried(self, source_schema, target_schema):
        client = FakeChatClient([make_status_error(401), make_completion(GOOD_RESPONSE)])
        assert make_source(client).suggest(source_schema, target_schema) == []
        assert len(client.calls) == 1

    def test_unexpected_client_error_gives_empty_list(self, source_schema, target_schema):
        client = FakeChatClient([RuntimeError("socket closed")])
        assert make_source(client).suggest(source_schema, target_schema) == []

    def test_free_text_response_gives_empty_list(self, source_schema, target_schema):
        client = FakeChatClient([make_completion("Sorry, I cannot map these columns.")])
        assert make_source(client).suggest(source_schema, target_schema) == []

    def test_oversized_confidence_keeps_other_suggestions(self, source_schema, target_schema):
        content = (
            '[{"source":"email","target":"emailaddress1","confidence":' + "9" * 400 + '},'
            '{"source":"customer_name","target":"name","confidence":0.9}]'
        )
        client = FakeChatClient([make_completion(content)])
        candidates = make_source(client).suggest(source_schema, target_schema)

        assert [(c.source_column, c.confidence) for c in candidates] == [
            ("email", 1.0),
            ("customer_name", 0.9),
        ]

    def test_empty_content_gives_empty_list(self, source_schema, target_schema):
        client = FakeChatClient([make_completion(None)])
        assert make_source(client).suggest(source_schema, target_schema) == []

    def test_empty_target_makes_no_request(self, source_schema, empty_target_schema):
        client = FakeChatClient([])
        assert make_source(client).suggest(source_schema, empty_target_schema) == []
        assert client.calls == []

    def test_cancellation_propagates(self, source_schema, target_schema):
        cancel = threading.Event()
        cancel.set()
        client = FakeChatClient([make_completion(GOOD_RESPONSE)])
        with pytest.raises(OperationCancelledError):
            make_source(client).suggest(source_schema, target_schema, cancel_event=cancel)
        assert client.calls == []


class TestRequestShape:
    def test_reasoning_model_sends_single_user_message(self, source_schema, target_schema):
        client = FakeChatClient([make_completion("[]")])
        make_source(client, reasoning_model=True).suggest(source_schema, target_schema)

        call = client.calls[0]
        assert call["model"] == "mapper"
        assert len(call["messages"]) == 1
        assert call["messages"][0]["role"] == "user"
        assert call["messages"][0]["content"].startswith(SYSTEM_PROMPT)
        assert "max_completion_tokens" in call
        assert "temperature" not in call

    def test_standard_model_sends_system_and_user_messages(self, source_schema, target_schema):
        client = FakeChatClient([make_completion("[]")])
        make_source(client, reasoning_model=False, temperature=0.1).suggest(source_schema, target_schema)

        call = client.calls[0]
        assert [m["role"] for m in call["messages"]] == ["system", "user"]
        assert call["messages"][0]["content"] == SYSTEM_PROMPT
        assert call["temperature"] == 0.1
        assert "max_tokens" in call

    def test_payload_splits_custom_and_system_targets(self, source_schema, target_schema):
        classified = SystemFieldClassifier().classify_schema(target_schema)
        client = FakeChatClient([make_completion("[]")])
        make_source(client, reasoning_model=False).suggest(source_schema, classified)

        payload = sent_payload(client.calls[0])
        assert payload["sourceTable"] == "dbo.Customer"
        assert payload["targetTable"] == "account"
        assert [c["name"] for c in payload["customTargetColumns"]] == ["name", "emailaddress1"]
        assert [c["name"] for c in payload["systemTargetColumns"]] == ["createdon", "statecode"]
        assert payload["systemTargetColumns"][0]["systemFieldType"] == "created-on"
        assert payload["customTargetColumns"][0]["systemFieldType"] == "none"
        assert "systemFieldsGuidance" in payload["mappingInstructions"]

    def test_requested_source_columns_filter(self, source_schema, target_schema):
        client = FakeChatClient([make_completion("[]")])
        make_source(client, reasoning_model=False).suggest(
            source_schema, target_schema, requested_source_columns=["EMAIL", "status"]
        )

        payload = sent_payload(client.calls[0])
        assert [c["name"] for c in payload["sourceColumns"]] == ["email", "status"]

    def test_empty_filter_sends_every_source_column(self, source_schema, target_schema):
        client = FakeChatClient([make_completion("[]")])
        make_source(client, reasoning_model=False).suggest(
            source_schema, target_schema, requested_source_columns=[]
        )

        payload = sent_payload(client.calls[0])
        assert len(payload["sourceColumns"]) == len(source_schema)
