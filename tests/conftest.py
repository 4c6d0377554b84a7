"""Shared pytest fixtures for LLM Orchestrator tests."""

import json
from typing import Any, Callable, List

import httpx
import pytest

from llm_orchestrator.models.generation import GenerationConfig, SelectionCriteria


@pytest.fixture(autouse=True)
def no_backoff_sleep(monkeypatch):
    """Skip retry backoff waits; the requested delays are recorded."""
    delays: List[float] = []

    async def fake_sleep(delay, *args, **kwargs):
        delays.append(delay)

    monkeypatch.setattr("llm_orchestrator.reliability.retry.asyncio.sleep", fake_sleep)
    return delays


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {
        "OPENAI_API_KEY": "test-openai-key",
        "ANTHROPIC_API_KEY": "test-anthropic-key",
        "COHERE_API_KEY": "test-cohere-key",
        "GOOGLE_API_KEY": "test-google-key",
        "MISTRAL_API_KEY": "test-mistral-key",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def mock_http():
    """
    Factory for an httpx.AsyncClient backed by httpx.MockTransport.

    Each queued item answers one request: ``(status, json_body)``, an
    exception instance to raise, or a callable taking the request. The
    last item is reused once the queue is drained.

    Returns ``(client, requests)``; ``requests`` records every
    httpx.Request sent.
    """
    def factory(*responses: Any):
        requests: List[httpx.Request] = []
        queue = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            item = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(item, Exception):
                raise item
            if callable(item):
                return item(request)
            status, body = item
            return httpx.Response(status, json=body)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return client, requests

    return factory


@pytest.fixture
def request_json() -> Callable[[httpx.Request], Any]:
    """Decode the JSON body of a recorded request."""
    def decode(request: httpx.Request) -> Any:
        return json.loads(request.content)
    return decode


@pytest.fixture
def sample_config():
    """Sample generation config."""
    return GenerationConfig(temperature=0.2, max_tokens=50)


@pytest.fixture
def hebrew_criteria():
    return SelectionCriteria(complexity=0.5, language="he")


@pytest.fixture
def openai_completion():
    return {
        "id": "chatcmpl-1",
        "model": "gpt-3.5-turbo-0125",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": "Hello there"}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 8, "total_tokens": 20},
    }


@pytest.fixture
def anthropic_message():
    return {
        "id": "msg_1",
        "type": "message",
        "model": "claude-3-sonnet-20240229",
        "content": [{"type": "text", "text": "Shalom"}, {"type": "text", "text": " olam"}],
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 10, "output_tokens": 4},
    }


@pytest.fixture
def cohere_generation():
    return {
        "id": "gen-1",
        "generations": [{"id": "g0", "text": "Cohere says hi", "finish_reason": "COMPLETE"}],
        "meta": {
            "api_version": {"version": "1"},
            "billed_units": {"input_tokens": 6, "output_tokens": 9},
        },
    }


@pytest.fixture
def google_content():
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": "Gemini "}, {"text": "answer"}]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 5, "candidatesTokenCount": 7, "totalTokenCount": 12},
        "modelVersion": "gemini-pro-001",
    }


@pytest.fixture
def mistral_completion():
    return {
        "id": "cmpl-1",
        "model": "mistral-medium",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": "Bonjour"}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 3, "completion_tokens": 11, "total_tokens": 14},
    }
