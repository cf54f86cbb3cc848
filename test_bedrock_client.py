"""Tests for the Bedrock text-generation client using a stubbed runtime."""

import asyncio

import pytest
from botocore.exceptions import ClientError

from claim_predictor.utils.bedrock_client import BedrockClient
from claim_predictor.utils.config import Config
from claim_predictor.utils.errors import BedrockAPIError, ErrorType


def _client_error(code, message="boom"):
    return ClientError({"Error": {"Code": code, "Message": message}}, "Converse")


def _reply(*texts):
    return {
        "output": {"message": {"role": "assistant", "content": [{"text": t} for t in texts]}},
        "stopReason": "end_turn",
        "usage": {"inputTokens": 10, "outputTokens": 5},
    }


class StubRuntime:
    """Stands in for a boto3 bedrock-runtime client."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def converse(self, **params):
        self.requests.append(params)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def no_backoff(monkeypatch):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return delays


@pytest.mark.asyncio
async def test_generate_text_builds_converse_request():
    runtime = StubRuntime(_reply("The carrier will", "likely approve."))
    client = BedrockClient(runtime=runtime)

    text = await client.generate_text(
        system_prompt="Be concise.",
        user_prompt="Summarize.",
        model_id="amazon.nova-lite-v1:0",
        temperature=0.3,
        max_tokens=200,
    )

    assert text == "The carrier will\nlikely approve."
    request = runtime.requests[0]
    assert request["modelId"] == "amazon.nova-lite-v1:0"
    assert request["system"] == [{"text": "Be concise."}]
    assert request["messages"] == [{"role": "user", "content": [{"text": "Summarize."}]}]
    assert request["inferenceConfig"] == {"temperature": 0.3, "maxTokens": 200}


@pytest.mark.asyncio
async def test_client_error_is_mapped_without_retry(no_backoff):
    runtime = StubRuntime(_client_error("ThrottlingException"))
    client = BedrockClient(runtime=runtime, max_retries=1)

    with pytest.raises(BedrockAPIError) as excinfo:
        await client.generate_text("sys", "user", "model")

    assert excinfo.value.context.error_type is ErrorType.BEDROCK_RATE_LIMIT
    assert len(runtime.requests) == 1
    assert no_backoff == []


@pytest.mark.asyncio
async def test_retryable_errors_back_off_then_succeed(no_backoff):
    runtime = StubRuntime(
        _client_error("ThrottlingException"),
        _client_error("ServiceUnavailableException"),
        _reply("ok"),
    )
    client = BedrockClient(runtime=runtime, max_retries=3)

    assert await client.generate_text("sys", "user", "model") == "ok"
    assert no_backoff == [1, 2]


@pytest.mark.asyncio
async def test_non_retryable_error_stops_immediately(no_backoff):
    runtime = StubRuntime(_client_error("AccessDeniedException"), _reply("unused"))
    client = BedrockClient(runtime=runtime, max_retries=3)

    with pytest.raises(BedrockAPIError) as excinfo:
        await client.generate_text("sys", "user", "model")

    assert excinfo.value.context.error_type is ErrorType.BEDROCK_AUTH_ERROR
    assert len(runtime.requests) == 1


@pytest.mark.asyncio
async def test_unexpected_error_is_wrapped():
    client = BedrockClient(runtime=StubRuntime(OSError("socket closed")))

    with pytest.raises(BedrockAPIError) as excinfo:
        await client.generate_text("sys", "user", "model")

    assert excinfo.value.context.error_type is ErrorType.BEDROCK_SERVICE_ERROR
    assert isinstance(excinfo.value.__cause__, OSError)


def test_extract_text_ignores_non_text_blocks():
    response = {"output": {"message": {"content": [{"toolUse": {}}, {"text": "only this"}, {"text": ""}]}}}
    assert BedrockClient._extract_text(response) == "only this"
    assert BedrockClient._extract_text({}) == ""


def test_from_config_copies_settings():
    config = Config.default()
    config.aws_region = "us-west-2"
    config.bedrock.timeout = 3.0
    config.bedrock.max_retries = 2

    client = BedrockClient.from_config(config)

    assert client.region == "us-west-2"
    assert client.timeout == 3.0
    assert client.max_retries == 2
    assert client.attempt_timeout == 1.5


@pytest.mark.parametrize("max_retries, attempt_timeout", [(1, 9.0), (3, 3.0), (0, 9.0)])
def test_attempts_share_the_call_budget(max_retries, attempt_timeout):
    client = BedrockClient(runtime=StubRuntime(), timeout=9.0, max_retries=max_retries)
    assert client.attempt_timeout == attempt_timeout
