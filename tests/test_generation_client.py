import pytest

from conftest import FakeAPIError
from services.generation_client import (
    AuthenticationFailed,
    ErrorKind,
    LangChainTextGenerator,
    RateLimitExceeded,
    RetryPolicy,
    UnknownGenerationError,
    classify_error,
)


@pytest.mark.parametrize(
    "error, kind",
    [
        (FakeAPIError("slow down", status_code=429), ErrorKind.RATE_LIMIT),
        (Exception("Error 429 from upstream"), ErrorKind.RATE_LIMIT),
        (Exception("RESOURCE_EXHAUSTED: quota"), ErrorKind.RATE_LIMIT),
        (Exception("Too Many Requests"), ErrorKind.RATE_LIMIT),
        (FakeAPIError("nope", status_code=403), ErrorKind.AUTHENTICATION),
        (FakeAPIError("nope", status_code=401), ErrorKind.AUTHENTICATION),
        (Exception("Invalid API key provided"), ErrorKind.AUTHENTICATION),
        (Exception("Permission denied"), ErrorKind.AUTHENTICATION),
        (Exception("connection reset"), ErrorKind.UNKNOWN),
        (Exception("request 14291 failed"), ErrorKind.UNKNOWN),
        (FakeAPIError("order 4290 rejected", status_code=500), ErrorKind.UNKNOWN),
        (FakeAPIError("server error", status_code=500), ErrorKind.UNKNOWN),
    ],
)
def test_classify_error(error, kind):
    assert classify_error(error) is kind


def test_rate_limit_wins_over_auth():
    assert classify_error(FakeAPIError("api key rate limit", status_code=403)) is ErrorKind.RATE_LIMIT


def test_backoff_doubles():
    policy = RetryPolicy(max_attempts=3, base_delay=2.0)

    assert [policy.delay_for(n) for n in range(3)] == [2.0, 4.0, 8.0]


def test_policy_rejects_zero_attempts():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


@pytest.mark.asyncio
async def test_success_on_first_attempt(make_client, sleeper):
    client, generator = make_client(["hello"])

    assert await client.generate("prompt") == "hello"
    assert generator.calls == 1
    assert sleeper.delays == []


@pytest.mark.asyncio
async def test_retries_rate_limits_then_succeeds(make_client, sleeper):
    client, generator = make_client([
        FakeAPIError("rate limited", status_code=429),
        FakeAPIError("rate limited", status_code=429),
        "finally",
    ])

    assert await client.generate("prompt") == "finally"
    assert generator.calls == 3
    assert sleeper.delays == [2.0, 4.0]


@pytest.mark.asyncio
async def test_exhausted_rate_limit(make_client, sleeper):
    client, generator = make_client([Exception("429 Too Many Requests")] * 3, base_delay=1.0)

    with pytest.raises(RateLimitExceeded) as excinfo:
        await client.generate("prompt")

    assert generator.calls == 3
    assert sleeper.delays == [1.0, 2.0]
    assert excinfo.value.attempts == 3
    assert "try again in a few minutes" in str(excinfo.value)


@pytest.mark.asyncio
async def test_auth_error_is_not_retried(make_client, sleeper):
    client, generator = make_client([FakeAPIError("Forbidden", status_code=403)], api_key_configured=False)

    with pytest.raises(AuthenticationFailed) as excinfo:
        await client.generate("prompt")

    assert generator.calls == 1
    assert sleeper.delays == []
    assert excinfo.value.api_key_configured is False
    assert "no API key is configured" in str(excinfo.value)


@pytest.mark.asyncio
async def test_unknown_error_wraps_message(make_client):
    client, generator = make_client([RuntimeError("socket closed"), "unused"])

    with pytest.raises(UnknownGenerationError) as excinfo:
        await client.generate("prompt")

    assert generator.calls == 1
    assert excinfo.value.original_message == "socket closed"
    assert "socket closed" in str(excinfo.value)


@pytest.mark.asyncio
async def test_single_attempt_policy_fails_without_sleeping(make_client, sleeper):
    client, generator = make_client([FakeAPIError("slow", status_code=429)], max_attempts=1)

    with pytest.raises(RateLimitExceeded):
        await client.generate("prompt")

    assert generator.calls == 1
    assert sleeper.delays == []


class _Message:
    def __init__(self, content):
        self.content = content


class _FakeChatModel:
    def __init__(self, content):
        self.content = content
        self.inputs = []

    async def ainvoke(self, prompt):
        self.inputs.append(prompt)
        return _Message(self.content)


@pytest.mark.asyncio
async def test_langchain_generator_flattens_content_parts():
    model = _FakeChatModel([{"type": "text", "text": "Hello "}, {"type": "text", "text": "there"}])

    result = await LangChainTextGenerator(model).generate("prompt")

    assert result.text == "Hello there"
    assert model.inputs == ["prompt"]
