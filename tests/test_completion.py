"""Unit tests for completion service error classification"""

from types import SimpleNamespace

import httpx
import openai
import pytest

from lovejourney.core.exceptions import CompletionError, CompletionQuotaExceededError
from lovejourney.services.completion import CompletionClient

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
MESSAGES = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]


def make_client(create):
    client = CompletionClient(
        api_key="test-key", model="gpt-4o-mini", temperature=0.7, max_tokens=1000, timeout=5
    )
    client._client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create))
    )
    return client


def reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def raising(exc):
    def create(**kwargs):
        raise exc
    return create


def status_error(cls, status_code, code):
    return cls(
        "error",
        response=httpx.Response(status_code, request=REQUEST),
        body={"code": code, "message": "error"},
    )


def test_complete_returns_stripped_text_and_sends_settings():
    seen = {}

    def create(**kwargs):
        seen.update(kwargs)
        return reply("  Keywords: trust  \n")

    client = make_client(create)

    assert client.complete(MESSAGES) == "Keywords: trust"
    assert seen["model"] == "gpt-4o-mini"
    assert seen["temperature"] == 0.7
    assert seen["max_tokens"] == 1000
    assert seen["messages"] == MESSAGES


def test_insufficient_quota_is_classified_as_quota():
    client = make_client(raising(status_error(openai.RateLimitError, 429, "insufficient_quota")))

    with pytest.raises(CompletionQuotaExceededError):
        client.complete(MESSAGES)


def test_quota_code_on_other_status_is_classified_as_quota():
    client = make_client(raising(status_error(openai.PermissionDeniedError, 403, "insufficient_quota")))

    with pytest.raises(CompletionQuotaExceededError):
        client.complete(MESSAGES)


@pytest.mark.parametrize(
    "exc",
    [
        status_error(openai.InternalServerError, 500, None),
        status_error(openai.AuthenticationError, 401, "invalid_api_key"),
        openai.APITimeoutError(request=REQUEST),
        openai.APIConnectionError(request=REQUEST),
        openai.APIResponseValidationError(response=httpx.Response(200, request=REQUEST), body=None),
    ],
)
def test_other_failures_are_generic(exc):
    client = make_client(raising(exc))

    with pytest.raises(CompletionError) as exc_info:
        client.complete(MESSAGES)
    assert not isinstance(exc_info.value, CompletionQuotaExceededError)


@pytest.mark.parametrize("response", [reply(None), reply("   "), SimpleNamespace(choices=[])])
def test_empty_or_malformed_response_is_generic_failure(response):
    client = make_client(lambda **kwargs: response)

    with pytest.raises(CompletionError):
        client.complete(MESSAGES)
