"""Tests for the content assistant."""

import json

import httpx
import pytest

from minicms.config import Settings
from minicms.exceptions import GenerationFailedError
from minicms.services.assistant import ContentAssistant


def make_settings(**overrides) -> Settings:
    values = {"openai_api_key": "sk-test", "openai_base_url": "https://api.test/v1"}
    values.update(overrides)
    return Settings(**values)


def make_assistant(handler, **overrides) -> ContentAssistant:
    return ContentAssistant(make_settings(**overrides), transport=httpx.MockTransport(handler))


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
async def test_generate_returns_content():
    """Test the request sent upstream and the stripped reply."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion("  A fine post.\n"))

    result = await make_assistant(handler).generate("Gardening")

    assert result == "A fine post."
    assert seen["url"] == "https://api.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "gpt-4o-mini"
    assert seen["body"]["messages"] == [
        {"role": "user", "content": "Generate engaging 200-word blog post on Gardening"}
    ]


@pytest.mark.asyncio
async def test_missing_api_key():
    def handler(request):
        raise AssertionError("should not be called")

    with pytest.raises(GenerationFailedError, match="not configured"):
        await make_assistant(handler, openai_api_key=None).generate("Gardening")


@pytest.mark.asyncio
async def test_upstream_error_status():
    def handler(request):
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(GenerationFailedError, match="Failed to contact OpenAI"):
        await make_assistant(handler).generate("Gardening")


@pytest.mark.asyncio
async def test_transport_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GenerationFailedError, match="connection refused"):
        await make_assistant(handler).generate("Gardening")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [completion(""), completion(None), {"choices": []}, {}])
async def test_empty_upstream_response(body):
    def handler(request):
        return httpx.Response(200, json=body)

    with pytest.raises(GenerationFailedError, match="no content"):
        await make_assistant(handler).generate("Gardening")


class TestTlsVerification:
    """Tests for TLS verification settings."""

    def test_default_verifies(self):
        assert ContentAssistant(make_settings())._verify() is True

    def test_ca_bundle(self, tmp_path):
        bundle = tmp_path / "ca.pem"
        bundle.write_text("cert")
        assistant = ContentAssistant(make_settings(openai_ca_bundle=str(bundle)))
        assert assistant._verify() == str(bundle)

    def test_missing_ca_bundle_falls_back(self, tmp_path):
        assistant = ContentAssistant(make_settings(openai_ca_bundle=str(tmp_path / "nope.pem")))
        assert assistant._verify() is True

    def test_verification_disabled(self):
        assistant = ContentAssistant(make_settings(openai_disable_ssl_verify=True))
        assert assistant._verify() is False
