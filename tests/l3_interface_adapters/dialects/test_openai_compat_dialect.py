"""Tests for the OpenAI-compatible dialect (OpenAI, DeepSeek, GroqCloud)."""

from __future__ import annotations

import json

import pytest

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.errors import MalformedResponseError, ProviderAPIError, UnsupportedProviderError
from moxie_companion.l3_interface_adapters.dialects.openai_compat import OpenAICompatDialect

MESSAGES = [ChatMessage(role='system', content='Be kind'), ChatMessage(role='user', content='Hi')]


class TestBuild:
    @pytest.mark.parametrize(
        ('provider', 'url'),
        [
            ('openai', 'https://api.openai.com/v1/chat/completions'),
            ('deepseek', 'https://api.deepseek.com/v1/chat/completions'),
            ('groq', 'https://api.groq.com/openai/v1/chat/completions'),
        ],
    )
    def test_endpoints(self, provider, url):
        env = OpenAICompatDialect().build(provider, 'm', 0.7, MESSAGES, 'sk-1')
        assert env.url == url

    def test_bearer_auth_and_body(self):
        env = OpenAICompatDialect().build('openai', 'gpt-4o', 0.5, MESSAGES, 'sk-1')
        assert env.headers == {'Content-Type': 'application/json', 'Authorization': 'Bearer sk-1'}
        assert env.body == {
            'model': 'gpt-4o',
            'messages': [{'role': 'system', 'content': 'Be kind'}, {'role': 'user', 'content': 'Hi'}],
            'temperature': 0.5,
            'stream': False,
        }

    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError):
            OpenAICompatDialect().build('anthropic', 'm', 0.7, MESSAGES, 'k')


class TestParse:
    def test_text_and_usage(self):
        body = json.dumps(
            {'choices': [{'message': {'content': 'ok'}}], 'usage': {'prompt_tokens': 12, 'completion_tokens': 7}}
        ).encode()
        result = OpenAICompatDialect().parse(body)
        assert result.text == 'ok'
        assert (result.input_tokens, result.output_tokens) == (12, 7)

    def test_without_usage(self):
        result = OpenAICompatDialect().parse(b'{"choices":[{"message":{"content":"ok"}}]}')
        assert result.text == 'ok'
        assert not result.has_usage

    def test_error_object(self):
        with pytest.raises(ProviderAPIError, match='^API Error: Incorrect API key provided$'):
            OpenAICompatDialect().parse(b'{"error":{"message":"Incorrect API key provided","type":"auth"}}')

    @pytest.mark.parametrize(
        'body',
        [b'not json', b'[]', b'{}', b'{"choices":[]}', b'{"choices":[{"message":{}}]}', b'{"choices":[{"message":{"content":3}}]}'],
    )
    def test_malformed(self, body):
        with pytest.raises(MalformedResponseError, match='^Invalid response format$'):
            OpenAICompatDialect().parse(body)
