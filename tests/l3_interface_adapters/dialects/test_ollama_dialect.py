"""Tests for the Ollama dialect."""

from __future__ import annotations

import json

import pytest

from moxie_companion.l1_entities.chat_message import ChatMessage
from moxie_companion.l1_entities.errors import MalformedResponseError, ProviderAPIError
from moxie_companion.l3_interface_adapters.dialects.ollama import OllamaDialect


class TestBuild:
    def test_default_body(self):
        env = OllamaDialect().build('ollama', 'llama3.2', 0.7, [ChatMessage(role='user', content='Hi')], '')
        assert env.url == 'http://localhost:11434/api/chat'
        assert env.headers == {'Content-Type': 'application/json'}
        assert json.dumps(env.body, separators=(',', ':')) == (
            '{"model":"llama3.2","messages":[{"role":"user","content":"Hi"}],"stream":false,"options":{"temperature":0.7}}'
        )

    def test_custom_host(self):
        assert OllamaDialect('http://robot.local:11434/').url == 'http://robot.local:11434/api/chat'


class TestParse:
    def test_text(self):
        result = OllamaDialect().parse(b'{"message":{"role":"assistant","content":"Hello"},"done":true}')
        assert result.text == 'Hello'
        assert not result.has_usage

    def test_error_string(self):
        with pytest.raises(ProviderAPIError, match='^Ollama Error: model "nope" not found$'):
            OllamaDialect().parse(b'{"error":"model \\"nope\\" not found"}')

    def test_error_object(self):
        with pytest.raises(ProviderAPIError, match='^Ollama Error: boom$'):
            OllamaDialect().parse(b'{"error":{"message":"boom"}}')

    @pytest.mark.parametrize('body', [b'<html>', b'{"done":true}'])
    def test_malformed(self, body):
        with pytest.raises(MalformedResponseError, match='^Invalid response format from Ollama$'):
            OllamaDialect().parse(body)
