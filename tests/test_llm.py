from unittest.mock import MagicMock, patch

import pytest

from api_doc_rag.errors import LlmError
from api_doc_rag.llm import LlmClient


def _response(content):
    mock_resp = MagicMock()
    mock_resp.choices = [MagicMock()]
    mock_resp.choices[0].message.content = content
    return mock_resp


class TestLlmClient:
    def test_default_model(self):
        client = LlmClient()
        assert client.model is not None

    def test_custom_model(self):
        client = LlmClient(model="gpt-4o")
        assert client.model == "gpt-4o"

    @patch("api_doc_rag.llm.completion")
    def test_call_returns_content(self, mock_completion):
        mock_completion.return_value = _response("  test response\n")

        client = LlmClient(model="gpt-4o")
        result = client.call(system="You are helpful.", user="Hello")
        assert result == "test response"
        mock_completion.assert_called_once()

    @patch("api_doc_rag.llm.completion")
    def test_call_passes_model_messages_and_timeout(self, mock_completion):
        mock_completion.return_value = _response("ok")

        client = LlmClient(model="groq/llama-3.3-70b-versatile", timeout=5.0)
        client.call(system="sys", user="usr")

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["model"] == "groq/llama-3.3-70b-versatile"
        assert call_kwargs["timeout"] == 5.0
        messages = call_kwargs["messages"]
        assert messages[0]["role"] == "system"
        assert messages[1]["role"] == "user"

    @patch("api_doc_rag.llm.completion")
    def test_provider_error_becomes_llm_error(self, mock_completion):
        mock_completion.side_effect = RuntimeError("connection refused")

        with pytest.raises(LlmError, match="connection refused"):
            LlmClient(model="gpt-4o").call(system="sys", user="usr")

    @patch("api_doc_rag.llm.completion")
    def test_empty_content_is_an_error(self, mock_completion):
        mock_completion.return_value = _response("   ")

        with pytest.raises(LlmError):
            LlmClient(model="gpt-4o").call(system="sys", user="usr")

    @patch("api_doc_rag.llm.completion")
    def test_generate_answer_sends_context_and_question(self, mock_completion):
        mock_completion.return_value = _response("Use POST /tickets")

        answer = LlmClient(model="gpt-4o").generate_answer("create ticket", "[Relevance: 1.00] POST /tickets")

        assert answer == "Use POST /tickets"
        messages = mock_completion.call_args[1]["messages"]
        assert "documented endpoints" in messages[0]["content"]
        assert "POST /tickets" in messages[1]["content"]
        assert "QUESTION: create ticket" in messages[1]["content"]
