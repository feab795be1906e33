from types import SimpleNamespace
from unittest.mock import MagicMock

from config.settings import Config
from summary_chief.ai_agent.llm_client import LLMClient


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def client_returning(*contents):
    openai_client = MagicMock()
    openai_client.chat.completions.create.side_effect = [completion(c) for c in contents]
    return LLMClient(model_name="gpt-4o-mini", client=openai_client), openai_client


def test_complete_sends_system_and_user_messages():
    llm, openai_client = client_returning('  {"ok": true}  ')

    result = llm.complete("system text", "user text", temperature=0.1, max_tokens=200)

    assert result == '{"ok": true}'
    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]
    assert kwargs["temperature"] == 0.1
    assert kwargs["max_tokens"] == 200


def test_complete_without_system_prompt():
    llm, openai_client = client_returning(None)

    assert llm.complete(None, "hello") == ""
    assert openai_client.chat.completions.create.call_args.kwargs["messages"] == [
        {"role": "user", "content": "hello"},
    ]


def test_meeting_summary_from_json():
    llm, _ = client_returning(
        'Here you go: {"summary": "Planned Q3", "keyPoints": ["budget"], '
        '"actionItems": ["send deck"], "nextSteps": "follow up"}')

    summary = llm.generate_meeting_summary({"summary": "Planning", "start": {"dateTime": "2024-01-02T09:00:00Z"}},
                                           "notes")

    assert summary.summary == "Planned Q3"
    assert summary.key_points == ["budget"]
    assert summary.action_items == ["send deck"]
    assert summary.next_steps == ["follow up"]


def test_meeting_summary_falls_back_on_unusable_output():
    llm, _ = client_returning("I could not summarize that.")

    summary = llm.generate_meeting_summary({"summary": "Planning"}, "notes")

    assert summary.summary == "Summary unavailable for Planning."
    assert summary.key_points == []


def test_meeting_summary_falls_back_when_the_call_fails():
    openai_client = MagicMock()
    openai_client.chat.completions.create.side_effect = RuntimeError("timeout")
    llm = LLMClient(client=openai_client)

    summary = llm.generate_meeting_summary({"summary": "Retro"}, "notes")

    assert summary.summary == "Summary unavailable for Retro."


def test_client_uses_the_config_it_is_given():
    class TunedConfig(Config):
        OPENAI_MODEL = "gpt-4o"
        PARSE_TEMPERATURE = 0.5
        PARSE_MAX_TOKENS = 64

    openai_client = MagicMock()
    openai_client.chat.completions.create.return_value = completion("ok")
    llm = LLMClient(client=openai_client, config=TunedConfig())

    llm.complete(None, "user text")

    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert llm.model_name == "gpt-4o"
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["temperature"] == 0.5
    assert kwargs["max_tokens"] == 64
