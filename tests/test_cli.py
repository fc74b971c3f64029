"""CLI commands against a temporary store file."""

import json

import pytest
from click.testing import CliRunner

from glint_chat.cli.main import main
from glint_chat.client import AsyncGlint
from glint_chat.conversations import ConversationStore
from glint_chat.keystore import KeyStore
from glint_chat.session import ChatSession
from glint_chat.storage import JsonFileKeyValueStore


@pytest.fixture
def store_file(tmp_path):
    return tmp_path / "storage.json"


def invoke(store_file, *args, input=None):
    runner = CliRunner()
    return runner.invoke(main, ["--store", str(store_file), "--reply-delay", "0", *args], input=input)


def test_keys_set_status_clear(store_file):
    result = invoke(store_file, "keys", "set", "text", "--key", "sk-abc")
    assert result.exit_code == 0, result.output
    assert "saved" in result.output
    assert KeyStore(JsonFileKeyValueStore(store_file)).get_credential("text") == "sk-abc"

    status = invoke(store_file, "keys", "status")
    assert "Text API: 🟢 Configured" in status.output
    assert "Image API: 🔴 Not Configured" in status.output

    invoke(store_file, "keys", "clear", "text")
    assert KeyStore(JsonFileKeyValueStore(store_file)).get_credential("text") is None


def test_keys_set_rejects_unknown_category(store_file):
    result = invoke(store_file, "keys", "set", "video", "--key", "x")
    assert result.exit_code != 0


def test_lang(store_file):
    assert invoke(store_file, "lang").output.strip() == "roman-urdu"
    assert invoke(store_file, "lang", "urdu").exit_code == 0
    assert invoke(store_file, "lang").output.strip() == "urdu"


def test_send_json_uses_demo_reply(store_file):
    invoke(store_file, "lang", "english")
    result = invoke(store_file, "send", "hello there", "--json")
    assert result.exit_code == 0, result.output
    entry = json.loads(result.output.strip().splitlines()[-1])
    assert entry["role"] == "bot"
    assert entry["payload"].startswith("I have received your message!")

    conversations = ConversationStore(JsonFileKeyValueStore(store_file))
    chat = conversations.list_chats()[0]
    assert len(conversations.load_chat(chat.id).messages) == 2


def test_chats_new_list_rename_show(store_file):
    assert invoke(store_file, "chats", "new").exit_code == 0
    chat = ConversationStore(JsonFileKeyValueStore(store_file)).list_chats()[0]

    assert chat.id in invoke(store_file, "chats", "list").output
    assert invoke(store_file, "chats", "rename", chat.id, "Work").exit_code == 0
    assert ConversationStore(JsonFileKeyValueStore(store_file)).resolve_chat_name(chat.id) == "Work"
    assert invoke(store_file, "chats", "rename", "chat-missing", "x").exit_code == 1

    shown = json.loads(invoke(store_file, "chats", "show", chat.id).output)
    assert shown["chat_id"] == chat.id
    assert shown["messages"] == []


def test_media_attach_and_list(store_file, tmp_path):
    recording = tmp_path / "note.wav"
    recording.write_bytes(b"RIFF0000WAVE")
    result = invoke(store_file, "media", "attach", str(recording))
    assert result.exit_code == 0, result.output

    conversations = ConversationStore(JsonFileKeyValueStore(store_file))
    chat = conversations.list_chats()[0]
    assets = conversations.list_media(chat.id)
    assert len(assets) == 1
    assert assets[0].kind.value == "voice"
    assert "note.wav" in invoke(store_file, "media", "list", chat.id).output


def test_chat_repl_exits(store_file):
    result = invoke(store_file, "chat", input="hello there\n/quit\n")
    assert result.exit_code == 0, result.output
    assert "Glint:" in result.output


@pytest.fixture
def close_calls(monkeypatch):
    calls = []
    original = AsyncGlint.close

    async def close(self):
        calls.append(self)
        await original(self)

    monkeypatch.setattr(AsyncGlint, "close", close)
    return calls


def test_send_closes_client_when_submit_fails(store_file, close_calls, monkeypatch):
    async def fail(self, text):
        raise RuntimeError("submit failed")

    monkeypatch.setattr(AsyncGlint, "submit", fail)
    result = invoke(store_file, "send", "hello there")
    assert isinstance(result.exception, RuntimeError)
    assert len(close_calls) == 1


def test_media_attach_closes_client_when_save_fails(store_file, tmp_path, close_calls, monkeypatch):
    async def fail(self, *args, **kwargs):
        raise RuntimeError("encode failed")

    monkeypatch.setattr(ChatSession, "attach_bytes", fail)
    photo = tmp_path / "cat.png"
    photo.write_bytes(b"\x89PNG")
    result = invoke(store_file, "media", "attach", str(photo))
    assert isinstance(result.exception, RuntimeError)
    assert len(close_calls) == 1
