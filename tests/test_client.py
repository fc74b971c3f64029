"""AsyncGlint entry points."""

import httpx
import pytest

from glint_chat import AsyncGlint, Category, Language, MemoryKeyValueStore


def completion(text):
    return httpx.Response(200, json={"choices": [{"message": {"content": text}}]})


@pytest.mark.asyncio
async def test_entry_points_share_one_store():
    calls = []

    def handler(request):
        calls.append(request)
        return completion("hi from deepseek")

    async with AsyncGlint(
        store=MemoryKeyValueStore(), reply_delay_s=0, transport=httpx.MockTransport(handler),
    ) as client:
        assert client.active_chat_id is None
        assert client.get_credential_status(Category.TEXT) is False
        assert client.set_credential("text", "t-key") is True

        entry = await client.submit("hello there")
        assert entry.payload == "hi from deepseek"
        assert len(calls) == 1

        chat_id = client.active_chat_id
        assert [c.id for c in client.list_chats()] == [chat_id]
        assert len(client.load_chat(chat_id).messages) == 2
        assert client.list_media() == []


@pytest.mark.asyncio
async def test_language_drives_voice_message():
    async with AsyncGlint(store=MemoryKeyValueStore(), reply_delay_s=0) as client:
        client.set_language(Language.ROMAN_URDU)
        client.set_credential("voice", "v-key")
        entry = await client.submit("speak this")
        assert "kaam nahi karta" in entry.payload


@pytest.mark.asyncio
async def test_file_store_round_trip(tmp_path):
    path = tmp_path / "storage.json"
    async with AsyncGlint(store_path=path, reply_delay_s=0) as client:
        chat = client.create_chat()
        await client.submit("hello there")

    async with AsyncGlint(store_path=path, reply_delay_s=0) as reopened:
        history = reopened.load_chat(chat.id)
        assert [m.role.value for m in history.messages] == ["user", "bot"]
        assert reopened.active_chat_id == chat.id
