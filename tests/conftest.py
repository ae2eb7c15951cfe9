import asyncio
import itertools
from types import SimpleNamespace

import pytest

from uploader_bot.config import ConfigStore, UploaderConfig
from uploader_bot.context import BotContext
from uploader_bot.intake import ContentIntake
from uploader_bot.membership import MembershipGate
from uploader_bot.scheduler import EphemeralScheduler
from uploader_bot.sessions import AdminSessions
from uploader_bot.storage import FileRepository, LinkRepository, open_database
from uploader_bot.telegram.client import TransportError
from uploader_bot.telegram.types import Message, Update


class FakeTelegram:
    """In-memory stand-in for :class:`TelegramClient` that records every call."""

    def __init__(self) -> None:
        self.sent = []
        self.deleted = []
        self.answered = []
        self.status_queries = []
        self.statuses = {}
        self.fail_methods = set()
        self._ids = itertools.count(1000)

    def _record(self, method, chat_id, **payload):
        if method in self.fail_methods:
            raise TransportError(f"{method} failed")
        message_id = next(self._ids)
        self.sent.append(
            SimpleNamespace(method=method, chat_id=chat_id, message_id=message_id, **payload)
        )
        return message_id

    async def send_message(self, chat_id, text, *, parse_mode=None, reply_markup=None):
        return self._record(
            "sendMessage", chat_id, text=text, parse_mode=parse_mode, reply_markup=reply_markup
        )

    async def send_document(self, chat_id, file_id, caption=""):
        return self._record("sendDocument", chat_id, file_id=file_id, caption=caption)

    async def send_photo(self, chat_id, file_id, caption=""):
        return self._record("sendPhoto", chat_id, file_id=file_id, caption=caption)

    async def send_video(self, chat_id, file_id, caption=""):
        return self._record("sendVideo", chat_id, file_id=file_id, caption=caption)

    async def delete_message(self, chat_id, message_id):
        if "deleteMessage" in self.fail_methods:
            raise TransportError("deleteMessage failed")
        self.deleted.append((chat_id, message_id))

    async def answer_callback_query(self, callback_query_id, text=""):
        if "answerCallbackQuery" in self.fail_methods:
            raise TransportError("answerCallbackQuery failed")
        self.answered.append(callback_query_id)

    async def get_chat_member_status(self, chat, user_id):
        self.status_queries.append(chat)
        status = self.statuses.get(chat, "member")
        if isinstance(status, Exception):
            raise status
        return status

    async def get_me(self):
        return {"username": "TestUploaderBot"}

    async def close(self):
        pass

    def texts(self):
        return [m.text for m in self.sent if m.method == "sendMessage"]


def make_config(**overrides) -> UploaderConfig:
    values = dict(
        api_token="123:token",
        bot_username="TestUploaderBot",
        admin_password="s3cret",
        sponsored_channels=("@chan_one",),
        default_tag="#MyTag",
        delete_delay=30,
        db_path="unused.db",
    )
    values.update(overrides)
    return UploaderConfig(**values)


@pytest.fixture
def fake_client():
    return FakeTelegram()


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def make_ctx(tmp_path, fake_client):
    """Build a :class:`BotContext` over a temp SQLite file and ``fake_client``."""
    conns = []

    def _make(**overrides) -> BotContext:
        cfg = make_config(**overrides)
        conn = open_database(tmp_path / "uploader.db")
        conns.append(conn)
        store = ConfigStore(cfg, tmp_path / "config.toml")
        lock = asyncio.Lock()
        files = FileRepository(conn, lock)
        links = LinkRepository(conn, lock)
        return BotContext(
            client=fake_client,
            config=store,
            sessions=AdminSessions(),
            gate=MembershipGate(store, fake_client),
            files=files,
            intake=ContentIntake(store, files, links),
            scheduler=EphemeralScheduler(fake_client),
        )

    yield _make
    for conn in conns:
        conn.close()


@pytest.fixture
def make_update():
    """Build Bot API updates the way Telegram would send them."""
    counter = itertools.count(1)

    def _make(
        text: str = "",
        *,
        user_id: int | None = 7,
        chat_id: int = 7,
        caption: str = "",
        document: str | None = None,
        video: str | None = None,
        photo: tuple = (),
        callback_data: str | None = None,
    ) -> Update:
        update_id = next(counter)
        message = {
            "message_id": update_id,
            "chat": {"id": chat_id, "type": "private"},
        }
        if user_id is not None:
            message["from"] = {"id": user_id, "is_bot": False, "username": f"user{user_id}"}
        if text:
            message["text"] = text
            if text.startswith("/"):
                token = text.split()[0]
                message["entities"] = [{"type": "bot_command", "offset": 0, "length": len(token)}]
        if caption:
            message["caption"] = caption
        if document:
            message["document"] = {"file_id": document, "file_unique_id": f"u-{document}"}
        if video:
            message["video"] = {"file_id": video, "file_unique_id": f"u-{video}"}
        if photo:
            message["photo"] = [{"file_id": fid, "file_unique_id": f"u-{fid}"} for fid in photo]

        if callback_data is not None:
            raw = {
                "update_id": update_id,
                "callback_query": {
                    "id": f"cb{update_id}",
                    "from": {"id": user_id or 0, "is_bot": False},
                    "data": callback_data,
                    "message": message,
                },
            }
        else:
            raw = {"update_id": update_id, "message": message}
        return Update.from_api(raw)

    return _make


@pytest.fixture
def make_message(make_update):
    def _make(*args, **kwargs) -> Message:
        return make_update(*args, **kwargs).message

    return _make
