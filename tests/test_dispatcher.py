import asyncio

import pytest

from uploader_bot import texts
from uploader_bot.dispatcher import Dispatcher, EventKind, classify
from uploader_bot.event_hooks import media_hook
from uploader_bot.telegram.client import TransportError


def test_classification_order(make_update):
    assert classify(make_update(callback_data="guide_upload", text="/start")) is EventKind.CALLBACK
    assert classify(make_update("/start", document="D")) is EventKind.COMMAND
    assert classify(make_update(video="V")) is EventKind.MEDIA
    assert classify(make_update("just chatting")) is EventKind.OTHER
    assert classify(make_update("not /start")) is EventKind.OTHER


def test_extract_media_prefers_document_then_video_then_largest_photo(make_message):
    assert media_hook.extract_media(make_message(document="D", video="V")) == ("D", "document")
    assert media_hook.extract_media(make_message(video="V", photo=("p1",))) == ("V", "video")
    assert media_hook.extract_media(make_message(photo=("small", "big"))) == ("big", "photo")
    assert media_hook.extract_media(make_message("text")) is None


def test_guide_callbacks_are_answered_and_explained(make_ctx, make_update, fake_client):
    dispatcher = Dispatcher(make_ctx())

    async def run_test():
        await dispatcher.dispatch(make_update(callback_data="guide_upload"))
        await dispatcher.dispatch(make_update(callback_data="guide_link"))
        await dispatcher.dispatch(make_update(callback_data="something_else"))

    asyncio.run(run_test())

    assert len(fake_client.answered) == 3
    assert fake_client.texts() == [texts.GUIDE_UPLOAD, texts.GUIDE_GET_LINK]
    assert {m.parse_mode for m in fake_client.sent} == {"Markdown"}


def test_admin_upload_issues_link_and_prompt(make_ctx, make_update, fake_client):
    ctx = make_ctx()
    dispatcher = Dispatcher(ctx)

    async def run_test():
        await ctx.sessions.set_authenticated(7, True)
        await dispatcher.dispatch(make_update(video="VID", caption="clip by @spammer"))

    asyncio.run(run_test())

    link_text, prompt = fake_client.texts()
    url = link_text.splitlines()[-1]
    key = url.rsplit("=", 1)[-1]
    assert url == f"https://t.me/TestUploaderBot?start={key}"
    assert "clip by #MyTag" in prompt
    assert f"/setcaption {key}" in prompt

    record = asyncio.run(ctx.files.get(key))
    assert (record.file_id, record.kind) == ("VID", "video")


def test_upload_from_non_admin_is_ignored(make_ctx, make_update, fake_client):
    ctx = make_ctx()
    asyncio.run(Dispatcher(ctx).dispatch(make_update(document="DOC")))

    assert fake_client.sent == []
    rows = ctx.files.conn.execute("SELECT COUNT(*) FROM files").fetchone()[0]
    assert rows == 0


def test_handler_error_is_logged_and_loop_continues(make_ctx, make_update, fake_client, monkeypatch, caplog):
    ctx = make_ctx()
    dispatcher = Dispatcher(ctx)
    calls = []

    async def flaky(ctx, query):
        calls.append(query.data)
        if len(calls) == 1:
            raise RuntimeError("boom")

    monkeypatch.setattr("uploader_bot.event_hooks.callback_hook.handle", flaky)

    async def feed():
        yield make_update(callback_data="first")
        yield make_update(callback_data="second")

    async def run_test():
        stop = asyncio.Event()
        with pytest.raises(TransportError):
            await dispatcher.run(stop, feed())

    with caplog.at_level("ERROR"):
        asyncio.run(run_test())

    assert calls == ["first", "second"]
    assert "boom" in caplog.text


def test_run_stops_between_updates(make_ctx, make_update, fake_client):
    dispatcher = Dispatcher(make_ctx())
    stop = asyncio.Event()
    closed = []

    async def endless():
        try:
            yield make_update("/help")
            stop.set()
            yield make_update("/help")
            await asyncio.Event().wait()
        finally:
            closed.append(True)

    async def run_test():
        await asyncio.wait_for(dispatcher.run(stop, endless()), timeout=2)

    asyncio.run(run_test())

    assert len(fake_client.texts()) == 2
    assert closed == [True]


def test_stop_interrupts_a_pending_poll(make_ctx, fake_client):
    dispatcher = Dispatcher(make_ctx())
    stop = asyncio.Event()

    async def silent():
        await asyncio.Event().wait()
        yield  # pragma: no cover

    async def run_test():
        runner = asyncio.create_task(dispatcher.run(stop, silent()))
        await asyncio.sleep(0.01)
        stop.set()
        await asyncio.wait_for(runner, timeout=2)

    asyncio.run(run_test())
    assert fake_client.sent == []


def test_stream_end_is_fatal(make_ctx, make_update):
    dispatcher = Dispatcher(make_ctx())

    async def one():
        yield make_update("hello")

    with pytest.raises(TransportError, match="closed"):
        asyncio.run(dispatcher.run(asyncio.Event(), one()))


def test_failed_callback_answer_is_logged_and_guide_still_sent(
    make_ctx, make_update, fake_client, caplog
):
    fake_client.fail_methods.add("answerCallbackQuery")
    update = make_update(callback_data="guide_link")

    with caplog.at_level("ERROR"):
        asyncio.run(Dispatcher(make_ctx()).dispatch(update))

    assert f"answer callback {update.callback_query.id} failed" in caplog.text
    assert fake_client.texts() == [texts.GUIDE_GET_LINK]
