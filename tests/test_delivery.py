import asyncio

import pytest

from uploader_bot.delivery import DeliveryError, deliver
from uploader_bot.storage import FileRecord
from uploader_bot.telegram.client import TransportError


@pytest.mark.parametrize(
    "kind, method",
    [("document", "sendDocument"), ("photo", "sendPhoto")],
)
def test_single_message_kinds_are_not_scheduled(make_ctx, fake_client, kind, method):
    ctx = make_ctx()
    record = FileRecord(key="k", file_id="F", kind=kind, caption="cap")

    async def run_test():
        ids = await deliver(ctx, 9, record)
        return ids, ctx.scheduler.pending

    ids, pending = asyncio.run(run_test())

    assert [m.method for m in fake_client.sent] == [method]
    assert fake_client.sent[0].caption == "cap"
    assert ids == [fake_client.sent[0].message_id]
    assert pending == 0


def test_video_and_warning_are_deleted_after_delay(make_ctx, fake_client):
    ctx = make_ctx(delete_delay=0.01)
    record = FileRecord(key="k", file_id="V", kind="video", caption="cap")

    async def run_test():
        ids = await deliver(ctx, 9, record)
        assert fake_client.deleted == []
        await asyncio.sleep(0.05)
        return ids

    ids = asyncio.run(run_test())

    assert [m.method for m in fake_client.sent] == ["sendVideo", "sendMessage"]
    assert "0.01" in fake_client.sent[1].text
    assert len(ids) == 2
    assert fake_client.deleted == [(9, ids[0]), (9, ids[1])]


def test_video_is_still_deleted_when_warning_fails(make_ctx, fake_client):
    ctx = make_ctx(delete_delay=0.01)
    fake_client.fail_methods.add("sendMessage")
    record = FileRecord(key="k", file_id="V", kind="video", caption="")

    async def run_test():
        with pytest.raises(TransportError):
            await deliver(ctx, 9, record)
        await asyncio.sleep(0.05)

    asyncio.run(run_test())

    video_id = fake_client.sent[0].message_id
    assert fake_client.deleted == [(9, video_id)]


def test_unknown_kind_raises(make_ctx, fake_client):
    ctx = make_ctx()
    record = FileRecord(key="k", file_id="F", kind="sticker", caption="")

    with pytest.raises(DeliveryError):
        asyncio.run(deliver(ctx, 9, record))
    assert fake_client.sent == []
