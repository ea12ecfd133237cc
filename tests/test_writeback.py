import pytest

from playlist_sorter.errors import PartialWriteFailure
from playlist_sorter.models import PLAYLIST_CLEARED
from playlist_sorter.writeback import chunked, write_back


def uris(count):
    return [f"spotify:track:{n}" for n in range(count)]


@pytest.mark.asyncio
async def test_write_back_chunks_into_replace_then_appends(fake_client):
    token = await write_back(fake_client, "token", "pl-1", uris(250))

    assert [(call[0], len(call[2])) for call in fake_client.calls] == [
        ("replace", 100),
        ("append", 100),
        ("append", 50),
    ]
    written = [uri for call in fake_client.calls for uri in call[2]]
    assert written == uris(250)
    assert token == "snapshot-3"


@pytest.mark.asyncio
async def test_write_back_single_batch(fake_client):
    assert await write_back(fake_client, "token", "pl-1", uris(100)) == "snapshot-1"
    assert [call[0] for call in fake_client.calls] == ["replace"]


@pytest.mark.asyncio
async def test_write_back_empty_clears_playlist(fake_client):
    token = await write_back(fake_client, "token", "pl-1", [])

    assert fake_client.calls == [("replace", "pl-1", [])]
    assert token == PLAYLIST_CLEARED


@pytest.mark.asyncio
async def test_first_batch_failure_propagates_unchanged(fake_client):
    fake_client.fail_on_call = 1

    with pytest.raises(RuntimeError):
        await write_back(fake_client, "token", "pl-1", uris(150))
    assert len(fake_client.calls) == 1


@pytest.mark.asyncio
async def test_later_batch_failure_reports_committed_items(fake_client):
    fake_client.fail_on_call = 3

    with pytest.raises(PartialWriteFailure) as excinfo:
        await write_back(fake_client, "token", "pl-1", uris(250))

    assert excinfo.value.committed_items == 200
    assert excinfo.value.total_items == 250
    assert isinstance(excinfo.value.cause, RuntimeError)
    assert len(fake_client.calls) == 3


def test_chunked_keeps_order():
    assert chunked(["a", "b", "c"], 2) == [["a", "b"], ["c"]]
    assert chunked([], 2) == []
