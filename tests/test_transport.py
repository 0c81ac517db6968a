import asyncio

import pytest

from catmouse.transport import ConnectionHub


class FakeSocket:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    async def send_json(self, message):
        if self.error is not None:
            raise self.error
        self.sent.append(message)


@pytest.fixture
def anyio_backend():
    return "asyncio"


async def drain():
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.anyio
async def test_messages_are_delivered_in_order():
    hub = ConnectionHub()
    ws = FakeSocket()
    hub.register("a", ws)
    for i in range(3):
        hub.send("a", {"type": "n", "data": i})
    await drain()
    assert [m["data"] for m in ws.sent] == [0, 1, 2]
    await hub.unregister("a")
    assert "a" not in hub
    assert len(hub) == 0


@pytest.mark.anyio
async def test_send_to_unknown_player_is_dropped():
    hub = ConnectionHub()
    hub.send("nobody", {"type": "x"})
    await hub.unregister("nobody")


@pytest.mark.anyio
async def test_unregister_after_writer_crash():
    hub = ConnectionHub()
    hub.register("a", FakeSocket(error=ValueError("bad frame")))
    hub.send("a", {"type": "x"})
    await drain()
    await hub.unregister("a")
    assert "a" not in hub
