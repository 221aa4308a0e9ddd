import asyncio
import contextlib
import json

import pytest
import websockets

from jimmybsc.keys import address_from_private_key
from jimmybsc.ws import BscWsClient, parse_subscription_message, subscription_request

SCALAR = (7).to_bytes(32, "big")
LOG_A = {"address": "0x" + "11" * 20, "topics": [], "data": "0x"}
LOG_B = {"address": "0x" + "22" * 20, "topics": [], "data": "0x01"}
FILTER_A = {"address": "0x" + "11" * 20}
FILTER_B = {"address": "0x" + "22" * 20}


@contextlib.asynccontextmanager
async def serve(handler):
    async with websockets.serve(handler, "127.0.0.1", 0) as server:
        port = next(iter(server.sockets)).getsockname()[1]
        yield f"ws://127.0.0.1:{port}"


def notification(sub_id, result):
    return json.dumps(
        {
            "jsonrpc": "2.0",
            "method": "eth_subscription",
            "params": {"subscription": sub_id, "result": result},
        }
    )


async def take(agen, count):
    items = []
    try:
        for _ in range(count):
            items.append(await asyncio.wait_for(agen.__anext__(), 5))
    finally:
        await agen.aclose()
    return items


def test_subscription_request_shape():
    assert subscription_request(3, FILTER_A) == {
        "jsonrpc": "2.0",
        "id": 3,
        "method": "eth_subscribe",
        "params": ["logs", FILTER_A],
    }


def test_parse_ack():
    text = json.dumps({"jsonrpc": "2.0", "id": 2, "result": "0xsub"})
    assert parse_subscription_message(text) == ("ack", 2, "0xsub")


def test_parse_ack_without_string_result():
    text = json.dumps({"id": 1, "result": 5})
    assert parse_subscription_message(text) == ("ack", 1, None)


def test_parse_notification():
    assert parse_subscription_message(notification("0xsub", LOG_A)) == (
        "notification",
        "0xsub",
        LOG_A,
    )


@pytest.mark.parametrize(
    "text",
    ["not json", "[1, 2]", json.dumps({"method": "other"}), json.dumps({"method": "eth_subscription", "params": {}})],
)
def test_parse_ignores_other_messages(text):
    assert parse_subscription_message(text) is None


def test_client_derives_address_and_keeps_url():
    client = BscWsClient("wss://node.example.com/ws", SCALAR)
    assert client.address == address_from_private_key(SCALAR)
    assert client.url == "wss://node.example.com/ws"


def test_client_rejects_bad_url():
    with pytest.raises(ValueError):
        BscWsClient("not a url", SCALAR)


def test_client_rejects_bad_key():
    with pytest.raises(ValueError):
        BscWsClient("wss://node.example.com/ws", "placeholder")


@pytest.mark.asyncio
async def test_subscribe_logs_yields_only_decodable_logs():
    requests = []

    async def handler(ws, *_):
        requests.append(json.loads(await ws.recv()))
        await ws.send(json.dumps({"jsonrpc": "2.0", "id": 1, "result": "0xabc"}))
        await ws.send("hello")
        await ws.send(b"\x00\x01")
        await ws.send(notification("0xabc", "junk"))
        await ws.send(notification("0xabc", LOG_A))
        await ws.wait_closed()

    async with serve(handler) as url:
        client = BscWsClient(url, SCALAR, retry_delay=0.01)
        logs = await take(client.subscribe_logs(FILTER_A), 1)

    assert logs == [LOG_A]
    assert requests == [subscription_request(1, FILTER_A)]


@pytest.mark.asyncio
async def test_subscribe_logs_reconnects_after_close():
    requests = []

    async def handler(ws, *_):
        requests.append(json.loads(await ws.recv()))
        await ws.send(notification("0xabc", LOG_A if len(requests) == 1 else LOG_B))

    async with serve(handler) as url:
        client = BscWsClient(url, SCALAR, retry_delay=0.01)
        logs = await take(client.subscribe_logs(FILTER_A), 2)

    assert logs == [LOG_A, LOG_B]
    assert len(requests) == 2


@pytest.mark.asyncio
async def test_subscribe_logs_tagged_routes_by_subscription():
    requests = []

    async def handler(ws, *_):
        for _ in range(2):
            requests.append(json.loads(await ws.recv()))
        await ws.send(json.dumps({"id": 1, "result": "0xa"}))
        await ws.send(json.dumps({"id": 2, "result": "0xb"}))
        await ws.send(notification("0xb", LOG_B))
        await ws.send(notification("0xzz", LOG_A))
        await ws.send(notification("0xa", LOG_A))
        await ws.wait_closed()

    async with serve(handler) as url:
        client = BscWsClient(url, SCALAR, retry_delay=0.01)
        items = await take(client.subscribe_logs_tagged([("v2", FILTER_A), ("fm", FILTER_B)]), 2)

    assert items == [("fm", LOG_B), ("v2", LOG_A)]
    assert [r["id"] for r in requests] == [1, 2]
    assert [r["params"][1] for r in requests] == [FILTER_A, FILTER_B]


@pytest.mark.asyncio
async def test_subscribe_logs_tagged_forwards_logs_arriving_during_ack():
    async def handler(ws, *_):
        for _ in range(2):
            await ws.recv()
        await ws.send(json.dumps({"id": 1, "result": "0xa"}))
        await ws.send(notification("0xa", LOG_A))
        await ws.send(json.dumps({"id": 2, "result": "0xb"}))
        await ws.send(notification("0xb", LOG_B))
        await ws.wait_closed()

    async with serve(handler) as url:
        client = BscWsClient(url, SCALAR, retry_delay=0.01)
        items = await take(client.subscribe_logs_tagged([("v2", FILTER_A), ("v3", FILTER_B)]), 2)

    assert items == [("v2", LOG_A), ("v3", LOG_B)]