"""Reconnecting log subscriptions over a BSC node's WebSocket endpoint."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, AsyncIterator, Mapping, Sequence
from urllib.parse import urlsplit

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .keys import address_from_private_key
from .logbook import save_log_to_file

_CONNECT_ERRORS = (OSError, asyncio.TimeoutError, WebSocketException)

ACK = "ack"
NOTIFICATION = "notification"


def subscription_request(request_id: int, log_filter: Mapping[str, Any]) -> dict[str, Any]:
    """Build the ``eth_subscribe`` request for a logs filter."""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "eth_subscribe",
        "params": ["logs", dict(log_filter)],
    }


def parse_subscription_message(text: str) -> tuple[str, Any, Any] | None:
    """Classify a text frame.

    Returns ``("ack", request_id, subscription_id_or_None)`` for replies to a
    request, ``("notification", subscription_id_or_None, result)`` for
    ``eth_subscription`` pushes, and ``None`` for anything else.
    """
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    request_id = payload.get("id")
    if isinstance(request_id, int) and not isinstance(request_id, bool):
        sub_id = payload.get("result")
        return ACK, request_id, sub_id if isinstance(sub_id, str) else None
    if payload.get("method") != "eth_subscription":
        return None
    params = payload.get("params")
    if not isinstance(params, dict) or "result" not in params:
        return None
    sub_id = params.get("subscription")
    return NOTIFICATION, sub_id if isinstance(sub_id, str) else None, params["result"]


def _close_note(prefix: str, exc: ConnectionClosed) -> str:
    frame = getattr(exc, "rcvd", None)
    if frame is None:
        return f"{prefix} CLOSE (no frame)"
    return f"{prefix} CLOSE code={frame.code} reason={frame.reason}"


class BscWsClient:
    """WebSocket log subscriptions that reconnect whenever the stream drops."""

    ack_timeout: float = 2.0

    def __init__(self, ws_url: str, private_key: str | bytes, retry_delay: float = 3.0) -> None:
        parts = urlsplit(ws_url)
        if not parts.scheme or not (parts.netloc or parts.path):
            raise ValueError(f"Failed to parse BSC_WSS `{ws_url}`")
        try:
            self.address = address_from_private_key(private_key)
        except ValueError as exc:
            raise ValueError("PRIVATE_KEY did not contain a valid hex encoded secret") from exc
        self._ws_url = ws_url
        self._retry_delay = retry_delay

    @property
    def url(self) -> str:
        """The WebSocket endpoint."""
        return self._ws_url

    async def _connect(self, prefix: str) -> Any:
        while True:
            save_log_to_file(f"{prefix} connecting to {self._ws_url}")
            try:
                connection = await websockets.connect(self._ws_url)
            except _CONNECT_ERRORS as exc:
                save_log_to_file(
                    f"{prefix} connect error: {exc}, retrying in {self._retry_delay:g}s …"
                )
                await asyncio.sleep(self._retry_delay)
                continue
            save_log_to_file(f"{prefix} connected")
            return connection

    async def subscribe_logs(self, log_filter: Mapping[str, Any]) -> AsyncIterator[dict[str, Any]]:
        """Yield every log pushed for one filter, reconnecting after drops."""
        prefix = "[ws]"
        request = json.dumps(subscription_request(1, log_filter))
        while True:
            connection = await self._connect(prefix)
            try:
                save_log_to_file(f"{prefix} sending eth_subscribe (logs)")
                try:
                    await connection.send(request)
                except WebSocketException as exc:
                    save_log_to_file(f"{prefix} send subscribe failed: {exc}")
                    return
                while True:
                    try:
                        message = await connection.recv()
                    except ConnectionClosed as exc:
                        save_log_to_file(_close_note(prefix, exc))
                        break
                    except WebSocketException as exc:
                        save_log_to_file(f"{prefix} error: {exc}")
                        break
                    if not isinstance(message, str):
                        continue
                    parsed = parse_subscription_message(message)
                    if parsed is None or parsed[0] != NOTIFICATION:
                        continue
                    log = parsed[2]
                    if isinstance(log, dict):
                        yield log
                    else:
                        save_log_to_file(f"{prefix} failed to decode log: {log!r}")
            finally:
                await connection.close()
            save_log_to_file(f"{prefix} stream ended, retrying in {self._retry_delay:g}s …")
            await asyncio.sleep(self._retry_delay)

    async def subscribe_logs_tagged(
        self, tagged_filters: Sequence[tuple[str, Mapping[str, Any]]]
    ) -> AsyncIterator[tuple[str, dict[str, Any]]]:
        """Subscribe many tagged filters on one connection and yield ``(tag, log)``."""
        prefix = "[ws/multi]"
        filters = list(tagged_filters)
        requests = [
            (tag, json.dumps(subscription_request(number, log_filter)))
            for number, (tag, log_filter) in enumerate(filters, start=1)
        ]
        loop = asyncio.get_running_loop()
        while True:
            connection = await self._connect(prefix)
            try:
                sub_map: dict[str, str] = {}
                for tag, request in requests:
                    save_log_to_file(f"{prefix} sending eth_subscribe for tag={tag}")
                    try:
                        await connection.send(request)
                    except WebSocketException as exc:
                        save_log_to_file(f"{prefix} send subscribe({tag}) failed: {exc}")

                closed = False
                deadline = loop.time() + self.ack_timeout if filters else None
                while True:
                    timeout = None if deadline is None else deadline - loop.time()
                    if timeout is not None and timeout <= 0:
                        break
                    try:
                        message = await asyncio.wait_for(connection.recv(), timeout)
                    except asyncio.TimeoutError:
                        break
                    except ConnectionClosed as exc:
                        save_log_to_file(_close_note(prefix, exc))
                        closed = True
                        break
                    except WebSocketException as exc:
                        save_log_to_file(f"{prefix} error during ack: {exc}")
                        closed = True
                        break
                    if not isinstance(message, str):
                        continue
                    parsed = parse_subscription_message(message)
                    if parsed is None:
                        continue
                    kind, first, second = parsed
                    if kind == ACK:
                        if second is not None and 1 <= first <= len(filters):
                            tag = filters[first - 1][0]
                            sub_map[second] = tag
                            save_log_to_file(f"{prefix} subscribed `{tag}` -> {second}")
                        if len(sub_map) == len(filters):
                            break
                    elif first in sub_map and isinstance(second, dict):
                        yield sub_map[first], second

                while not closed:
                    try:
                        message = await connection.recv()
                    except ConnectionClosed as exc:
                        save_log_to_file(_close_note(prefix, exc))
                        break
                    except WebSocketException as exc:
                        save_log_to_file(f"{prefix} ws error: {exc}")
                        break
                    if not isinstance(message, str):
                        continue
                    parsed = parse_subscription_message(message)
                    if parsed is None or parsed[0] != NOTIFICATION:
                        continue
                    _, sub_id, log = parsed
                    tag = sub_map.get(sub_id) if sub_id is not None else None
                    if tag is None:
                        continue
                    if isinstance(log, dict):
                        yield tag, log
                    else:
                        print(f"{prefix} failed to decode log: {log!r}", file=sys.stderr)
            finally:
                await connection.close()
            save_log_to_file(f"{prefix} stream ended, retrying in {self._retry_delay:g}s …")
            await asyncio.sleep(self._retry_delay)