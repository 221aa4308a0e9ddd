# jimmybsc

Building blocks for watching new trading pairs on the BNB Smart Chain:
a reconnecting websocket log subscriber, account address derivation,
BNB balance formatting, JSON caches for UI settings and the auto-trade
form, a dated debug log with a merged viewer, and small pieces of UI state
(field editing, settings switches, hit-testing).

Install with `pip install .`, or `pip install .[test]` for the test tools.

## Units

```python
from jimmybsc.units import format_bnb, parse_hex_quantity, wei_to_bnb

format_bnb("0xde0b6b3a7640000")        # "1 BNB"
wei_to_bnb(1_500_000_000_000_000_000)  # "1.5 BNB"
parse_hex_quantity("0x1")              # 1
```

`parse_hex_quantity` accepts `0x`/`0X` prefixes, odd-length hex and the
empty string (zero); it raises `ValueError` on non-hex input or more than
256 bits. `wei_to_bnb` trims trailing zeros and shows values above 128 bits
in wei.

## Keys and addresses

```python
from jimmybsc.keys import address_from_private_key, keccak256, to_checksum_address

keccak256(b"")                      # 32-byte Keccak-256 digest
to_checksum_address("0x" + "ab" * 20)  # EIP-55 mixed case
address_from_private_key(private_key)  # hex string or 32 bytes
```

Malformed or out-of-range keys and addresses raise `ValueError`.

## Websocket log subscriptions

`jimmybsc.ws.BscWsClient(ws_url, private_key, retry_delay=3.0)` checks the
URL, derives `address` from the key, and exposes the endpoint as `url`.

- `subscribe_logs(log_filter)` is an async generator yielding every log
  pushed for one `eth_subscribe` logs filter.
- `subscribe_logs_tagged([(tag, filter), ...])` puts all filters on one
  connection, waits up to `ack_timeout` (2 s) for the subscription ids, and
  yields `(tag, log)` pairs.

Both reconnect after `retry_delay` seconds whenever the stream drops.

```python
from jimmybsc.ws import BscWsClient

async def follow(ws_url, private_key):
    client = BscWsClient(ws_url, private_key)
    async for tag, log in client.subscribe_logs_tagged([("v2", {"topics": []})]):
        print(tag, log)
```

`subscription_request(request_id, log_filter)` builds the request and
`parse_subscription_message(text)` classifies a frame as
`("ack", id, sub_id)`, `("notification", sub_id, result)` or `None`.

## Caches

UI settings and the auto-trade form live as pretty JSON under
`<base_dir>/.cache/` (the working directory when `base_dir` is `None`):

```python
from jimmybsc.cache import (
    SettingsCache, load_autotrade_cache, load_settings_cache,
    save_autotrade_cache, save_settings_cache,
)

settings = load_settings_cache(".")          # defaults when no file exists
save_settings_cache(SettingsCache(hide_wallet=True), ".")
save_autotrade_cache({"max_positions": "3"}, ".")
load_autotrade_cache(".")                     # {"max_positions": "3"}
```

A cache file that cannot be parsed raises `ValueError`.

## Debug logs

With the environment variable `DEBUG_LOGS=true`,
`jimmybsc.logbook.save_log_to_file(message, "logs")` appends a
`[HH:MM:SS.mmm] message` line to `logs/logs_<HH-DD-MM-YYYY>.txt` (UTC) and
returns the path; otherwise it does nothing and returns `None`.

`jimmybsc.logview` reads them back:

- `load_logs_from_dir("logs")` – every line as `"<file> | <line>"`, newest
  file first and last line first.
- `logs_title(total, scroll)` and `clamp_logs_scroll(total, scroll)` – paging
  in 100-line pages.
- `fourmeme_candidates("logs")` – checksummed addresses ending in `4444`
  found anywhere in the files.

## UI state

```python
from jimmybsc.display import Rect, balance_short, contains_cjk, dexes_enabled, short_addr
from jimmybsc.logbook import trim_chars

dexes_enabled("v2,fm")            # (True, False, True)
balance_short("0.123456789 BNB")  # "0.1234 BNB"
short_addr("0x1234567890abcdef")  # "0x1234…cdef"
Rect(0, 0, 4, 1).contains(3, 0)   # True
trim_chars("hello", 3)            # "hel"
```

`jimmybsc.editor.FieldEditor` holds the buffer of the focused auto-trade
field: digits and `.` are typed, `"Backspace"` deletes, `"Esc"` cancels, and
`"Enter"` writes a non-empty buffer into the store, saves the auto-trade
cache and returns `(field, value)`. `display_store(store)` shows the buffer
in place of the stored value.

`jimmybsc.toggles.SettingsToggles.load(base_dir)` restores the wallet and
runtime panel switches, always turns simulation mode on and saves at once;
`click(x, y)` flips the switch whose area holds the point and saves.

## What this package does not do

There is no HTTP JSON-RPC client, no price or fee lookup, no pair tracking,
no order placement and no terminal screen or command to run: the package
supplies the pieces above for a program that provides those.