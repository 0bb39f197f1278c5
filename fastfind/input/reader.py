"""Low-level terminal input decoding.

Reads raw bytes from a tty file descriptor and translates them into
``KeyEvent`` values. Handles ESC-sequence timing, CSI/SS3 navigation keys,
modifier parameters and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

from .keys import (
    ALT,
    BACKSPACE,
    BACKTAB,
    CTRL,
    DELETE,
    DOWN,
    END,
    ENTER,
    ESC,
    HOME,
    LEFT,
    PAGE_DOWN,
    PAGE_UP,
    RIGHT,
    SHIFT,
    TAB,
    UP,
    KeyEvent,
)

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []
_MAX_CSI_PARAM_BYTES = 16

_CSI_FINAL_KEYS = {
    b"A": UP,
    b"B": DOWN,
    b"C": RIGHT,
    b"D": LEFT,
    b"H": HOME,
    b"F": END,
}
_CSI_TILDE_KEYS = {
    "1": HOME,
    "7": HOME,
    "4": END,
    "8": END,
    "3": DELETE,
    "5": PAGE_UP,
    "6": PAGE_DOWN,
}
# xterm modifier parameter minus one is a bitmask: 1 shift, 2 alt, 4 ctrl.
_MODIFIER_BITS = ((1, SHIFT), (2, ALT), (4, CTRL))


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = lead
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        if nxt[0] & 0xC0 != 0x80:
            _PENDING_BYTES.insert(0, nxt)
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _decode_modifiers(param: str) -> frozenset[str]:
    try:
        mask = int(param) - 1
    except ValueError:
        return frozenset()
    if mask <= 0:
        return frozenset()
    return frozenset(name for bit, name in _MODIFIER_BITS if mask & bit)


def _read_csi(fd: int) -> KeyEvent:
    params = b""
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None or len(params) > _MAX_CSI_PARAM_BYTES:
            return KeyEvent(ESC)
        if 0x40 <= part[0] <= 0x7E:
            final = part
            break
        params += part

    fields = params.decode("ascii", errors="replace").split(";")
    modifiers = _decode_modifiers(fields[1]) if len(fields) > 1 else frozenset()
    if final in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[final], modifiers)
    if final == b"Z":
        return KeyEvent(BACKTAB, frozenset({SHIFT}))
    if final == b"~" and fields[0] in _CSI_TILDE_KEYS:
        return KeyEvent(_CSI_TILDE_KEYS[fields[0]], modifiers)
    return KeyEvent(ESC)


def _read_escape(fd: int) -> KeyEvent:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent(ESC)
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final in _CSI_FINAL_KEYS:
            return KeyEvent(_CSI_FINAL_KEYS[final])
        if final is not None:
            _PENDING_BYTES.insert(0, final)
        return KeyEvent.char("O", ALT)
    if seq == b"\x1b":
        _PENDING_BYTES.insert(0, seq)
        return KeyEvent(ESC)

    inner = _decode_byte(fd, seq)
    return KeyEvent(inner.code, inner.modifiers | {ALT})


def _decode_byte(fd: int, ch: bytes) -> KeyEvent:
    byte = ch[0]
    if ch == b"\t":
        return KeyEvent(TAB)
    if ch in {b"\r", b"\n"}:
        return KeyEvent(ENTER)
    if ch in {b"\x7f", b"\x08"}:
        return KeyEvent(BACKSPACE)
    if byte == 0:
        return KeyEvent.char(" ", CTRL)
    if byte < 0x1B:
        return KeyEvent.char(chr(0x60 + byte), CTRL)
    if byte < 0x20:
        return KeyEvent.char(chr(0x40 + byte), CTRL)
    if byte < 0x80:
        return KeyEvent(chr(byte))
    return KeyEvent(_read_utf8_char(fd, ch))


def read_key_event(fd: int, timeout_ms: int | None = None) -> KeyEvent | None:
    """Read and decode one key press from ``fd``.

    Returns ``None`` when ``timeout_ms`` elapses with no input or on EOF.
    Bytes read ahead while resolving an escape sequence are queued and
    consumed by the next call.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            return None

    if ch == b"\x1b":
        return _read_escape(fd)
    return _decode_byte(fd, ch)
