"""Input-layer public API for key decoding and finder key handling."""

from .controls import CONTINUE, EXIT, Action, ActionKind, edit_query, handle_key_event
from .keys import KeyEvent
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key_event

__all__ = [
    "Action",
    "ActionKind",
    "CONTINUE",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "EXIT",
    "KeyEvent",
    "edit_query",
    "handle_key_event",
    "read_key_event",
]
