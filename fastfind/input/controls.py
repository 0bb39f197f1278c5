"""Key handling for the finder: query editing and navigation/selection actions.

``edit_query`` consumes text-editing keys first; whatever it leaves is passed
to ``handle_key_event``, which maps keys to finder mutations and an ``Action``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..finder import FuzzyFinder
from .keys import BACKSPACE, DOWN, ENTER, ESC, TAB, UP, KeyEvent

_EXIT_CTRL_KEYS = frozenset({"c", "q"})


class ActionKind(Enum):
    CONTINUE = "continue"
    EXIT = "exit"
    SELECT = "select"


@dataclass(frozen=True)
class Action:
    """Outcome of one key press; ``selected`` is only set for ``SELECT``."""

    kind: ActionKind
    selected: tuple[str, ...] = ()

    @classmethod
    def select(cls, items: list[str]) -> Action:
        return cls(ActionKind.SELECT, tuple(items))


CONTINUE = Action(ActionKind.CONTINUE)
EXIT = Action(ActionKind.EXIT)


def _is_toggle_space(event: KeyEvent, finder: FuzzyFinder) -> bool:
    return finder.multi_select and event.code == " " and not event.modifiers


def edit_query(event: KeyEvent, finder: FuzzyFinder) -> bool:
    """Apply a query-editing key; return whether the event was consumed.

    Printable characters without Ctrl/Alt append to the query, Backspace
    removes the last character and Ctrl-U clears the query. Space is left for selection toggling in
    multi-select mode.
    """
    if event.code == BACKSPACE and not event.modifiers:
        finder.pop_query_char()
        return True
    if event.ctrl and event.code == "u":
        finder.clear_query()
        return True
    if not event.is_char or event.ctrl or event.alt:
        return False
    if _is_toggle_space(event, finder) or not event.code.isprintable():
        return False
    finder.push_query_char(event.code)
    return True


def handle_key_event(event: KeyEvent, finder: FuzzyFinder) -> Action:
    """Map a navigation/selection key to finder changes and the loop's next step."""
    if event.ctrl and event.code in _EXIT_CTRL_KEYS:
        return EXIT
    if _is_toggle_space(event, finder):
        finder.toggle_selection()
        return CONTINUE
    if event.code == TAB and finder.multi_select:
        finder.toggle_selection()
        finder.move_cursor_clamped(1)
        return CONTINUE
    if event.code == UP:
        finder.move_cursor(-1)
        return CONTINUE
    if event.code == DOWN:
        finder.move_cursor(1)
        return CONTINUE
    if event.code == ENTER:
        return _confirm(finder)
    if event.code == ESC:
        return EXIT
    return CONTINUE


def _confirm(finder: FuzzyFinder) -> Action:
    selected = finder.get_selected_items()
    if selected:
        return Action.select(selected)
    return CONTINUE
