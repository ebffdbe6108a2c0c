"""Protocols and event records describing the host page boundary.

The estimation engine never touches a page directly. A host application
adapts its own page or widget toolkit to these protocols and forwards user
gestures as :class:`KeyEvent` and :class:`ClickEvent` records.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Protocol, Union

__all__ = [
    "ASSISTANT_INPUT_ID",
    "SEND_BUTTON_IDS",
    "SEND_BUTTON_LABELS",
    "SEND_BUTTON_TEST_IDS",
    "ButtonInfo",
    "ClickEvent",
    "EventHandler",
    "HostElement",
    "HostEvent",
    "HostPage",
    "InputEvent",
    "KeyEvent",
    "is_send_button",
]

ASSISTANT_INPUT_ID: Final[str] = "prompt-textarea"
SEND_BUTTON_LABELS: Final[frozenset[str]] = frozenset({"Send message", "Send prompt"})
SEND_BUTTON_IDS: Final[frozenset[str]] = frozenset({"composer-submit-button"})
SEND_BUTTON_TEST_IDS: Final[frozenset[str]] = frozenset({"send-button"})


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A key press. ``trusted`` is ``False`` for synthesized events."""

    key: str
    code: str | None = None
    shift: bool = False
    trusted: bool = True


@dataclass(frozen=True, slots=True)
class InputEvent:
    """Notification that an element's text content changed."""

    trusted: bool = True


@dataclass(frozen=True, slots=True)
class ButtonInfo:
    """Attributes of the closest button enclosing a click target."""

    element_id: str | None = None
    aria_label: str | None = None
    test_id: str | None = None


@dataclass(frozen=True, slots=True)
class ClickEvent:
    """A click, with the enclosing button when there is one."""

    button: ButtonInfo | None = None
    trusted: bool = True


HostEvent = Union[KeyEvent, InputEvent, ClickEvent]
EventHandler = Callable[[HostEvent], bool]


class HostElement(Protocol):
    """The subset of an editable host element the glue relies on."""

    @property
    def element_id(self) -> str:
        """Identifier of the element."""

    @property
    def text(self) -> str:
        """Rendered text content of the element."""

    def set_text(self, value: str) -> None:
        """Replace the element's content with literal ``value``."""

    def dispatch(self, event: HostEvent) -> None:
        """Dispatch ``event`` with the element as target."""


class HostPage(Protocol):
    """The subset of a host page the glue relies on."""

    def get_element(self, element_id: str) -> HostElement | None:
        """Return the element with ``element_id`` or ``None``."""

    def active_element(self) -> HostElement | None:
        """Return the focused element, if any."""

    def add_listener(self, event_type: str, handler: EventHandler) -> None:
        """Register ``handler`` in the capture phase for ``event_type``."""

    def remove_listener(self, event_type: str, handler: EventHandler) -> None:
        """Remove a handler previously registered for ``event_type``."""


def is_send_button(button: ButtonInfo | None) -> bool:
    """Return ``True`` when ``button`` is one of the host's send buttons."""

    if button is None:
        return False
    return (
        button.aria_label in SEND_BUTTON_LABELS
        or button.element_id in SEND_BUTTON_IDS
        or button.test_id in SEND_BUTTON_TEST_IDS
    )
