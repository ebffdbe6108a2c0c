"""Capture of query submissions on a host page."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from query_footprint.estimation.engine import EstimationEngine
from query_footprint.host.page import (
    ASSISTANT_INPUT_ID,
    ClickEvent,
    HostElement,
    HostEvent,
    HostPage,
    KeyEvent,
    is_send_button,
)
from query_footprint.models import EstimationResult
from query_footprint.settings import QueryFootprintSettings

LOGGER = logging.getLogger(__name__)

__all__ = ["Presenter", "SubmissionCaptureController"]

Presenter = Callable[[EstimationResult], None]


class SubmissionCaptureController:
    """Intercept submissions on a host page and route them to the engine.

    The controller owns its listener registrations. :meth:`ensure_bound` may
    be called any number of times (typically after every page mutation); the
    handlers are registered at most once while the controller is bound, so a
    single user gesture produces at most one engine evaluation.

    Args:
        page: Host page to listen on.
        engine: Engine evaluated once per intercepted submission.
        presenter: Callback receiving each result (e.g. opening a panel).
        input_id: Identifier of the host input holding the query.
        clock: Source of the current local time.
    """

    def __init__(
        self,
        page: HostPage,
        engine: EstimationEngine,
        presenter: Presenter,
        *,
        input_id: str = ASSISTANT_INPUT_ID,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._page = page
        self._engine = engine
        self._presenter = presenter
        self._input_id = input_id
        self._clock = clock
        self._bound = False
        self._submissions = 0

    @classmethod
    def from_settings(
        cls,
        page: HostPage,
        engine: EstimationEngine,
        presenter: Presenter,
        settings: QueryFootprintSettings,
    ) -> SubmissionCaptureController:
        return cls(page, engine, presenter, input_id=settings.assistant_input_id)

    @property
    def bound(self) -> bool:
        return self._bound

    @property
    def submissions(self) -> int:
        """Number of engine evaluations triggered so far."""

        return self._submissions

    def ensure_bound(self) -> bool:
        """Register the key and click handlers unless already registered.

        Returns:
            ``True`` when handlers were registered by this call.
        """

        if self._bound:
            return False
        self._page.add_listener("keydown", self._on_event)
        self._page.add_listener("click", self._on_event)
        self._bound = True
        LOGGER.debug("Submission capture bound", extra={"input_id": self._input_id})
        return True

    def unbind(self) -> None:
        """Remove the handlers registered by :meth:`ensure_bound`."""

        if not self._bound:
            return
        self._page.remove_listener("keydown", self._on_event)
        self._page.remove_listener("click", self._on_event)
        self._bound = False

    def on_page_mutation(self) -> None:
        """Re-establish capture after the host page structure changed."""

        self.ensure_bound()

    def _on_event(self, event: HostEvent) -> bool:
        if isinstance(event, KeyEvent):
            return self.handle_key(event)
        if isinstance(event, ClickEvent):
            return self.handle_click(event)
        return False

    def handle_key(self, event: KeyEvent) -> bool:
        """Handle a key press.

        Returns:
            ``True`` when the event was intercepted and the host should
            suppress its default submission.
        """

        if not event.trusted or event.key != "Enter" or event.shift:
            return False
        element = self._page.get_element(self._input_id)
        if element is None:
            return False
        active = self._page.active_element()
        if active is None or active.element_id != element.element_id:
            return False
        self._submit(element)
        return True

    def handle_click(self, event: ClickEvent) -> bool:
        """Handle a click; only clicks on a send button are intercepted."""

        if not event.trusted or not is_send_button(event.button):
            return False
        element = self._page.get_element(self._input_id)
        if element is None:
            return False
        self._submit(element)
        return True

    def _submit(self, element: HostElement) -> EstimationResult:
        query = element.text.strip()
        result = self._engine.estimate(query, self._clock().hour)
        self._submissions += 1
        self._presenter(result)
        return result
