"""State of the comparison panel shown for one submission."""

from __future__ import annotations

import enum
import logging

from query_footprint.host.actions import Opener, open_search, submit_to_assistant
from query_footprint.host.page import ASSISTANT_INPUT_ID, HostPage
from query_footprint.models import EstimationResult
from query_footprint.settings import DEFAULT_SEARCH_URL, QueryFootprintSettings

LOGGER = logging.getLogger(__name__)

__all__ = ["ComparisonPanel", "ExpandToggle", "PanelState"]


class PanelState(enum.Enum):
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class ExpandToggle:
    """Two-state collapsed/expanded switch for the detailed breakdown."""

    def __init__(self, state: PanelState = PanelState.COLLAPSED) -> None:
        self._state = state

    @property
    def state(self) -> PanelState:
        return self._state

    @property
    def expanded(self) -> bool:
        return self._state is PanelState.EXPANDED

    def toggle(self) -> PanelState:
        self._state = (
            PanelState.COLLAPSED if self.expanded else PanelState.EXPANDED
        )
        return self._state


class ComparisonPanel:
    """Hold one estimation result until the user picks a service.

    Every choice closes the panel; choices on a closed panel are ignored.

    Args:
        result: Engine output for the submitted query.
        page: Host page receiving the query when the assistant is chosen.
        search_url: Base URL of the search page.
        input_id: Identifier of the assistant input element.
        opener: Callable opening a URL, forwarded to
            :func:`~query_footprint.host.actions.open_search`.
    """

    def __init__(
        self,
        result: EstimationResult,
        page: HostPage,
        *,
        search_url: str = DEFAULT_SEARCH_URL,
        input_id: str = ASSISTANT_INPUT_ID,
        opener: Opener | None = None,
    ) -> None:
        self.result = result
        self.details = ExpandToggle()
        self._page = page
        self._search_url = search_url
        self._input_id = input_id
        self._opener = opener
        self._open = True

    @classmethod
    def from_settings(
        cls,
        result: EstimationResult,
        page: HostPage,
        settings: QueryFootprintSettings,
        *,
        opener: Opener | None = None,
    ) -> ComparisonPanel:
        """Build a panel using the search URL and input id from ``settings``."""

        return cls(
            result,
            page,
            search_url=settings.search_url,
            input_id=settings.assistant_input_id,
            opener=opener,
        )

    @property
    def is_open(self) -> bool:
        return self._open

    def choose_search(self) -> str | None:
        """Open the search page for the query and close the panel.

        Returns:
            The opened URL, or ``None`` when the panel was already closed.
        """

        if not self._open:
            return None
        self._open = False
        if self._opener is None:
            return open_search(self.result.query, base_url=self._search_url)
        return open_search(
            self.result.query, base_url=self._search_url, opener=self._opener
        )

    def choose_assistant(self) -> bool:
        """Send the query to the assistant input and close the panel.

        Returns:
            ``True`` when the query was submitted.
        """

        if not self._open:
            return False
        self._open = False
        return submit_to_assistant(
            self._page, self.result.query, input_id=self._input_id
        )

    def dismiss(self) -> None:
        if self._open:
            LOGGER.debug("Comparison panel dismissed")
        self._open = False
