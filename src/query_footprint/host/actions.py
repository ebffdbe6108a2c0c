"""Outbound actions taken once the user has picked a service."""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable
from urllib.parse import quote

from query_footprint.host.page import ASSISTANT_INPUT_ID, HostPage, InputEvent, KeyEvent
from query_footprint.settings import DEFAULT_SEARCH_URL

LOGGER = logging.getLogger(__name__)

__all__ = ["build_search_url", "open_search", "submit_to_assistant"]

Opener = Callable[[str], object]

# Characters encodeURIComponent leaves unescaped besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_search_url(query: str, base_url: str = DEFAULT_SEARCH_URL) -> str:
    """Return ``base_url`` with ``query`` percent-encoded as the ``q`` parameter.

    Encoding matches ``encodeURIComponent``: spaces become ``%20`` and only
    unreserved marks are left as is.
    """

    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}q={quote(query, safe=_URI_COMPONENT_SAFE)}"


def open_search(
    query: str,
    *,
    base_url: str = DEFAULT_SEARCH_URL,
    opener: Opener = webbrowser.open_new_tab,
) -> str:
    """Open the search page for ``query`` in a new tab.

    Returns:
        The URL that was opened.
    """

    url = build_search_url(query, base_url)
    LOGGER.info("Opening search page", extra={"url": url})
    opener(url)
    return url


def submit_to_assistant(
    page: HostPage, query: str, *, input_id: str = ASSISTANT_INPUT_ID
) -> bool:
    """Write ``query`` into the assistant input and confirm it with Enter.

    Args:
        page: Host page exposing the assistant input.
        query: Literal query text.
        input_id: Identifier of the host input element.

    Returns:
        ``True`` when the query was submitted, ``False`` when the input is
        absent and the action was skipped.
    """

    element = page.get_element(input_id)
    if element is None:
        LOGGER.debug(
            "Assistant input not found; skipping submission",
            extra={"input_id": input_id},
        )
        return False

    element.set_text(query)
    element.dispatch(InputEvent(trusted=False))
    element.dispatch(KeyEvent(key="Enter", code="Enter", trusted=False))
    return True
