"""Host page glue: submission capture, the comparison panel and outbound actions."""

from __future__ import annotations

from query_footprint.host.actions import (
    build_search_url,
    open_search,
    submit_to_assistant,
)
from query_footprint.host.capture import SubmissionCaptureController
from query_footprint.host.page import (
    ButtonInfo,
    ClickEvent,
    HostElement,
    HostPage,
    InputEvent,
    KeyEvent,
)
from query_footprint.host.panel import ComparisonPanel, ExpandToggle, PanelState

__all__ = [
    "ButtonInfo",
    "ClickEvent",
    "ComparisonPanel",
    "ExpandToggle",
    "HostElement",
    "HostPage",
    "InputEvent",
    "KeyEvent",
    "PanelState",
    "SubmissionCaptureController",
    "build_search_url",
    "open_search",
    "submit_to_assistant",
]
