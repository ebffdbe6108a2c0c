"""Tests for the host page glue using an in-memory page."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime

import pytest

from query_footprint.host import (
    ButtonInfo,
    ClickEvent,
    ComparisonPanel,
    ExpandToggle,
    InputEvent,
    KeyEvent,
    PanelState,
    SubmissionCaptureController,
    build_search_url,
    open_search,
    submit_to_assistant,
)
from query_footprint.host.page import is_send_button
from query_footprint.settings import QueryFootprintSettings


class FakeElement:
    def __init__(self, page: FakePage, element_id: str, text: str = "") -> None:
        self._page = page
        self.element_id = element_id
        self.text = text
        self.dispatched: list[object] = []

    def set_text(self, value: str) -> None:
        self.text = value

    def dispatch(self, event) -> None:
        self.dispatched.append(event)
        event_type = "keydown" if isinstance(event, KeyEvent) else "input"
        self._page.fire(event_type, event)


class FakePage:
    def __init__(self) -> None:
        self.elements: dict[str, FakeElement] = {}
        self.listeners: dict[str, list] = defaultdict(list)
        self.focused: FakeElement | None = None

    def add_element(self, element_id: str, text: str = "") -> FakeElement:
        element = FakeElement(self, element_id, text)
        self.elements[element_id] = element
        return element

    def get_element(self, element_id: str) -> FakeElement | None:
        return self.elements.get(element_id)

    def active_element(self) -> FakeElement | None:
        return self.focused

    def add_listener(self, event_type, handler) -> None:
        self.listeners[event_type].append(handler)

    def remove_listener(self, event_type, handler) -> None:
        self.listeners[event_type].remove(handler)

    def fire(self, event_type: str, event) -> list[bool]:
        return [handler(event) for handler in list(self.listeners[event_type])]


class FixedClock:
    def __init__(self, hour: int) -> None:
        self.hour = hour

    def __call__(self) -> datetime:
        return datetime(2025, 6, 1, self.hour, 30)


@pytest.fixture
def page() -> FakePage:
    page = FakePage()
    page.focused = page.add_element("prompt-textarea", "  explain recursion  ")
    return page


@pytest.fixture
def presented() -> list:
    return []


@pytest.fixture
def controller(page, engine, presented) -> SubmissionCaptureController:
    controller = SubmissionCaptureController(
        page, engine, presented.append, clock=FixedClock(20)
    )
    controller.ensure_bound()
    return controller


SEND_BUTTON = ButtonInfo(aria_label="Send prompt")


def test_enter_in_focused_input_is_intercepted(page, controller, presented):
    outcomes = page.fire("keydown", KeyEvent(key="Enter", code="Enter"))

    assert outcomes == [True]
    assert controller.submissions == 1
    (result,) = presented
    assert result.query == "explain recursion"
    assert result.context.label == "Higher (Peak Demand)"


def test_binding_is_idempotent(page, controller, presented):
    assert controller.ensure_bound() is False
    controller.on_page_mutation()
    controller.on_page_mutation()

    page.fire("keydown", KeyEvent(key="Enter"))

    assert len(page.listeners["keydown"]) == 1
    assert len(presented) == 1


@pytest.mark.parametrize(
    "event",
    [
        KeyEvent(key="Enter", shift=True),
        KeyEvent(key="a"),
        KeyEvent(key="Enter", trusted=False),
    ],
)
def test_other_keys_pass_through(page, controller, presented, event):
    assert page.fire("keydown", event) == [False]
    assert presented == []


def test_enter_outside_input_passes_through(page, controller, presented):
    page.focused = page.add_element("search-box")

    assert page.fire("keydown", KeyEvent(key="Enter")) == [False]
    assert presented == []


def test_missing_input_passes_through(page, controller, presented):
    del page.elements["prompt-textarea"]

    assert page.fire("keydown", KeyEvent(key="Enter")) == [False]
    assert page.fire("click", ClickEvent(button=SEND_BUTTON)) == [False]
    assert presented == []


def test_send_button_click_is_intercepted(page, controller, presented):
    page.focused = None

    assert page.fire("click", ClickEvent(button=SEND_BUTTON)) == [True]
    assert len(presented) == 1


@pytest.mark.parametrize(
    "button",
    [None, ButtonInfo(aria_label="Attach file"), ButtonInfo(element_id="other")],
)
def test_other_clicks_pass_through(page, controller, presented, button):
    assert page.fire("click", ClickEvent(button=button)) == [False]
    assert presented == []


@pytest.mark.parametrize(
    "button",
    [
        ButtonInfo(aria_label="Send message"),
        ButtonInfo(aria_label="Send prompt"),
        ButtonInfo(element_id="composer-submit-button"),
        ButtonInfo(test_id="send-button"),
    ],
)
def test_send_button_matching(button):
    assert is_send_button(button)


def test_unbind_removes_handlers(page, controller, presented):
    controller.unbind()

    assert controller.bound is False
    assert page.fire("keydown", KeyEvent(key="Enter")) == []
    assert presented == []


def test_assistant_choice_does_not_retrigger_capture(page, controller, presented):
    page.fire("keydown", KeyEvent(key="Enter"))
    panel = ComparisonPanel(presented[0], page)

    assert panel.choose_assistant() is True

    element = page.elements["prompt-textarea"]
    assert element.text == "explain recursion"
    assert isinstance(element.dispatched[0], InputEvent)
    assert element.dispatched[1] == KeyEvent(key="Enter", code="Enter", trusted=False)
    assert controller.submissions == 1
    assert panel.is_open is False


def test_submit_to_assistant_without_input():
    assert submit_to_assistant(FakePage(), "hello") is False


@pytest.mark.parametrize(
    "query, encoded",
    [
        ("hello world & more", "hello%20world%20%26%20more"),
        ("a/b", "a%2Fb"),
        ("café", "caf%C3%A9"),
        ("it's (fine)!", "it's%20(fine)!"),
        ("", ""),
    ],
)
def test_build_search_url(query, encoded):
    assert build_search_url(query) == f"https://www.google.com/search?q={encoded}"


def test_build_search_url_with_existing_parameters():
    url = build_search_url("x y", "https://search.example/find?lang=en")
    assert url == "https://search.example/find?lang=en&q=x%20y"


def test_open_search_uses_opener():
    opened: list[str] = []
    url = open_search("hi", opener=opened.append)
    assert opened == [url]


def test_search_choice_closes_panel(engine, page):
    opened: list[str] = []
    panel = ComparisonPanel(
        engine.estimate("hello world", 9),
        page,
        search_url="https://search.example/find",
        opener=opened.append,
    )

    assert panel.choose_search() == "https://search.example/find?q=hello%20world"
    assert opened == ["https://search.example/find?q=hello%20world"]
    assert panel.is_open is False
    assert panel.choose_search() is None
    assert panel.choose_assistant() is False
    assert len(opened) == 1


def test_dismiss_closes_without_action(engine, page):
    panel = ComparisonPanel(engine.estimate("hi", 9), page, opener=pytest.fail)
    panel.dismiss()

    assert panel.is_open is False
    assert panel.choose_search() is None
    assert page.elements["prompt-textarea"].dispatched == []


def test_expand_toggle():
    toggle = ExpandToggle()
    assert toggle.state is PanelState.COLLAPSED
    assert toggle.toggle() is PanelState.EXPANDED
    assert toggle.expanded
    assert toggle.toggle() is PanelState.COLLAPSED
    assert not toggle.expanded


def test_settings_drive_input_id_and_search_url(engine, monkeypatch):
    monkeypatch.setenv("QUERY_FOOTPRINT_INPUT_ID", "composer")
    monkeypatch.setenv("QUERY_FOOTPRINT_SEARCH_URL", "https://search.example/find")
    settings = QueryFootprintSettings()
    page = FakePage()
    page.focused = page.add_element("composer", "hello world")
    presented: list = []

    controller = SubmissionCaptureController.from_settings(
        page, engine, presented.append, settings
    )
    controller.ensure_bound()
    page.fire("keydown", KeyEvent(key="Enter"))

    opened: list[str] = []
    panel = ComparisonPanel.from_settings(
        presented[0], page, settings, opener=opened.append
    )
    panel.choose_search()

    assert opened == ["https://search.example/find?q=hello%20world"]
