"""
Test configuration and fixtures.
"""

from typing import Callable, List

import pytest

from portfolio.core.config import Settings
from portfolio.services.contact_controller import ContactFormController
from portfolio.services.handoff_service import HandoffService


class ManualTimer:
    """Timer handle driven by ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test advances it."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for timer in sorted(self.pending, key=lambda t: t.due):
            if timer.due <= self.now:
                timer.fired = True
                timer.callback()


class RecordingOpener:
    """Stands in for the browser; records every URL it is asked to open."""

    def __init__(self, result: bool = True):
        self.result = result
        self.urls: List[str] = []

    def __call__(self, url: str) -> bool:
        self.urls.append(url)
        return self.result


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def opener() -> RecordingOpener:
    return RecordingOpener()


@pytest.fixture
def controller(opener, scheduler, test_settings):
    """Controller wired to a recording opener and a manual clock."""
    with ContactFormController(
        handoff=HandoffService(opener=opener),
        scheduler=scheduler,
        config=test_settings,
    ) as c:
        yield c


def fill_form(controller: ContactFormController, name: str, email: str, message: str):
    controller.update_field("name", name)
    controller.update_field("email", email)
    controller.update_field("message", message)
