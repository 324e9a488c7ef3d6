"""Shared pytest fixtures for Pomotimer tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from pomotimer.commands import CommandDispatcher
from pomotimer.timer.engine import TimerEngine

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, clock):
    """TimerEngine on a simulated clock; the tests drive the ticker."""
    return TimerEngine(parent=None, clock=clock, threaded=False)


@pytest.fixture
def engine_threaded(qapp):
    """TimerEngine with a real ticking thread and a fast poll."""
    eng = TimerEngine(parent=None, poll_interval=0.01, emit_interval=0.05)
    yield eng
    eng.reset(True)
    eng.join_ticker(timeout=2)


@pytest.fixture
def commands(engine):
    return CommandDispatcher(engine)
