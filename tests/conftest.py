"""
Pytest configuration for underbar tests.

Puts the project root on the Python path so the tests can import the
package without installing it, and supplies shared fixtures.
"""

import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest

from underbar.utils import clear_performance_metrics, reset_settings


class ManualHandle:
    """Handle returned by ManualScheduler."""

    def __init__(self, seconds, callback, args):
        self.seconds = seconds
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Records scheduled calls; run_all() fires the ones not cancelled."""

    def __init__(self):
        self.scheduled = []

    def schedule(self, seconds, callback, *args):
        handle = ManualHandle(seconds, callback, args)
        self.scheduled.append(handle)
        return handle

    def run_all(self):
        for handle in self.scheduled:
            if not handle.cancelled:
                handle.callback(*handle.args)


@pytest.fixture
def manual_scheduler():
    """Scheduler that only runs callbacks when told to."""
    return ManualScheduler()


@pytest.fixture(autouse=True)
def clean_state():
    """Reset settings and recorded metrics around every test."""
    reset_settings()
    clear_performance_metrics()
    yield
    reset_settings()
    clear_performance_metrics()


@pytest.fixture
def people():
    """Small list of records for pluck/map tests."""
    return [
        {"name": "moe", "age": 40},
        {"name": "larry", "age": 50},
        {"name": "curly", "age": 60},
    ]
