"""
Shared pytest fixtures for all tests.

Every request is wrapped with its own scheduler so deferred events only fire
when a test drives the scheduler.
"""

import pytest

from dtu_intercept import ClientRequest, RequestWrapper, Scheduler


@pytest.fixture
def scheduler():
    """Scheduler driven explicitly by the test."""
    return Scheduler()


@pytest.fixture
def request_obj():
    """Bare request as handed over by the client API."""
    return ClientRequest("POST", None)


@pytest.fixture
def wrap(scheduler):
    """Fixture that wraps a request with the test scheduler."""

    def _wrap(request, options=None):
        return RequestWrapper(request, options, scheduler=scheduler)

    return _wrap


@pytest.fixture
def wrapper(request_obj, wrap):
    """Wrapped request_obj with no options."""
    return wrap(request_obj)
