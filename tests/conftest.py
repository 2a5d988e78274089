"""
Shared test fixtures and helpers for the Sodor test suite.
"""

from types import SimpleNamespace
from typing import Any, Dict, Optional

import pytest

from sodor import Controller, Root, Private, Special, Alias, POST, Method


# ============================================================================
# Request Helpers
# ============================================================================


def make_request(params: Optional[Dict[str, Any]] = None, **extra) -> SimpleNamespace:
    """Build a minimal incoming request carrying named path parameters."""
    return SimpleNamespace(params=dict(params or {}), **extra)


def route_pairs(routes) -> list:
    """(method, path) pairs of a route list, in order."""
    return [(r.method, r.path) for r in routes]


# ============================================================================
# Controller Fixtures
# ============================================================================


@pytest.fixture
def users_controller():
    """The canonical Users controller."""

    class Users(Controller):
        def show(self, id):
            return f"user {id}"

        @Root()
        def list(self):
            return "all users"

        @POST()
        @Alias("u/new")
        def create(self, id):
            return f"created {id}"

    return Users


@pytest.fixture
def tagged_controller():
    """A controller exercising every tag."""

    class Things(Controller):
        def index(self):
            return "index"

        @Special()
        @Alias("things-by-slug/:slug")
        def by_slug(self, slug):
            return slug

        @Special()
        def hidden(self):
            return "hidden"

        @Private()
        def helper(self, value):
            return value * 2

        @Method("delete")
        def remove(self, id):
            return self.helper(id)

    return Things
