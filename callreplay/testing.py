"""
unittest helpers for fixtures.

Example:
    class FetchUserTest(FixtureAssertionsMixin, unittest.IsolatedAsyncioTestCase):
        async def test_fetch(self):
            fetch = record_and_replay("fetch-user", fetch_user)
            self.assertEqual("Ada", (await fetch(1))["name"])
            self.assertFulfilled(fetch)
"""

from __future__ import annotations

from typing import Any, Optional

from .core.errors import FixtureNotFulfilledError
from .core.fulfillment import FulfillmentResult


def assert_fulfilled(fixture: Any) -> None:
    """
    Raise FixtureNotFulfilledError unless every expected call was made.

    Works with anything exposing ``is_fulfilled() -> FulfillmentResult``.
    """
    check = getattr(fixture, "is_fulfilled", None)
    if not callable(check):
        raise FixtureNotFulfilledError(
            f"Expected a fixture with an is_fulfilled() method, got {type(fixture).__name__}"
        )
    result: FulfillmentResult = check()
    if not result.success:
        raise FixtureNotFulfilledError(f"Fixture was not fulfilled: {result.error}")


class FixtureAssertionsMixin:
    """Adds assertFulfilled to unittest.TestCase subclasses."""

    def assertFulfilled(self, fixture: Any, msg: Optional[str] = None) -> None:
        try:
            assert_fulfilled(fixture)
        except FixtureNotFulfilledError as e:
            raise self.failureException(msg or str(e)) from e
