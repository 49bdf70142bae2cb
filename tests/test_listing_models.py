"""Tests for listing cursors, pages and cancellation tokens."""

import threading

from blob_tools.listing import (
    ABSENT,
    Absent,
    CancellationToken,
    Item,
    ListingRequest,
    Page,
    Present,
    cursor_from_token,
    cursor_token,
)


class TestCursor:
    """Test the Absent/Present cursor sum type."""

    def test_none_and_empty_tokens_are_absent(self):
        """Test SDK end-of-listing tokens map to ABSENT."""
        assert cursor_from_token(None) is ABSENT
        assert cursor_from_token("") is ABSENT

    def test_token_is_wrapped_unchanged(self):
        """Test a continuation token is kept as-is."""
        token = ("key-marker", "version-marker")
        cursor = cursor_from_token(token)

        assert cursor == Present(token)
        assert cursor_token(cursor) is token

    def test_absent_unwraps_to_none(self):
        """Test ABSENT becomes the null token SDKs expect."""
        assert cursor_token(ABSENT) is None

    def test_truthiness(self):
        """Test only a present cursor is truthy."""
        assert not ABSENT
        assert not Absent()
        assert Present("t")

    def test_absent_equality(self):
        """Test every Absent is equal."""
        assert Absent() == ABSENT


class TestPage:
    """Test page and request models."""

    def test_has_more(self):
        """Test has_more follows the cursor."""
        assert Page((Item("a"),), Present("t")).has_more
        assert not Page((Item("a"),), ABSENT).has_more

    def test_defaults(self):
        """Test an empty page is final."""
        page = Page()
        assert page.items == ()
        assert page.cursor is ABSENT

    def test_request_defaults(self):
        """Test a first request has no prefix and no cursor."""
        request = ListingRequest(resource="demo")
        assert request.prefix == ""
        assert request.cursor is ABSENT

    def test_item_metadata_default(self):
        """Test items without metadata get an empty mapping."""
        assert Item("a").metadata == {}


class TestCancellationToken:
    """Test cancellation token behavior."""

    def test_not_cancelled_initially(self):
        """Test a fresh token is live."""
        token = CancellationToken()
        assert not token.is_cancelled
        assert not token.deadline_exceeded

    def test_cancel_from_another_thread(self):
        """Test cancellation is visible across threads."""
        token = CancellationToken()
        worker = threading.Thread(target=token.cancel)
        worker.start()
        worker.join()

        assert token.is_cancelled

    def test_long_deadline_not_exceeded(self):
        """Test a distant deadline leaves the token live."""
        token = CancellationToken(timeout=3600)
        assert not token.is_cancelled
