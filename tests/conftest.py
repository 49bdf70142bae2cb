"""Test configuration and fixtures for blob-tools."""

import boto3
import pytest
from moto import mock_aws

from blob_tools.listing import ABSENT, Item, ListingRequest, Page, Present


class ScriptedPages:
    """Paging primitive that replays a fixed list of pages and records requests."""

    def __init__(self, pages, fail_on_call=None, error=None):
        self.pages = list(pages)
        self.fail_on_call = fail_on_call
        self.error = error or ConnectionError("service unavailable")
        self.requests: list[ListingRequest] = []

    def __call__(self, request: ListingRequest) -> Page:
        self.requests.append(request)
        if self.fail_on_call == len(self.requests):
            raise self.error
        return self.pages[len(self.requests) - 1]


class PagedResource:
    """Paging primitive over an in-memory list of names, cutting pages by page size."""

    def __init__(self, names):
        self.names = list(names)
        self.requests: list[ListingRequest] = []

    def __call__(self, request: ListingRequest) -> Page:
        self.requests.append(request)
        matching = [name for name in self.names if name.startswith(request.prefix)]
        start = int(request.cursor.token.split("-")[1]) if request.cursor else 0
        end = start + request.page_size
        cursor = Present(f"offset-{end}") if end < len(matching) else ABSENT
        return Page(tuple(Item(name) for name in matching[start:end]), cursor)


def make_page(*names, token=None):
    """Build a page of plain items, with a Present cursor when token is given."""
    return Page(
        tuple(Item(name) for name in names),
        ABSENT if token is None else Present(token),
    )


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake AWS credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def s3_client(aws_credentials):
    """Mocked S3 with an empty bucket named test-bucket."""
    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket="test-bucket")
        yield client


@pytest.fixture
def versioned_s3_client(s3_client):
    """Mocked S3 where test-bucket has versioning enabled."""
    s3_client.put_bucket_versioning(
        Bucket="test-bucket", VersioningConfiguration={"Status": "Enabled"}
    )
    return s3_client
