import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from content_db.sqlite_adapter import SQLiteDocumentStore
from mandala_cms.config.settings import Settings
from mandala_cms.main import create_app
from mandala_cms.media import MediaStorage
from tests.consts import TEST_BUCKET_NAME, TEST_REGION


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real AWS account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def mocked_aws(aws_credentials):
    """Mock every AWS call and create the media bucket."""
    with mock_aws():
        boto3.client("s3", region_name=TEST_REGION).create_bucket(Bucket=TEST_BUCKET_NAME)
        yield


@pytest.fixture
def s3_client(mocked_aws):
    return boto3.client("s3", region_name=TEST_REGION)


@pytest.fixture
def settings(tmp_path, aws_credentials) -> Settings:
    return Settings(
        deployment_mode="local-dev",
        database_backend="sqlite",
        sqlite_path=str(tmp_path / "test_cms.db"),
        aws_region=TEST_REGION,
        aws_endpoint_url=None,
        s3_bucket_name=TEST_BUCKET_NAME,
        media_public_base_url=None,
    )


@pytest.fixture
async def store(settings):
    store = SQLiteDocumentStore(settings.sqlite_path)
    await store.init_collections()
    yield store
    await store.close()


@pytest.fixture
def media(mocked_aws, settings) -> MediaStorage:
    return MediaStorage.from_settings(settings)


@pytest.fixture
def client(mocked_aws, settings):
    app = create_app(settings=settings)
    with TestClient(app) as client:
        yield client
