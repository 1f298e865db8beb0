import pytest

from mandala_cms.s3.urls import object_key_to_url, public_base_url, url_to_object_key
from tests.consts import TEST_BASE_URL, TEST_BUCKET_NAME, TEST_REGION


def test_public_base_url_variants():
    assert public_base_url(TEST_BUCKET_NAME, TEST_REGION) == TEST_BASE_URL
    assert (
        public_base_url(TEST_BUCKET_NAME, TEST_REGION, endpoint_url="http://localhost:5000/")
        == f"http://localhost:5000/{TEST_BUCKET_NAME}"
    )
    assert (
        public_base_url(TEST_BUCKET_NAME, TEST_REGION, override="https://cdn.example.com/media/")
        == "https://cdn.example.com/media"
    )


def test_url_round_trip_with_special_characters():
    object_key = "gallery/1714550400000-ab12cd.my photo#1.png"
    url = object_key_to_url(TEST_BASE_URL, object_key)

    assert " " not in url
    assert "#" not in url
    assert url_to_object_key(TEST_BASE_URL, url) == object_key


def test_url_to_object_key_strips_query_string():
    url = f"{TEST_BASE_URL}/news/1714550400000-ab12cd.jpg?versionId=3"
    assert url_to_object_key(TEST_BASE_URL, url) == "news/1714550400000-ab12cd.jpg"


def test_url_to_object_key_rejects_foreign_and_empty_urls():
    assert url_to_object_key(TEST_BASE_URL, "") is None
    assert url_to_object_key(TEST_BASE_URL, "https://example.com/gallery/a.png") is None
    assert url_to_object_key(TEST_BASE_URL, f"{TEST_BASE_URL}/") is None


@pytest.mark.parametrize(
    "object_key",
    [
        "news?draft/1714550400000-ab12cd.png",
        "gallery/100%25 real/1714550400000-ab12cd.png",
        "gallery/50% off/1714550400000-ab12cd.png",
        "gallery/unit #7/1714550400000-ab12cd.png",
        "gallery/what?/a b?c=d.png",
    ],
)
def test_url_round_trip_keeps_reserved_characters(object_key):
    url = object_key_to_url(TEST_BASE_URL, object_key)
    assert url_to_object_key(TEST_BASE_URL, url) == object_key
    assert url_to_object_key(TEST_BASE_URL, f"{url}?versionId=3") == object_key
