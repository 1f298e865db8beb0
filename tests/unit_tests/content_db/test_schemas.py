from datetime import datetime, timezone

import pydantic
import pytest

from content_db.errors import MalformedRecord
from content_db.schemas import (
    CMSUser,
    EmailMessage,
    EmailMessageFields,
    NewsArticleCreate,
    NewsArticleFields,
    SubCompany,
    SubCompanyFields,
    parse_record,
    to_transport,
)

NOW = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)


def test_sub_company_fields_defaults():
    fields = SubCompanyFields(name="Vistara").model_dump()
    assert fields["name"] == "Vistara"
    assert all(value == "" for key, value in fields.items() if key != "name")


def test_fields_reject_unknown_keys():
    with pytest.raises(pydantic.ValidationError):
        SubCompanyFields.model_validate({"name": "x", "colour": "red"})


def test_news_create_requires_title_slug_author():
    with pytest.raises(pydantic.ValidationError):
        NewsArticleCreate.model_validate({"title": "Only a title"})


def test_news_keywords_are_deduplicated():
    fields = NewsArticleFields(keywords=["villa", "bali", "villa"])
    assert fields.keywords == ["villa", "bali"]


def test_parse_record_reports_malformed_documents():
    with pytest.raises(MalformedRecord) as exc_info:
        parse_record(SubCompany, "sub_companies", {"id": "abc", "created_at": NOW, "updated_at": NOW})

    assert exc_info.value.collection == "sub_companies"
    assert exc_info.value.doc_id == "abc"
    assert exc_info.value.errors


def test_user_record_ignores_stored_password():
    user = parse_record(
        CMSUser,
        "users",
        {
            "id": "u1",
            "name": "Dewi",
            "email": "dewi@example.com",
            "role": "admin",
            "password": "123456",
            "created_at": NOW,
            "updated_at": NOW,
        },
    )
    assert not hasattr(user, "password")
    assert "password" not in to_transport(user)


def test_email_uses_from_on_the_wire():
    fields = EmailMessageFields.model_validate({"from": "a@example.com", "to": "b@example.com"})
    assert fields.sender == "a@example.com"
    assert fields.model_dump(by_alias=True)["from"] == "a@example.com"

    record = EmailMessage.model_validate(
        {"id": "e1", "from": "a@example.com", "to": "b@example.com", "created_at": NOW}
    )
    assert to_transport(record)["from"] == "a@example.com"


def test_to_transport_renders_timestamps_as_strings():
    record = SubCompany(id="s1", name="Vistara", created_at=NOW, updated_at=NOW)
    payload = to_transport([record])

    assert isinstance(payload, list)
    assert isinstance(payload[0]["created_at"], str)
    assert datetime.fromisoformat(payload[0]["created_at"].replace("Z", "+00:00")) == NOW


def test_to_transport_none():
    assert to_transport(None) is None
