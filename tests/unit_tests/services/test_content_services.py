"""
Unit tests for the collection services over a temporary SQLite store.
"""

import pydantic
import pytest

from content_db.collections import SUB_COMPANIES, USERS
from content_db.errors import MalformedRecord, NotFound
from content_db.schemas import GalleryType, NewsStatus, to_transport
from mandala_cms.services import (
    DivisionService,
    EmailService,
    GalleryService,
    NewsService,
    OrganizationService,
    PageService,
    SubCompanyService,
    UserService,
    get_company_profile_service,
)
from tests.fixtures.content_fixtures import (
    CMS_USER,
    EMAIL_MESSAGE,
    NEWS_ARTICLE,
    SUB_COMPANY_DEFAULT_FIELDS,
    SUB_COMPANY_NAMES_REVERSED,
    VISTARA,
)


@pytest.fixture
def sub_companies(store, media):
    return SubCompanyService(store, media)


class TestSubCompanies:
    async def test_create_fills_defaults(self, sub_companies):
        record = await sub_companies.create_record(VISTARA)

        assert record.name == "Vistara"
        for field in SUB_COMPANY_DEFAULT_FIELDS:
            assert getattr(record, field) == ""
        assert record.created_at == record.updated_at
        assert record.created_at.tzinfo is not None

    async def test_create_returns_id(self, sub_companies):
        doc_id = await sub_companies.create(VISTARA)
        record = await sub_companies.get_by_id(doc_id)
        assert record.id == doc_id

    async def test_list_is_ordered_by_name(self, sub_companies):
        for name in SUB_COMPANY_NAMES_REVERSED:
            await sub_companies.create({"name": name})

        names = [record.name for record in await sub_companies.list()]
        assert names == sorted(SUB_COMPANY_NAMES_REVERSED)

    async def test_update_changes_only_supplied_fields(self, sub_companies):
        record = await sub_companies.create_record({"name": "Vistara", "email": "hello@vistara.id"})

        await sub_companies.update(record.id, {"address": "Jl. Sunset 1"})

        updated = await sub_companies.get_by_id(record.id)
        assert updated.address == "Jl. Sunset 1"
        assert updated.email == "hello@vistara.id"
        assert updated.name == "Vistara"
        assert updated.created_at == record.created_at
        assert updated.updated_at > record.updated_at

    async def test_update_cannot_touch_identity_or_timestamps(self, sub_companies):
        record = await sub_companies.create_record(VISTARA)

        await sub_companies.update(record.id, {"id": "other", "created_at": "2000-01-01T00:00:00Z"})

        updated = await sub_companies.get_by_id(record.id)
        assert updated.id == record.id
        assert updated.created_at == record.created_at

    async def test_update_rejects_unknown_fields(self, sub_companies):
        record = await sub_companies.create_record(VISTARA)
        with pytest.raises(pydantic.ValidationError):
            await sub_companies.update(record.id, {"colour": "red"})

    async def test_update_missing_raises(self, sub_companies):
        with pytest.raises(NotFound):
            await sub_companies.update("missing", {"name": "x"})

    async def test_get_after_delete_is_none(self, sub_companies):
        doc_id = await sub_companies.create(VISTARA)
        await sub_companies.delete(doc_id)
        assert await sub_companies.get_by_id(doc_id) is None

    async def test_malformed_document_is_reported(self, store, sub_companies):
        await store.create_document(SUB_COMPANIES, {"email": "no-name@example.com"})
        with pytest.raises(MalformedRecord):
            await sub_companies.list()

    async def test_transport_form(self, sub_companies):
        record = await sub_companies.create_record(VISTARA)
        payload = to_transport(record)
        assert payload["id"] == record.id
        assert isinstance(payload["created_at"], str)


class TestGalleries:
    async def test_list_newest_first_and_by_type(self, store, media):
        galleries = GalleryService(store, media)
        first = await galleries.create({"name": "first", "type": "Home"})
        second = await galleries.create({"name": "second"})
        third = await galleries.create({"name": "third", "type": GalleryType.HOME})

        assert [g.id for g in await galleries.list()] == [third, second, first]
        assert [g.id for g in await galleries.list_by_type(GalleryType.HOME)] == [third, first]
        assert [g.id for g in await galleries.list_by_type("gallery")] == [second]

    async def test_rejects_unknown_type(self, store, media):
        with pytest.raises(pydantic.ValidationError):
            await GalleryService(store, media).create({"name": "x", "type": "Sidebar"})


class TestNews:
    async def test_create_requires_title_slug_author(self, store):
        with pytest.raises(pydantic.ValidationError):
            await NewsService(store).create({"title": "Only a title"})

    async def test_create_defaults_to_draft(self, store):
        article = await NewsService(store).create_record(NEWS_ARTICLE)
        assert article.status == NewsStatus.DRAFT.value
        assert article.published_at is None
        assert article.keywords == []
        assert article.content == ""

    async def test_publish_flow(self, store):
        news = NewsService(store)
        older = await news.create({**NEWS_ARTICLE, "slug": "older"})
        draft = await news.create({**NEWS_ARTICLE, "slug": "draft"})
        newer = await news.create({**NEWS_ARTICLE, "slug": "newer"})

        await news.publish(older)
        await news.publish(newer)

        published = await news.list_published()
        assert [a.id for a in published] == [newer, older]
        assert all(a.status == NewsStatus.PUBLISHED.value for a in published)
        assert published[0].published_at > published[1].published_at

        assert (await news.get_published_by_slug("newer")).id == newer
        assert await news.get_published_by_slug("draft") is None
        assert draft not in [a.id for a in published]

        await news.unpublish(newer)
        unpublished = await news.get_by_id(newer)
        assert unpublished.status == NewsStatus.DRAFT.value
        assert unpublished.published_at is None
        assert [a.id for a in await news.list_published()] == [older]

    async def test_publish_missing_raises(self, store):
        with pytest.raises(NotFound):
            await NewsService(store).publish("missing")


class TestScopedEntities:
    async def test_divisions_by_sub_company(self, store):
        divisions = DivisionService(store)
        await divisions.create({"name": "Sales", "sub_company_id": "s1"})
        await divisions.create({"name": "Design", "sub_company_id": "s2"})
        await divisions.create({"name": "Build", "sub_company_id": "s1"})

        assert [d.name for d in await divisions.list_by_sub_company("s1")] == ["Build", "Sales"]
        assert [d.name for d in await divisions.list()] == ["Build", "Design", "Sales"]

    async def test_organization_members_by_name(self, store):
        organizations = OrganizationService(store)
        for name in ["Wayan", "Ayu", "Made"]:
            await organizations.create({"name": name, "description": "Director"})
        assert [m.name for m in await organizations.list()] == ["Ayu", "Made", "Wayan"]


class TestUsers:
    async def test_create_stores_no_password(self, store):
        users = UserService(store)
        user = await users.create_record(CMS_USER)

        document = await store.get_document(USERS, user.id)
        assert "password" not in document
        assert user.auth_uid == ""

    async def test_create_rejects_password(self, store):
        with pytest.raises(pydantic.ValidationError):
            await UserService(store).create({**CMS_USER, "password": "123456"})

    async def test_update_restricted_fields(self, store):
        users = UserService(store)
        user = await users.create_record(CMS_USER)

        await users.update(user.id, {"role": "admin", "name": None})
        updated = await users.get_by_id(user.id)
        assert updated.role == "admin"
        assert updated.name == CMS_USER["name"]

        with pytest.raises(pydantic.ValidationError):
            await users.update(user.id, {"email": "new@example.com"})

    async def test_list_recently_updated_first_and_lookup(self, store):
        users = UserService(store)
        first = await users.create({**CMS_USER, "email": "first@example.com"})
        second = await users.create({**CMS_USER, "email": "second@example.com"})
        await users.update(first, {"role": "admin"})

        assert [u.id for u in await users.list()] == [first, second]
        assert (await users.get_by_email("second@example.com")).id == second
        assert await users.get_by_email("nobody@example.com") is None


class TestEmails:
    async def test_append_only(self, store):
        emails = EmailService(store)
        first = await emails.create(EMAIL_MESSAGE)
        second = await emails.create({**EMAIL_MESSAGE, "message": "Follow-up"})

        listed = await emails.list()
        assert [e.id for e in listed] == [second, first]
        assert listed[1].sender == EMAIL_MESSAGE["from"]
        assert not hasattr(emails, "update")

        document = await store.get_document("emails", first)
        assert "updated_at" not in document

        await emails.delete(first)
        assert await emails.count() == 1


class TestSiteContent:
    async def test_company_profile_merges(self, store, settings):
        profiles = get_company_profile_service(store, settings)

        empty = await profiles.get()
        assert empty.name == ""
        assert empty.updated_at is None

        await profiles.update({"name": "Mandala", "slogan": "Homes in harmony"})
        profile = await profiles.update({"info_email": "info@mandala.id"})

        assert profile.name == "Mandala"
        assert profile.slogan == "Homes in harmony"
        assert profile.info_email == "info@mandala.id"
        assert profile.updated_at is not None

        stored = await store.get_document("company_profiles", settings.company_profile_id)
        assert stored is not None

    async def test_pages_overlay_defaults_and_replace(self, store):
        pages = PageService(store)
        defaults = {"hero_title": "Welcome", "hero_subtitle": "Find your home"}

        page = await pages.get("home", defaults)
        assert page.content == defaults
        assert page.updated_at is None

        await pages.save("home", {"hero_title": "Selamat datang", "banner": "x"})
        page = await pages.get("home", defaults)
        assert page.content == {
            "hero_title": "Selamat datang",
            "hero_subtitle": "Find your home",
            "banner": "x",
        }

        await pages.save("home", {"banner": "y"})
        page = await pages.get("home", defaults)
        assert page.content == {**defaults, "banner": "y"}
        assert page.updated_at is not None
