"""
Pydantic schemas for CMS documents.

Every entity has a *fields* model, whose defaults are the template applied
on create, and a *record* model describing a stored document with its id and
timestamps. Records require their key fields so a document missing one is
reported as malformed instead of silently rendered.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MalformedRecord


class GalleryType(str, Enum):
    """Where a gallery item is shown"""
    HOME = 'Home'
    GALLERY = 'gallery'


class MediaType(str, Enum):
    """Kind of media attached to a gallery item"""
    PHOTO = 'photo'
    VIDEO = 'video'
    VIDEO_MOBILE = 'video_mobile'
    VIDEO_DESKTOP = 'video_desktop'


class NewsStatus(str, Enum):
    """Publication state of a news article"""
    DRAFT = 'draft'
    PUBLISHED = 'published'


class DocumentFields(BaseModel):
    """Base for caller-writable fields; unknown keys are rejected"""
    model_config = ConfigDict(extra="forbid", use_enum_values=True, populate_by_name=True)


RECORD_CONFIG = ConfigDict(extra="ignore", use_enum_values=True, populate_by_name=True)


# ---------------------------------------------------------------------- #
# Sub-companies
# ---------------------------------------------------------------------- #

class SubCompanyFields(DocumentFields):
    """Schema for sub-company documents"""
    name: str = Field("", description="Sub-company name")
    email: str = Field("", description="Contact email")
    mobile_phone: str = Field("", description="Contact phone")
    address: str = Field("", description="Postal address")
    description: str = Field("", description="Profile text")
    logo: str = Field("", description="Logo media URL")
    facebook: str = Field("", description="Facebook page URL")
    instagram: str = Field("", description="Instagram profile URL")
    tiktok: str = Field("", description="TikTok profile URL")
    youtube: str = Field("", description="YouTube channel URL")


class SubCompany(SubCompanyFields):
    model_config = RECORD_CONFIG
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------- #
# Gallery
# ---------------------------------------------------------------------- #

class GalleryImage(BaseModel):
    """Media entry embedded in a gallery item"""
    model_config = ConfigDict(extra="ignore", use_enum_values=True)
    type: MediaType = Field(MediaType.PHOTO, description="Media kind")
    url: str = Field(..., description="Media URL issued by the media store")


class GalleryItemFields(DocumentFields):
    """Schema for gallery documents"""
    name: str = Field("", description="Gallery item name")
    type: GalleryType = Field(GalleryType.GALLERY, description="Placement of the item")
    images: List[GalleryImage] = Field(default_factory=list, description="Owned media, in display order")


class GalleryItem(GalleryItemFields):
    model_config = RECORD_CONFIG
    id: str
    name: str
    type: GalleryType
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------- #
# News
# ---------------------------------------------------------------------- #

class NewsArticleFields(DocumentFields):
    """Schema for news documents"""
    title: str = Field("", description="Headline")
    slug: str = Field("", description="URL slug")
    author: str = Field("", description="Author name")
    content: str = Field("", description="Article body")
    thumbnail: str = Field("", description="Thumbnail media URL")
    keywords: List[str] = Field(default_factory=list, description="SEO keywords")
    status: NewsStatus = Field(NewsStatus.DRAFT, description="Publication state")
    published_at: Optional[datetime] = Field(None, description="Publication timestamp")

    @field_validator('keywords')
    def unique_keywords(cls, v):
        """Keywords behave as a set; keep first occurrence order"""
        return list(dict.fromkeys(v))


class NewsArticleCreate(NewsArticleFields):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)


class NewsArticle(NewsArticleFields):
    model_config = RECORD_CONFIG
    id: str
    title: str
    slug: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------- #
# Organization, divisions, benefits
# ---------------------------------------------------------------------- #

class OrganizationMemberFields(DocumentFields):
    """Schema for organization member documents"""
    name: str = Field("", description="Member name")
    description: str = Field("", description="Role or biography")
    photo: str = Field("", description="Portrait media URL")


class OrganizationMember(OrganizationMemberFields):
    model_config = RECORD_CONFIG
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class DivisionFields(DocumentFields):
    """Schema for division documents"""
    name: str = Field("", description="Division name")
    description: str = Field("", description="Division description")
    icon: str = Field("", description="Icon glyph or URL")
    sub_company_id: str = Field("", description="Owning sub-company id")


class Division(DivisionFields):
    model_config = RECORD_CONFIG
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class BenefitFields(DocumentFields):
    """Schema for benefit documents"""
    name: str = Field("", description="Benefit name")
    description: str = Field("", description="Benefit description")
    icon: str = Field("", description="Icon glyph or URL")
    sub_company_id: str = Field("", description="Owning sub-company id")


class Benefit(BenefitFields):
    model_config = RECORD_CONFIG
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------- #
# CMS users and emails
# ---------------------------------------------------------------------- #

class CMSUserFields(DocumentFields):
    """Schema for CMS user documents; credentials live with the identity provider"""
    name: str = Field("", description="Display name")
    email: str = Field("", description="Login email")
    role: str = Field("", description="CMS role")
    auth_uid: str = Field("", description="Subject id at the identity provider")


class CMSUserCreate(CMSUserFields):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)


class CMSUserUpdate(DocumentFields):
    name: Optional[str] = None
    role: Optional[str] = None
    auth_uid: Optional[str] = None


class CMSUser(CMSUserFields):
    model_config = RECORD_CONFIG
    id: str
    email: str
    created_at: datetime
    updated_at: datetime


class EmailMessageFields(DocumentFields):
    """Schema for email documents"""
    sender: str = Field("", alias="from", description="Sender address")
    to: str = Field("", description="Recipient address")
    message: str = Field("", description="Message body")


class EmailMessage(EmailMessageFields):
    model_config = RECORD_CONFIG
    id: str
    sender: str = Field(..., alias="from")
    to: str
    created_at: datetime


# ---------------------------------------------------------------------- #
# Site-wide singletons
# ---------------------------------------------------------------------- #

class CompanyProfileFields(DocumentFields):
    """Schema for the company profile document"""
    address: str = ""
    admin_email: str = ""
    description: str = ""
    facebook: str = ""
    info_email: str = ""
    instagram: str = ""
    logo: str = ""
    mobile_phone: str = ""
    name: str = ""
    privacy_policy: str = ""
    slogan: str = ""
    term_condition: str = ""
    tiktok: str = ""
    youtube: str = ""


class CompanyProfile(CompanyProfileFields):
    model_config = RECORD_CONFIG
    updated_at: Optional[datetime] = None


class PageContent(BaseModel):
    """Free-form content overrides for one public page"""
    model_config = ConfigDict(extra="ignore")
    name: str
    content: Dict[str, Any] = Field(default_factory=dict)
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------------- #
# Conversion helpers
# ---------------------------------------------------------------------- #

RecordT = TypeVar("RecordT", bound=BaseModel)


def parse_record(model: Type[RecordT], collection: str, document: Dict[str, Any]) -> RecordT:
    """Schema-checked deserialization of a stored document"""
    try:
        return model.model_validate(document)
    except ValidationError as e:
        raise MalformedRecord(
            collection,
            str(document.get("id", "<unknown>")),
            e.errors(include_url=False, include_context=False),
        ) from e


def to_transport(records: Union[BaseModel, Iterable[BaseModel], None]) -> Any:
    """JSON-safe form of records, timestamps rendered as ISO-8601 strings"""
    if records is None:
        return None
    if isinstance(records, BaseModel):
        return records.model_dump(mode="json", by_alias=True)
    return [record.model_dump(mode="json", by_alias=True) for record in records]
