"""Marketing-site documents edited from the back office."""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator, model_validator

from daflash.models.catalog import BillingType
from daflash.models.document_ref import DocumentRef

_URL = TypeAdapter(HttpUrl)
_SLUG_STRIP = re.compile(r"[^a-z0-9]+")

LandingPageId = Literal["realtors", "contractors"]
LANDING_PAGE_IDS: tuple[str, ...] = ("realtors", "contractors")


def slugify(value: str) -> str:
    return _SLUG_STRIP.sub("-", value.lower()).strip("-")


def _optional_url(value: str) -> str:
    value = value.strip()
    if value:
        _URL.validate_python(value)
    return value


class ContentDocument(BaseModel):
    """Base for every content type; ``ref`` is filled in on the way out of the store."""

    doc_type: ClassVar[str]

    ref: DocumentRef | None = None
    updated_at: datetime | None = None

    def payload(self) -> dict:
        return self.model_dump(mode="json", exclude={"ref", "updated_at"})


class ServiceHighlight(BaseModel):
    title: str
    description: str = ""


class ServiceContent(ContentDocument):
    doc_type: ClassVar[str] = "service"

    name: str = Field(min_length=1)
    slug: str = ""
    icon: str = "Globe"
    tagline: str = ""
    description: str = ""
    highlights: list[ServiceHighlight] = []
    order: int = 0
    is_active: bool = True

    @model_validator(mode="after")
    def _default_slug(self) -> ServiceContent:
        if not self.slug:
            self.slug = slugify(self.name)
        return self


class PricingPlanContent(ContentDocument):
    doc_type: ClassVar[str] = "pricing_plan"

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    original_price: Decimal | None = None
    billing_frequency: BillingType = BillingType.ONE_TIME
    features: list[str] = []
    badge: str | None = None
    cta_text: str = "Get Started"
    cta_link: str = "/contact"
    order: int = 0


class PortfolioSiteContent(ContentDocument):
    doc_type: ClassVar[str] = "portfolio_site"

    client_name: str = Field(min_length=1)
    logo: str | None = None  # asset id in the external asset store
    website_url: str = ""
    order: int = 0
    is_active: bool = True

    @field_validator("website_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        return _optional_url(value)


class TestimonialContent(ContentDocument):
    doc_type: ClassVar[str] = "testimonial"
    __test__: ClassVar[bool] = False  # keep pytest from collecting it

    client_name: str = Field(min_length=1)
    quote: str = Field(min_length=1)
    company_name: str = ""
    company_url: str = ""
    is_featured: bool = False
    order: int = 0
    is_active: bool = True

    @field_validator("company_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        return _optional_url(value)


class LandingPageFeature(BaseModel):
    icon: str = "Star"
    title: str = Field(min_length=1)
    description: str = ""
    screenshot: str | None = None


class LandingPageContent(ContentDocument):
    doc_type: ClassVar[str] = "landing_page"

    page_id: LandingPageId
    hero_headline: str = ""
    hero_subtitle: str = ""
    hero_image: str | None = None
    features: list[LandingPageFeature] = []
    white_label_text: str = ""
    cta_text: str = "Contact for Quote"
    cta_link: str = "/contact"


class AboutStat(BaseModel):
    value: str
    label: str


class SiteSettingsContent(ContentDocument):
    doc_type: ClassVar[str] = "site_settings"

    hero_headline: str = ""
    hero_subtitle: str = ""
    hero_cta_text: str = "Get Started"
    hero_cta_link: str = "/contact"
    hero_image: str | None = None
    about_headline: str = ""
    about_text: str = ""
    about_stats: list[AboutStat] = []
    contact_phone: str = ""
    contact_email: str = ""
    contact_address: str = ""
    service_area: str = ""
    office_hours: str = ""
    company_name: str = "daflash"
    company_specialty: str = ""
    logo: str | None = None
    favicon: str | None = None
    social_instagram: str = ""
    social_facebook: str = ""
    social_linkedin: str = ""
    social_youtube: str = ""
    default_contract_terms: str = ""
