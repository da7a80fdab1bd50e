import pytest
from pydantic import TypeAdapter, ValidationError

from daflash.models.content import (
    LandingPageContent,
    PortfolioSiteContent,
    ServiceContent,
    TestimonialContent,
    slugify,
)
from daflash.models.document_ref import DocumentRef, PersistedRef, PlaceholderRef


class TestSlugify:
    def test_basic(self):
        assert slugify("Drone Services") == "drone-services"

    def test_punctuation(self):
        assert slugify("  IT & Support!! ") == "it-support"


class TestDocumentRef:
    def test_discriminates_persisted(self):
        ref = TypeAdapter(DocumentRef).validate_python({"kind": "persisted", "uuid": "01J0000000000000000000000A"})
        assert isinstance(ref, PersistedRef)

    def test_discriminates_placeholder(self):
        ref = TypeAdapter(DocumentRef).validate_python({"kind": "placeholder", "key": "service-1"})
        assert isinstance(ref, PlaceholderRef)
        assert ref.key == "service-1"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(DocumentRef).validate_python({"kind": "demo", "key": "x"})


class TestServiceContent:
    def test_slug_derived_from_name(self):
        assert ServiceContent(name="Online Presence").slug == "online-presence"

    def test_explicit_slug_kept(self):
        assert ServiceContent(name="Online Presence", slug="web").slug == "web"

    def test_payload_excludes_identity(self):
        service = ServiceContent(name="IT", ref=PersistedRef(uuid="01J0000000000000000000000A"))
        payload = service.payload()
        assert "ref" not in payload
        assert "updated_at" not in payload
        assert payload["name"] == "IT"


class TestUrls:
    def test_portfolio_url_validated(self):
        with pytest.raises(ValidationError):
            PortfolioSiteContent(client_name="Acme", website_url="not a url")

    def test_portfolio_blank_url_allowed(self):
        assert PortfolioSiteContent(client_name="Acme").website_url == ""

    def test_url_kept_verbatim(self):
        site = PortfolioSiteContent(client_name="Acme", website_url="https://acme.com")
        assert site.website_url == "https://acme.com"

    def test_testimonial_company_url(self):
        with pytest.raises(ValidationError):
            TestimonialContent(client_name="Jo", quote="Great", company_url="acme")


class TestLandingPage:
    def test_page_id_restricted(self):
        with pytest.raises(ValidationError):
            LandingPageContent(page_id="plumbers")

    def test_known_page(self):
        assert LandingPageContent(page_id="realtors").cta_link == "/contact"
