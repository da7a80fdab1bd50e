"""Marketing-site content backed by the document store.

Each content type is stored as a JSON payload under its ``doc_type``. While
the store holds nothing of a type (and demo content is enabled), reads return
built-in placeholder records. Saving a placeholder persists a new document;
deleting one does nothing.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from daflash import demo_content
from daflash.errors import DocumentNotFoundError
from daflash.models.content import (
    ContentDocument,
    LandingPageContent,
    PortfolioSiteContent,
    PricingPlanContent,
    ServiceContent,
    SiteSettingsContent,
    TestimonialContent,
)
from daflash.models.document_ref import DocumentRef, PersistedRef, PlaceholderRef
from daflash.repositories.base import ContentRepository, StoredContent

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=ContentDocument)

_DEMO_LISTS: dict[str, list[ContentDocument]] = {
    ServiceContent.doc_type: demo_content.DEMO_SERVICES,
    PricingPlanContent.doc_type: demo_content.DEMO_PRICING_PLANS,
    PortfolioSiteContent.doc_type: demo_content.DEMO_PORTFOLIO_SITES,
    TestimonialContent.doc_type: demo_content.DEMO_TESTIMONIALS,
    LandingPageContent.doc_type: list(demo_content.DEMO_LANDING_PAGES.values()),
    SiteSettingsContent.doc_type: [demo_content.DEMO_SITE_SETTINGS],
}


def _by_order(documents: list[D]) -> list[D]:
    return sorted(documents, key=lambda doc: getattr(doc, "order", 0))


class ContentService:
    def __init__(self, repo: ContentRepository, demo_enabled: bool = True) -> None:
        self.repo = repo
        self.demo_enabled = demo_enabled

    @staticmethod
    def _hydrate(model: type[D], stored: StoredContent) -> D:
        return model.model_validate(
            {**stored.payload, "ref": PersistedRef(uuid=stored.uuid), "updated_at": stored.updated_at}
        )

    def _demo(self, model: type[D]) -> list[D]:
        if not self.demo_enabled:
            return []
        return [doc.model_copy(deep=True) for doc in _DEMO_LISTS.get(model.doc_type, [])]  # type: ignore[misc]

    def list_documents(self, model: type[D]) -> list[D]:
        stored = self.repo.list_by_type(model.doc_type)
        if not stored:
            result = self._demo(model)
            logger.debug("No stored %s documents, serving %d placeholders", model.doc_type, len(result))
            return result
        logger.debug("Listed %d %s documents", len(stored), model.doc_type)
        return [self._hydrate(model, row) for row in stored]

    def get_document(self, model: type[D], ref: DocumentRef) -> D:
        if isinstance(ref, PlaceholderRef):
            for doc in self._demo(model):
                if isinstance(doc.ref, PlaceholderRef) and doc.ref.key == ref.key:
                    return doc
            raise DocumentNotFoundError(model.doc_type, ref.key)
        stored = self.repo.get_by_uuid(model.doc_type, ref.uuid)
        logger.debug("get_document %s uuid=%s found=%s", model.doc_type, ref.uuid, stored is not None)
        if stored is None:
            raise DocumentNotFoundError(model.doc_type, ref.uuid)
        return self._hydrate(model, stored)

    def save_document(self, document: D) -> D:
        """Update a persisted document, or persist a new one (including from a placeholder)."""
        model = type(document)
        ref = document.ref
        if isinstance(ref, PersistedRef):
            stored = self.repo.update(model.doc_type, ref.uuid, document.payload())
            if stored is None:
                raise DocumentNotFoundError(model.doc_type, ref.uuid)
            logger.info("%s updated: uuid=%s", model.doc_type, ref.uuid)
            return self._hydrate(model, stored)

        stored = self.repo.create(model.doc_type, document.payload())
        if isinstance(ref, PlaceholderRef):
            logger.info("%s placeholder %s persisted as uuid=%s", model.doc_type, ref.key, stored.uuid)
        else:
            logger.info("%s created: uuid=%s", model.doc_type, stored.uuid)
        return self._hydrate(model, stored)

    def delete_document(self, model: type[D], ref: DocumentRef) -> None:
        if isinstance(ref, PlaceholderRef):
            logger.info("Ignoring delete of %s placeholder %s", model.doc_type, ref.key)
            return
        if self.repo.get_by_uuid(model.doc_type, ref.uuid) is None:
            raise DocumentNotFoundError(model.doc_type, ref.uuid)
        self.repo.delete(model.doc_type, ref.uuid)
        logger.info("%s deleted: uuid=%s", model.doc_type, ref.uuid)

    # Public site reads

    def active_services(self) -> list[ServiceContent]:
        return _by_order([s for s in self.list_documents(ServiceContent) if s.is_active])

    def service_by_slug(self, slug: str) -> ServiceContent | None:
        for service in self.active_services():
            if service.slug == slug:
                return service
        return None

    def pricing_plans(self) -> list[PricingPlanContent]:
        return _by_order(self.list_documents(PricingPlanContent))

    def portfolio_sites(self) -> list[PortfolioSiteContent]:
        return _by_order([p for p in self.list_documents(PortfolioSiteContent) if p.is_active])

    def testimonials(self, featured_only: bool = False) -> list[TestimonialContent]:
        result = [t for t in self.list_documents(TestimonialContent) if t.is_active]
        if featured_only:
            result = [t for t in result if t.is_featured]
        return _by_order(result)

    # Singletons

    def _stored_landing_page(self, page_id: str) -> LandingPageContent | None:
        for row in self.repo.list_by_type(LandingPageContent.doc_type):
            if row.payload.get("page_id") == page_id:
                return self._hydrate(LandingPageContent, row)
        return None

    def landing_page(self, page_id: str) -> LandingPageContent | None:
        stored = self._stored_landing_page(page_id)
        if stored is not None:
            return stored
        if not self.demo_enabled:
            return None
        demo = demo_content.DEMO_LANDING_PAGES.get(page_id)
        return demo.model_copy(deep=True) if demo is not None else None

    def save_landing_page(self, page: LandingPageContent) -> LandingPageContent:
        """Upsert by ``page_id``; there is at most one stored document per page."""
        existing = self._stored_landing_page(page.page_id)
        if existing is not None:
            page = page.model_copy(update={"ref": existing.ref})
        else:
            page = page.model_copy(update={"ref": None})
        return self.save_document(page)

    def site_settings(self) -> SiteSettingsContent:
        stored = self.repo.list_by_type(SiteSettingsContent.doc_type)
        if stored:
            return self._hydrate(SiteSettingsContent, stored[0])
        if self.demo_enabled:
            return demo_content.DEMO_SITE_SETTINGS.model_copy(deep=True)
        return SiteSettingsContent()

    def save_site_settings(self, site: SiteSettingsContent) -> SiteSettingsContent:
        stored = self.repo.list_by_type(SiteSettingsContent.doc_type)
        if stored:
            site = site.model_copy(update={"ref": PersistedRef(uuid=stored[0].uuid)})
        else:
            site = site.model_copy(update={"ref": None})
        return self.save_document(site)

    def default_contract_terms(self) -> str:
        return self.site_settings().default_contract_terms
