from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from daflash.errors import DocumentNotFoundError
from daflash.models.content import (
    LANDING_PAGE_IDS,
    ContentDocument,
    LandingPageContent,
    PortfolioSiteContent,
    PricingPlanContent,
    ServiceContent,
    SiteSettingsContent,
    TestimonialContent,
)
from daflash.models.document_ref import DocumentRef, PersistedRef, PlaceholderRef
from web.deps import get_content_service, read_json
from web.responses import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin")

COLLECTIONS: dict[str, type[ContentDocument]] = {
    "services": ServiceContent,
    "pricing": PricingPlanContent,
    "portfolio": PortfolioSiteContent,
    "testimonials": TestimonialContent,
}


def _model(collection: str) -> type[ContentDocument]:
    model = COLLECTIONS.get(collection)
    if model is None:
        raise DocumentNotFoundError("collection", collection)
    return model


def _parse(model: type[ContentDocument], body: dict, ref: DocumentRef | None) -> ContentDocument:
    body = {k: v for k, v in body.items() if k not in ("ref", "updated_at")}
    return model.model_validate({**body, "ref": ref})


@router.get("/landing-pages/{page_id}")
async def landing_page_detail(request: Request, page_id: str):
    page = get_content_service(request).landing_page(page_id) if page_id in LANDING_PAGE_IDS else None
    if page is None:
        raise DocumentNotFoundError("landing page", page_id)
    return json_response(page.model_dump(mode="json"))


@router.put("/landing-pages/{page_id}")
async def landing_page_save(request: Request, page_id: str):
    if page_id not in LANDING_PAGE_IDS:
        raise DocumentNotFoundError("landing page", page_id)
    body = await read_json(request)
    page = _parse(LandingPageContent, {**body, "page_id": page_id}, None)
    saved = get_content_service(request).save_landing_page(page)
    return json_response(saved.model_dump(mode="json"))


@router.get("/settings")
async def settings_detail(request: Request):
    return json_response(get_content_service(request).site_settings().model_dump(mode="json"))


@router.put("/settings")
async def settings_save(request: Request):
    body = await read_json(request)
    site = _parse(SiteSettingsContent, body, None)
    saved = get_content_service(request).save_site_settings(site)
    return json_response(saved.model_dump(mode="json"))


@router.get("/{collection}")
async def content_list(request: Request, collection: str):
    model = _model(collection)
    documents = get_content_service(request).list_documents(model)
    return json_response([d.model_dump(mode="json") for d in documents])


@router.post("/{collection}")
async def content_create(request: Request, collection: str):
    model = _model(collection)
    document = _parse(model, await read_json(request), None)
    saved = get_content_service(request).save_document(document)
    return json_response(saved.model_dump(mode="json"), status_code=201)


@router.get("/{collection}/placeholders/{key}")
async def placeholder_detail(request: Request, collection: str, key: str):
    document = get_content_service(request).get_document(_model(collection), PlaceholderRef(key=key))
    return json_response(document.model_dump(mode="json"))


@router.put("/{collection}/placeholders/{key}")
async def placeholder_save(request: Request, collection: str, key: str):
    model = _model(collection)
    document = _parse(model, await read_json(request), PlaceholderRef(key=key))
    saved = get_content_service(request).save_document(document)
    return json_response(saved.model_dump(mode="json"), status_code=201)


@router.delete("/{collection}/placeholders/{key}")
async def placeholder_delete(request: Request, collection: str, key: str):
    get_content_service(request).delete_document(_model(collection), PlaceholderRef(key=key))
    return json_response({"deleted": None, "placeholder": key})


@router.get("/{collection}/{uuid}")
async def content_detail(request: Request, collection: str, uuid: str):
    document = get_content_service(request).get_document(_model(collection), PersistedRef(uuid=uuid))
    return json_response(document.model_dump(mode="json"))


@router.put("/{collection}/{uuid}")
async def content_update(request: Request, collection: str, uuid: str):
    model = _model(collection)
    document = _parse(model, await read_json(request), PersistedRef(uuid=uuid))
    saved = get_content_service(request).save_document(document)
    return json_response(saved.model_dump(mode="json"))


@router.delete("/{collection}/{uuid}")
async def content_delete(request: Request, collection: str, uuid: str):
    get_content_service(request).delete_document(_model(collection), PersistedRef(uuid=uuid))
    return json_response({"deleted": uuid})
