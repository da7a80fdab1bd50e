from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from daflash.errors import DocumentNotFoundError
from daflash.models.content import LANDING_PAGE_IDS
from web.deps import get_content_service
from web.responses import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/public")


@router.get("/services")
async def services(request: Request):
    return json_response([s.model_dump(mode="json") for s in get_content_service(request).active_services()])


@router.get("/services/{slug}")
async def service_detail(request: Request, slug: str):
    service = get_content_service(request).service_by_slug(slug)
    if service is None:
        raise DocumentNotFoundError("service", slug)
    return json_response(service.model_dump(mode="json"))


@router.get("/pricing")
async def pricing(request: Request):
    return json_response([p.model_dump(mode="json") for p in get_content_service(request).pricing_plans()])


@router.get("/portfolio")
async def portfolio(request: Request):
    return json_response([p.model_dump(mode="json") for p in get_content_service(request).portfolio_sites()])


@router.get("/testimonials")
async def testimonials(request: Request, featured: bool = False):
    result = get_content_service(request).testimonials(featured_only=featured)
    return json_response([t.model_dump(mode="json") for t in result])


@router.get("/landing-pages/{page_id}")
async def landing_page(request: Request, page_id: str):
    page = get_content_service(request).landing_page(page_id) if page_id in LANDING_PAGE_IDS else None
    if page is None:
        raise DocumentNotFoundError("landing page", page_id)
    return json_response(page.model_dump(mode="json"))


@router.get("/settings")
async def site_settings(request: Request):
    return json_response(get_content_service(request).site_settings().model_dump(mode="json"))
