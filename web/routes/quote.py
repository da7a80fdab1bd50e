from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from daflash import clock
from daflash.models.quote import QuoteDraft, QuoteStatus
from web.deps import get_content_service, get_invoice_service, get_quote_service, read_json
from web.responses import error_response, json_response
from web.serializers import serialize_invoice, serialize_quote

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/quotes")


def _draft(request: Request, body: dict) -> QuoteDraft:
    """Overlay the submitted fields on a fresh draft carrying today's defaults."""
    defaults = get_quote_service(request).new_draft(
        default_contract_terms=get_content_service(request).default_contract_terms()
    )
    return QuoteDraft.model_validate({**defaults.model_dump(mode="json"), **body})


@router.get("")
async def quote_list(request: Request):
    service = get_quote_service(request)
    today = clock.today()
    quotes = service.list_quotes()
    logger.info("GET %s, %d quotes", request.url.path, len(quotes))
    return json_response([serialize_quote(q, today) for q in quotes])


@router.get("/draft")
async def quote_new_draft(request: Request):
    return json_response(_draft(request, {}).model_dump(mode="json"))


@router.post("/preview")
async def quote_preview(request: Request):
    body = await read_json(request)
    return json_response(get_quote_service(request).preview(_draft(request, body)))


@router.post("")
async def quote_create(request: Request):
    body = await read_json(request)
    quote = get_quote_service(request).create_quote(_draft(request, body))
    return json_response(serialize_quote(quote, clock.today()), status_code=201)


@router.get("/{uuid}")
async def quote_detail(request: Request, uuid: str):
    quote = get_quote_service(request).get_quote(uuid)
    return json_response(serialize_quote(quote, clock.today()))


@router.put("/{uuid}")
async def quote_update(request: Request, uuid: str):
    body = await read_json(request)
    service = get_quote_service(request)
    current = service.get_quote(uuid)
    base = QuoteDraft(
        client_uuid=current.client_uuid,
        one_time_items=current.one_time_items,
        recurring_items=current.recurring_items,
        tax=current.tax,
        contract_terms=current.contract_terms,
        expiry_date=current.expiry_date.isoformat(),
    )
    draft = QuoteDraft.model_validate({**base.model_dump(mode="json"), **body})
    quote = service.update_quote(uuid, draft)
    return json_response(serialize_quote(quote, clock.today()))


@router.post("/{uuid}/status")
async def quote_status(request: Request, uuid: str):
    body = await read_json(request)
    raw = str(body.get("status", ""))
    try:
        target = QuoteStatus(raw)
    except ValueError:
        logger.warning("Quote %s: unknown status %r", uuid, raw)
        return error_response(f"Unknown quote status: {raw}", 400)
    quote = get_quote_service(request).change_status(uuid, target)
    return json_response(serialize_quote(quote, clock.today()))


@router.post("/{uuid}/invoice")
async def quote_to_invoice(request: Request, uuid: str):
    invoice = get_invoice_service(request).create_from_quote(uuid)
    return json_response(serialize_invoice(invoice, clock.today()), status_code=201)


@router.delete("/{uuid}")
async def quote_delete(request: Request, uuid: str):
    get_quote_service(request).delete_quote(uuid)
    return json_response({"deleted": uuid})
