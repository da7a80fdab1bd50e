from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from daflash import clock
from daflash.models.invoice import InvoiceDraft, InvoiceStatus
from daflash.services.invoice_service import InvoiceComposer
from web.deps import get_invoice_service, read_json
from web.responses import error_response, json_response
from web.serializers import serialize_invoice

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/invoices")


def _draft(request: Request, body: dict) -> InvoiceDraft:
    defaults = get_invoice_service(request).new_draft()
    return InvoiceDraft.model_validate({**defaults.model_dump(mode="json"), **body})


@router.get("")
async def invoice_list(request: Request):
    service = get_invoice_service(request)
    today = clock.today()
    invoices = service.list_invoices()
    logger.info("GET %s, %d invoices", request.url.path, len(invoices))
    return json_response([serialize_invoice(i, today) for i in invoices])


@router.get("/draft")
async def invoice_new_draft(request: Request):
    return json_response(_draft(request, {}).model_dump(mode="json"))


@router.post("/preview")
async def invoice_preview(request: Request):
    body = await read_json(request)
    return json_response(get_invoice_service(request).preview(_draft(request, body)))


@router.post("")
async def invoice_create(request: Request):
    body = await read_json(request)
    invoice = get_invoice_service(request).create_invoice(_draft(request, body))
    return json_response(serialize_invoice(invoice, clock.today()), status_code=201)


@router.get("/{uuid}")
async def invoice_detail(request: Request, uuid: str):
    invoice = get_invoice_service(request).get_invoice(uuid)
    return json_response(serialize_invoice(invoice, clock.today()))


@router.put("/{uuid}")
async def invoice_update(request: Request, uuid: str):
    body = await read_json(request)
    service = get_invoice_service(request)
    current = InvoiceComposer.from_invoice(service.get_invoice(uuid))
    base = InvoiceDraft(
        client_uuid=current.client_uuid,
        line_items=current.line_items,
        tax=current.tax,
        issue_date=current.issue_date,
        due_date=current.due_date,
        notes=current.notes,
    )
    draft = InvoiceDraft.model_validate({**base.model_dump(mode="json"), **body})
    invoice = service.update_invoice(uuid, draft)
    return json_response(serialize_invoice(invoice, clock.today()))


@router.post("/{uuid}/status")
async def invoice_status(request: Request, uuid: str):
    body = await read_json(request)
    raw = str(body.get("status", ""))
    try:
        target = InvoiceStatus(raw)
    except ValueError:
        logger.warning("Invoice %s: unknown status %r", uuid, raw)
        return error_response(f"Unknown invoice status: {raw}", 400)
    invoice = get_invoice_service(request).change_status(uuid, target)
    return json_response(serialize_invoice(invoice, clock.today()))


@router.delete("/{uuid}")
async def invoice_delete(request: Request, uuid: str):
    get_invoice_service(request).delete_invoice(uuid)
    return json_response({"deleted": uuid})
