from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from daflash.models.catalog import CatalogItemInput
from web.deps import get_catalog_service, read_json
from web.responses import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/catalog")


def _serialize(item) -> dict:
    data = item.model_dump(mode="json")
    data["line_item"] = item.to_line_item().model_dump(mode="json")
    return data


@router.get("")
async def catalog_list(request: Request):
    items = get_catalog_service(request).list_items()
    return json_response([_serialize(i) for i in items])


@router.post("")
async def catalog_create(request: Request):
    data = CatalogItemInput.model_validate(await read_json(request))
    item = get_catalog_service(request).create_item(data)
    return json_response(_serialize(item), status_code=201)


@router.get("/{uuid}")
async def catalog_detail(request: Request, uuid: str):
    return json_response(_serialize(get_catalog_service(request).get_item(uuid)))


@router.put("/{uuid}")
async def catalog_update(request: Request, uuid: str):
    data = CatalogItemInput.model_validate(await read_json(request))
    item = get_catalog_service(request).update_item(uuid, data)
    return json_response(_serialize(item))


@router.delete("/{uuid}")
async def catalog_delete(request: Request, uuid: str):
    get_catalog_service(request).delete_item(uuid)
    return json_response({"deleted": uuid})
