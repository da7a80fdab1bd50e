from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from daflash.models.client import ClientInput
from web.deps import get_client_service, read_json
from web.responses import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/clients")


@router.get("")
async def client_list(request: Request):
    clients = get_client_service(request).list_clients()
    return json_response([c.model_dump(mode="json") for c in clients])


@router.post("")
async def client_create(request: Request):
    data = ClientInput.model_validate(await read_json(request))
    client = get_client_service(request).create_client(data)
    return json_response(client.model_dump(mode="json"), status_code=201)


@router.get("/{uuid}")
async def client_detail(request: Request, uuid: str):
    client = get_client_service(request).get_client(uuid)
    return json_response(client.model_dump(mode="json"))


@router.put("/{uuid}")
async def client_update(request: Request, uuid: str):
    data = ClientInput.model_validate(await read_json(request))
    client = get_client_service(request).update_client(uuid, data)
    return json_response(client.model_dump(mode="json"))


@router.delete("/{uuid}")
async def client_delete(request: Request, uuid: str):
    get_client_service(request).delete_client(uuid)
    return json_response({"deleted": uuid})
