from __future__ import annotations

import logging

from daflash.errors import DocumentNotFoundError
from daflash.models.client import Client, ClientInput
from daflash.repositories.base import ClientRepository

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, repo: ClientRepository) -> None:
        self.repo = repo

    def create_client(self, data: ClientInput) -> Client:
        result = self.repo.create(Client(**data.model_dump()))
        logger.info("Client created: uuid=%s, name=%s", result.uuid, result.client_name)
        return result

    def list_clients(self) -> list[Client]:
        result = self.repo.list_all()
        logger.debug("Listed %d clients", len(result))
        return result

    def get_client(self, uuid: str) -> Client:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_client uuid=%s found=%s", uuid, result is not None)
        if result is None:
            raise DocumentNotFoundError("Client", uuid)
        return result

    def update_client(self, uuid: str, data: ClientInput) -> Client:
        existing = self.get_client(uuid)
        client = existing.model_copy(update=data.model_dump())
        result = self.repo.update(client)
        logger.info("Client updated: uuid=%s, name=%s", result.uuid, result.client_name)
        return result

    def delete_client(self, uuid: str) -> None:
        """Remove the client. Quotes and invoices keep pointing at its uuid."""
        self.get_client(uuid)
        self.repo.delete(uuid)
        logger.info("Client deleted: uuid=%s", uuid)
