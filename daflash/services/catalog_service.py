from __future__ import annotations

import logging

from daflash.errors import DocumentNotFoundError
from daflash.models.catalog import CatalogItem, CatalogItemInput
from daflash.repositories.base import CatalogRepository

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, repo: CatalogRepository) -> None:
        self.repo = repo

    def create_item(self, data: CatalogItemInput) -> CatalogItem:
        result = self.repo.create(CatalogItem(**data.model_dump()))
        logger.info(
            "Catalog item created: uuid=%s, name=%s, price=%s, billing=%s",
            result.uuid,
            result.name,
            result.unit_price,
            result.billing_type.value,
        )
        return result

    def list_items(self) -> list[CatalogItem]:
        result = self.repo.list_all()
        logger.debug("Listed %d catalog items", len(result))
        return result

    def get_item(self, uuid: str) -> CatalogItem:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_item uuid=%s found=%s", uuid, result is not None)
        if result is None:
            raise DocumentNotFoundError("Catalog item", uuid)
        return result

    def update_item(self, uuid: str, data: CatalogItemInput) -> CatalogItem:
        existing = self.get_item(uuid)
        result = self.repo.update(existing.model_copy(update=data.model_dump()))
        logger.info("Catalog item updated: uuid=%s, name=%s", result.uuid, result.name)
        return result

    def delete_item(self, uuid: str) -> None:
        self.get_item(uuid)
        self.repo.delete(uuid)
        logger.info("Catalog item deleted: uuid=%s", uuid)
