from __future__ import annotations

import logging

from revtrack.models.business import Business
from revtrack.repositories.base import BusinessRepository

logger = logging.getLogger(__name__)


class BusinessService:
    def __init__(self, repo: BusinessRepository) -> None:
        self.repo = repo

    def create_business(self, name: str, description: str = "") -> Business:
        name = name.strip()
        if not name:
            raise ValueError("Business name is required")
        result = self.repo.create(Business(name=name, description=description.strip()))
        logger.info("Business created: id=%s, name=%s", result.id, result.name)
        return result

    def list_businesses(self) -> list[Business]:
        result = self.repo.list_all()
        logger.debug("Listed %d businesses", len(result))
        return result

    def get_business(self, business_id: int) -> Business | None:
        result = self.repo.get_by_id(business_id)
        logger.debug("get_business id=%s found=%s", business_id, result is not None)
        return result

    def rename_business(self, business: Business, name: str) -> Business:
        name = name.strip()
        if not name:
            raise ValueError("Business name is required")
        business = business.model_copy(update={"name": name})
        result = self.repo.update(business)
        logger.info("Business updated: id=%s, name=%s", result.id, result.name)
        return result

    def delete_business(self, business_id: int) -> None:
        self.repo.delete(business_id)
        logger.info("Business %s soft-deleted along with its items", business_id)
