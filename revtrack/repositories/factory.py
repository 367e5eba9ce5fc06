from revtrack.repositories.base import BusinessRepository, ItemRepository


def get_business_repository() -> BusinessRepository:
    from revtrack.db import get_connection
    from revtrack.repositories.sqlalchemy import SQLAlchemyBusinessRepository

    return SQLAlchemyBusinessRepository(get_connection())


def get_item_repository() -> ItemRepository:
    from revtrack.db import get_connection
    from revtrack.repositories.sqlalchemy import SQLAlchemyItemRepository

    return SQLAlchemyItemRepository(get_connection())
