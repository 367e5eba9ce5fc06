import pytest
from sqlalchemy import Connection

from revtrack.repositories.sqlalchemy import SQLAlchemyBusinessRepository, SQLAlchemyItemRepository


@pytest.fixture()
def business_repo(db_connection: Connection) -> SQLAlchemyBusinessRepository:
    return SQLAlchemyBusinessRepository(db_connection)


@pytest.fixture()
def item_repo(db_connection: Connection) -> SQLAlchemyItemRepository:
    return SQLAlchemyItemRepository(db_connection)
