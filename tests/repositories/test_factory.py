from unittest.mock import MagicMock, patch

from revtrack.repositories.factory import get_business_repository, get_item_repository
from revtrack.repositories.sqlalchemy import SQLAlchemyBusinessRepository, SQLAlchemyItemRepository


class TestRepoFactory:
    @patch("revtrack.db.get_connection")
    def test_get_business_repository(self, mock_conn):
        mock_conn.return_value = MagicMock()
        repo = get_business_repository()
        assert isinstance(repo, SQLAlchemyBusinessRepository)

    @patch("revtrack.db.get_connection")
    def test_get_item_repository(self, mock_conn):
        mock_conn.return_value = MagicMock()
        repo = get_item_repository()
        assert isinstance(repo, SQLAlchemyItemRepository)
        assert repo.conn is mock_conn.return_value
