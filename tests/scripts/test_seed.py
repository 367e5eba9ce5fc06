from unittest.mock import patch

from sqlalchemy import Connection, text

from revtrack.models.month import year_months
from revtrack.repositories.sqlalchemy import SQLAlchemyBusinessRepository, SQLAlchemyItemRepository
from revtrack.services.revenue_engine import compute_series


class TestSeed:
    def test_seed_creates_demo_data(self, db_connection: Connection):
        from revtrack.scripts import seed as seed_module

        with patch("revtrack.db.get_connection", return_value=db_connection):
            seed_module.seed()

        businesses = SQLAlchemyBusinessRepository(db_connection).list_all()
        assert [b.name for b in businesses] == ["Carlendify", "TableTech", "WishWeb"]

        items = SQLAlchemyItemRepository(db_connection).list_all()
        assert len(items) == 4
        series = compute_series(items, "cash", year_months(2025))
        assert [p.amount for p in series] == [120, 1160, 0, 0, 170, 330, 80, 80, 80, 80, 80, 80]

    def test_seed_does_not_mutate_templates(self, db_connection: Connection):
        from revtrack.scripts import seed as seed_module

        with patch("revtrack.db.get_connection", return_value=db_connection):
            seed_module.seed()

        assert all(item.id is None for item in seed_module.DEMO_ITEMS)

    def test_truncate(self, db_connection: Connection):
        from revtrack.scripts import seed as seed_module

        with patch("revtrack.db.get_connection", return_value=db_connection):
            seed_module.seed()
        with patch("revtrack.scripts.seed.get_connection", return_value=db_connection):
            seed_module.truncate()

        for table in seed_module.TABLES_TO_TRUNCATE:
            assert db_connection.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar() == 0

    @patch("revtrack.scripts.seed.seed")
    @patch("revtrack.scripts.seed.truncate")
    @patch("revtrack.scripts.seed.initialize_db")
    @patch("revtrack.scripts.seed.reconfigure")
    @patch("revtrack.scripts.seed.configure_logging")
    def test_main(self, mock_logging, mock_reconfigure, mock_init_db, mock_truncate, mock_seed):
        from revtrack.scripts.seed import main

        main()
        mock_init_db.assert_called_once()
        mock_truncate.assert_called_once()
        mock_seed.assert_called_once()
