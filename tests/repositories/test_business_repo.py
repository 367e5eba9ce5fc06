import pytest

from revtrack.models.business import Business
from revtrack.repositories.sqlalchemy import SQLAlchemyBusinessRepository, SQLAlchemyItemRepository


class TestBusinessRepoCRUD:
    def test_create_and_get(self, business_repo: SQLAlchemyBusinessRepository, sample_business):
        created = business_repo.create(sample_business())

        assert created.id is not None
        assert created.uuid != ""
        assert created.name == "TableTech"
        assert created.description == "QR menus"
        assert created.created_at is not None

    def test_get_by_id_not_found(self, business_repo: SQLAlchemyBusinessRepository):
        assert business_repo.get_by_id(9999) is None

    def test_get_by_uuid(self, business_repo: SQLAlchemyBusinessRepository, sample_business):
        created = business_repo.create(sample_business())
        fetched = business_repo.get_by_uuid(created.uuid)

        assert fetched is not None
        assert fetched.id == created.id

    def test_get_by_uuid_not_found(self, business_repo: SQLAlchemyBusinessRepository):
        assert business_repo.get_by_uuid("nonexistent") is None

    def test_list_all_sorted_by_name(self, business_repo: SQLAlchemyBusinessRepository, sample_business):
        business_repo.create(sample_business(name="WishWeb"))
        business_repo.create(sample_business(name="Carlendify"))
        business_repo.create(sample_business(name="TableTech"))

        assert [b.name for b in business_repo.list_all()] == ["Carlendify", "TableTech", "WishWeb"]

    def test_list_all_empty(self, business_repo: SQLAlchemyBusinessRepository):
        assert business_repo.list_all() == []

    def test_update(self, business_repo: SQLAlchemyBusinessRepository, sample_business):
        created = business_repo.create(sample_business())
        created.name = "TableTech BV"
        updated = business_repo.update(created)

        assert updated.name == "TableTech BV"
        assert business_repo.get_by_id(created.id).name == "TableTech BV"

    def test_update_without_id(self, business_repo: SQLAlchemyBusinessRepository):
        with pytest.raises(ValueError):
            business_repo.update(Business(name="Nope"))


class TestBusinessRepoDelete:
    def test_soft_delete(self, business_repo: SQLAlchemyBusinessRepository, sample_business):
        created = business_repo.create(sample_business())
        business_repo.delete(created.id)

        assert business_repo.get_by_id(created.id) is None
        assert business_repo.list_all() == []

    def test_delete_hides_items(
        self,
        business_repo: SQLAlchemyBusinessRepository,
        item_repo: SQLAlchemyItemRepository,
        sample_business,
        sample_recurring,
    ):
        business = business_repo.create(sample_business())
        other = business_repo.create(sample_business(name="WishWeb"))
        item_repo.create(sample_recurring(business_id=business.id))
        kept = item_repo.create(sample_recurring(business_id=other.id))

        business_repo.delete(business.id)

        assert item_repo.list_by_business(business.id) == []
        assert [i.id for i in item_repo.list_all()] == [kept.id]
