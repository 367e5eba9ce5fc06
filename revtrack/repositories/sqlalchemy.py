from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from ulid import ULID

from revtrack.models.business import Business
from revtrack.models.item import BillingKind, Cadence, OneTimeItem, RecurringItem, VariableItem
from revtrack.repositories.base import BusinessRepository, Item, ItemRepository
from revtrack.services.revenue_engine import InvalidItemKind


def _now() -> datetime:
    return datetime.now()


def _to_date(value: date | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


class SQLAlchemyBusinessRepository(BusinessRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def create(self, business: Business) -> Business:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO businesses (uuid, name, description, created_at, updated_at) "
                "VALUES (:uuid, :name, :description, :created_at, :updated_at)"
            ),
            {
                "uuid": str(ULID()),
                "name": business.name,
                "description": business.description,
                "created_at": now,
                "updated_at": now,
            },
        )
        business_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(business_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve business after create (id={business_id})")
        return created

    @staticmethod
    def _row_to_business(row: RowMapping) -> Business:
        return Business(
            id=row["id"],
            uuid=row["uuid"],
            name=row["name"],
            description=row["description"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def get_by_id(self, business_id: int) -> Business | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM businesses WHERE id = :id AND deleted_at IS NULL"),
                {"id": business_id},
            )
            .mappings()
            .fetchone()
        )
        return self._row_to_business(row) if row is not None else None

    def get_by_uuid(self, uuid: str) -> Business | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM businesses WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        return self._row_to_business(row) if row is not None else None

    def list_all(self) -> list[Business]:
        rows = (
            self.conn.execute(text("SELECT * FROM businesses WHERE deleted_at IS NULL ORDER BY name, id"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_business(row) for row in rows]

    def update(self, business: Business) -> Business:
        if business.id is None:
            raise ValueError("Cannot update business without an id")
        self.conn.execute(
            text("UPDATE businesses SET name = :name, description = :description, updated_at = :updated_at WHERE id = :id"),
            {
                "name": business.name,
                "description": business.description,
                "updated_at": _now(),
                "id": business.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(business.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve business after update (id={business.id})")
        return result

    def delete(self, business_id: int) -> None:
        now = _now()
        try:
            self.conn.execute(
                text("UPDATE items SET deleted_at = :deleted_at WHERE business_id = :id AND deleted_at IS NULL"),
                {"deleted_at": now, "id": business_id},
            )
            self.conn.execute(
                text("UPDATE businesses SET deleted_at = :deleted_at WHERE id = :id"),
                {"deleted_at": now, "id": business_id},
            )
        except Exception:
            self.conn.rollback()
            raise
        self.conn.commit()


class SQLAlchemyItemRepository(ItemRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _item_params(item: Item) -> dict:
        params = {
            "business_id": item.business_id,
            "billing_kind": item.billing_kind.value,
            "customer": item.customer,
            "plan_name": item.plan_name,
            "notes": item.notes,
            "price": 0,
            "cadence": None,
            "start_date": None,
            "end_date": None,
        }
        if isinstance(item, RecurringItem):
            params.update(
                price=item.price,
                cadence=item.cadence.value,
                start_date=_iso(item.start_date),
                end_date=_iso(item.end_date),
            )
        elif isinstance(item, OneTimeItem):
            params.update(price=item.price, start_date=_iso(item.start_date))
        return params

    def _write_monthly_amounts(self, item_id: int, item: Item) -> None:
        if not isinstance(item, VariableItem):
            return
        for month, amount in sorted(item.monthly_amounts.items()):
            self.conn.execute(
                text("INSERT INTO item_monthly_amounts (item_id, month, amount) VALUES (:item_id, :month, :amount)"),
                {"item_id": item_id, "month": month, "amount": amount},
            )

    def create(self, item: Item) -> Item:
        now = _now()
        try:
            result = self.conn.execute(
                text(
                    "INSERT INTO items (uuid, business_id, billing_kind, customer, plan_name, notes, "
                    "price, cadence, start_date, end_date, created_at, updated_at) "
                    "VALUES (:uuid, :business_id, :billing_kind, :customer, :plan_name, :notes, "
                    ":price, :cadence, :start_date, :end_date, :created_at, :updated_at)"
                ),
                {**self._item_params(item), "uuid": str(ULID()), "created_at": now, "updated_at": now},
            )
            item_id = result.lastrowid
            self._write_monthly_amounts(item_id, item)
        except Exception:
            self.conn.rollback()
            raise
        self.conn.commit()
        created = self.get_by_id(item_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve item after create (id={item_id})")
        return created

    @staticmethod
    def _build_item(row: RowMapping, amount_rows: list[RowMapping]) -> Item:
        common = dict(
            id=row["id"],
            uuid=row["uuid"],
            business_id=row["business_id"],
            customer=row["customer"],
            plan_name=row["plan_name"],
            notes=row["notes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )
        try:
            kind = BillingKind(row["billing_kind"])
        except ValueError:
            raise InvalidItemKind(f"Unknown billing kind {row['billing_kind']!r} (item id={row['id']})") from None

        if kind == BillingKind.RECURRING:
            try:
                cadence = Cadence(row["cadence"])
            except ValueError:
                raise InvalidItemKind(f"Unknown cadence {row['cadence']!r} (item id={row['id']})") from None
            return RecurringItem(
                **common,
                price=row["price"],
                cadence=cadence,
                start_date=_to_date(row["start_date"]),
                end_date=_to_date(row["end_date"]),
            )
        if kind == BillingKind.ONE_TIME:
            return OneTimeItem(**common, price=row["price"], start_date=_to_date(row["start_date"]))
        return VariableItem(
            **common,
            monthly_amounts={r["month"]: r["amount"] for r in amount_rows},
        )

    def _build_items_from_rows(self, rows: list[RowMapping]) -> list[Item]:
        if not rows:
            return []
        item_ids = [row["id"] for row in rows]
        placeholders = ", ".join(f":id{i}" for i in range(len(item_ids)))
        params = {f"id{i}": iid for i, iid in enumerate(item_ids)}
        all_amounts = (
            self.conn.execute(
                text(f"SELECT * FROM item_monthly_amounts WHERE item_id IN ({placeholders}) ORDER BY month"),
                params,
            )
            .mappings()
            .fetchall()
        )
        amounts_by_item: dict[int, list[RowMapping]] = {}
        for amount_row in all_amounts:
            amounts_by_item.setdefault(amount_row["item_id"], []).append(amount_row)
        return [self._build_item(row, amounts_by_item.get(row["id"], [])) for row in rows]

    def _fetch_one(self, where: str, params: dict) -> Item | None:
        row = (
            self.conn.execute(text(f"SELECT * FROM items WHERE {where} AND deleted_at IS NULL"), params)
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._build_items_from_rows([row])[0]

    def get_by_id(self, item_id: int) -> Item | None:
        return self._fetch_one("id = :id", {"id": item_id})

    def get_by_uuid(self, uuid: str) -> Item | None:
        return self._fetch_one("uuid = :uuid", {"uuid": uuid})

    def list_all(self) -> list[Item]:
        rows = (
            self.conn.execute(text("SELECT * FROM items WHERE deleted_at IS NULL ORDER BY created_at DESC, id DESC"))
            .mappings()
            .fetchall()
        )
        return self._build_items_from_rows(list(rows))

    def list_by_business(self, business_id: int) -> list[Item]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM items WHERE business_id = :business_id AND deleted_at IS NULL "
                    "ORDER BY created_at DESC, id DESC"
                ),
                {"business_id": business_id},
            )
            .mappings()
            .fetchall()
        )
        return self._build_items_from_rows(list(rows))

    def update(self, item: Item) -> Item:
        if item.id is None:
            raise ValueError("Cannot update item without an id")
        try:
            self.conn.execute(
                text(
                    "UPDATE items SET business_id = :business_id, billing_kind = :billing_kind, "
                    "customer = :customer, plan_name = :plan_name, notes = :notes, price = :price, "
                    "cadence = :cadence, start_date = :start_date, end_date = :end_date, "
                    "updated_at = :updated_at WHERE id = :id"
                ),
                {**self._item_params(item), "updated_at": _now(), "id": item.id},
            )
            self.conn.execute(
                text("DELETE FROM item_monthly_amounts WHERE item_id = :item_id"),
                {"item_id": item.id},
            )
            self._write_monthly_amounts(item.id, item)
        except Exception:
            # the connection is shared; never leave a half-written item pending
            self.conn.rollback()
            raise
        self.conn.commit()
        result = self.get_by_id(item.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve item after update (id={item.id})")
        return result

    def delete(self, item_id: int) -> None:
        self.conn.execute(
            text("UPDATE items SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": item_id},
        )
        self.conn.commit()
