from abc import ABC, abstractmethod

from revtrack.models.business import Business
from revtrack.models.item import OneTimeItem, RecurringItem, VariableItem

Item = RecurringItem | OneTimeItem | VariableItem


class BusinessRepository(ABC):
    @abstractmethod
    def create(self, business: Business) -> Business: ...

    @abstractmethod
    def get_by_id(self, business_id: int) -> Business | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Business | None: ...

    @abstractmethod
    def list_all(self) -> list[Business]: ...

    @abstractmethod
    def update(self, business: Business) -> Business: ...

    @abstractmethod
    def delete(self, business_id: int) -> None: ...


class ItemRepository(ABC):
    @abstractmethod
    def create(self, item: Item) -> Item: ...

    @abstractmethod
    def get_by_id(self, item_id: int) -> Item | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Item | None: ...

    @abstractmethod
    def list_all(self) -> list[Item]: ...

    @abstractmethod
    def list_by_business(self, business_id: int) -> list[Item]: ...

    @abstractmethod
    def update(self, item: Item) -> Item: ...

    @abstractmethod
    def delete(self, item_id: int) -> None: ...
