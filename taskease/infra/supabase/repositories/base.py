"""Base repository with common CRUD operations"""
from typing import Generic, TypeVar, Type, Optional, List, Dict, Any
from pydantic import BaseModel
from supabase import Client

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)
UpdateT = TypeVar('UpdateT', bound=BaseModel)


class BaseRepository(Generic[T, CreateT, UpdateT]):
    """
    Base repository providing common database operations.
    Hides Supabase implementation details from the rest of the application.
    """

    def __init__(self, client: Client, table_name: str, model_class: Type[T]):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class

    def _table(self):
        return self._client.table(self._table_name)

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class(**data)

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    def _first(self, response) -> Optional[T]:
        """First row of a response as a model, None when it is empty"""
        if not response.data:
            return None
        return self._to_model(response.data[0])

    async def find_by_id(self, id: int) -> Optional[T]:
        """Find a single record by ID"""
        return self._first(self._table().select("*").eq("id", id).execute())

    async def find_all(self, limit: Optional[int] = None) -> List[T]:
        """Find all records, optionally limited"""
        query = self._table().select("*")

        if limit:
            query = query.limit(limit)

        response = query.execute()
        return self._to_models(response.data)

    async def find_by_filters(
        self,
        filters: Dict[str, Any],
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
    ) -> List[T]:
        """Find records matching equality filters, optionally ordered"""
        query = self._table().select("*")

        for key, value in filters.items():
            query = query.eq(key, value)

        if order_by:
            query = query.order(order_by, desc=desc)

        if limit:
            query = query.limit(limit)

        response = query.execute()
        return self._to_models(response.data)

    async def create(self, data: CreateT) -> T:
        """Create a new record"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        record = self._first(self._table().insert(data_dict).execute())

        if record is None:
            raise ValueError(f"Failed to create {self._table_name} record")

        return record

    async def update(self, id: int, data: UpdateT) -> Optional[T]:
        """Update a record by ID from a partial model"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')

        if not data_dict:
            # No fields to update
            return await self.find_by_id(id)

        return await self.update_fields(id, data_dict)

    async def update_fields(self, id: int, values: Dict[str, Any]) -> Optional[T]:
        """Write already serialized column values to a record by ID"""
        return self._first(self._table().update(values).eq("id", id).execute())

    async def delete(self, id: int) -> bool:
        """Delete a record by ID"""
        response = self._table().delete().eq("id", id).execute()
        return len(response.data) > 0
