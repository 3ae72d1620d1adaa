"""
Data access for employee records.

``EmployeeStore`` is the capability the service depends on;
``SqlAlchemyEmployeeStore`` is the production implementation bound to one
request-scoped ``AsyncSession``. Every mutation commits before returning, and
any database error surfaces as ``StorageError``.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional, Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.employee import EmployeeEntity

logger = logging.getLogger("employees.store")


class StorageError(Exception):
    """Raised when the employee store cannot read or write."""
    pass


@runtime_checkable
class EmployeeStore(Protocol):
    async def list_all(self) -> List[EmployeeEntity]: ...

    async def get_by_id(self, employee_id: int) -> Optional[EmployeeEntity]: ...

    async def add(self, employee: EmployeeEntity) -> int: ...

    async def update_by_id(self, employee_id: int, name: str) -> bool: ...

    async def remove_by_id(self, employee_id: int) -> bool: ...


class SqlAlchemyEmployeeStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[EmployeeEntity]:
        async with self._storage_errors("list employees"):
            result = await self.db.execute(
                select(EmployeeEntity).order_by(EmployeeEntity.employee_id)
            )
            return list(result.scalars().all())

    async def get_by_id(self, employee_id: int) -> Optional[EmployeeEntity]:
        async with self._storage_errors(f"load employee {employee_id}"):
            return await self.db.get(EmployeeEntity, employee_id)

    async def add(self, employee: EmployeeEntity) -> int:
        """Insert ``employee`` and return the id the database assigned."""
        async with self._storage_errors(f"insert employee {employee.name!r}"):
            self.db.add(employee)
            await self.db.commit()
            await self.db.refresh(employee)
        return employee.employee_id

    async def update_by_id(self, employee_id: int, name: str) -> bool:
        employee = await self.get_by_id(employee_id)
        if employee is None:
            return False

        async with self._storage_errors(f"update employee {employee_id}"):
            employee.name = name
            await self.db.commit()
        return True

    async def remove_by_id(self, employee_id: int) -> bool:
        employee = await self.get_by_id(employee_id)
        if employee is None:
            return False

        async with self._storage_errors(f"delete employee {employee_id}"):
            await self.db.delete(employee)
            await self.db.commit()
        return True

    @asynccontextmanager
    async def _storage_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.debug(f"Rolled back failed {action}: {e}")
            raise StorageError(f"Could not {action}") from e
