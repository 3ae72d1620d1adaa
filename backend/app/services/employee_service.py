"""
Employee use cases.

One method per operation exposed by the API. Mutations return an
``EmployeeOperationResult`` that separates "no such employee" from
"the store failed"; the result is truthy only on success so callers that
only care about success can keep treating it as a boolean.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from app.models.employee import EmployeeEntity
from app.services.data.employee_store import EmployeeStore, StorageError

logger = logging.getLogger("employees.service")


class OperationStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    STORAGE_FAILURE = "storage_failure"


@dataclass(frozen=True)
class EmployeeOperationResult:
    status: OperationStatus
    employee: Optional[EmployeeEntity] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.status is OperationStatus.OK

    @property
    def not_found(self) -> bool:
        return self.status is OperationStatus.NOT_FOUND

    @classmethod
    def ok(cls, employee: Optional[EmployeeEntity] = None) -> "EmployeeOperationResult":
        return cls(OperationStatus.OK, employee=employee)

    @classmethod
    def missing(cls, employee_id: int) -> "EmployeeOperationResult":
        return cls(OperationStatus.NOT_FOUND, error=f"Employee with ID {employee_id} not found.")

    @classmethod
    def failed(cls, error: StorageError, employee: Optional[EmployeeEntity] = None) -> "EmployeeOperationResult":
        return cls(OperationStatus.STORAGE_FAILURE, employee=employee, error=str(error))


class EmployeeService:
    def __init__(self, store: EmployeeStore):
        self.store = store

    async def get_employees(self) -> List[EmployeeEntity]:
        return await self.store.list_all()

    async def get_employee(self, employee_id: int) -> Optional[EmployeeEntity]:
        return await self.store.get_by_id(employee_id)

    async def create_employee(self, employee: EmployeeEntity) -> EmployeeOperationResult:
        try:
            employee.employee_id = await self.store.add(employee)
        except StorageError as e:
            logger.error(f"Failed to create employee: {e.__cause__ or e}")
            return EmployeeOperationResult.failed(e, employee)

        logger.info(f"Created employee {employee.employee_id}")
        return EmployeeOperationResult.ok(employee)

    async def update_employee(self, employee: EmployeeEntity) -> EmployeeOperationResult:
        """Apply ``employee.name`` to the stored record with the same id."""
        employee_id = employee.employee_id
        try:
            existing = await self.store.get_by_id(employee_id)
            if existing is None:
                return EmployeeOperationResult.missing(employee_id)

            # Re-check: the row can disappear between the lookup and the write
            if not await self.store.update_by_id(employee_id, employee.name):
                return EmployeeOperationResult.missing(employee_id)
        except StorageError as e:
            logger.error(f"Failed to update employee {employee_id}: {e.__cause__ or e}")
            return EmployeeOperationResult.failed(e, employee)

        logger.info(f"Updated employee {employee_id}")
        return EmployeeOperationResult.ok(existing)

    async def delete_employee(self, employee_id: int) -> EmployeeOperationResult:
        try:
            existing = await self.store.get_by_id(employee_id)
            if existing is None:
                return EmployeeOperationResult.missing(employee_id)

            if not await self.store.remove_by_id(employee_id):
                return EmployeeOperationResult.missing(employee_id)
        except StorageError as e:
            logger.error(f"Failed to delete employee {employee_id}: {e.__cause__ or e}")
            return EmployeeOperationResult.failed(e)

        logger.info(f"Deleted employee {employee_id}")
        return EmployeeOperationResult.ok(existing)
