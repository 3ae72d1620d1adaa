from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import AsyncSessionLocal
from app.services.data.employee_store import EmployeeStore, SqlAlchemyEmployeeStore
from app.services.employee_service import EmployeeService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed when the response is sent."""
    async with AsyncSessionLocal() as session:
        yield session


def get_employee_store(db: AsyncSession = Depends(get_db)) -> EmployeeStore:
    return SqlAlchemyEmployeeStore(db)


def get_employee_service(store: EmployeeStore = Depends(get_employee_store)) -> EmployeeService:
    return EmployeeService(store)
