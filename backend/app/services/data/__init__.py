# Data Services Package
# Persistence for employee records

from app.services.data.employee_store import EmployeeStore, SqlAlchemyEmployeeStore, StorageError

__all__ = [
    "EmployeeStore",
    "SqlAlchemyEmployeeStore",
    "StorageError",
]
