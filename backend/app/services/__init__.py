# Services Package
# Re-exports for the API layer

from app.services.data import EmployeeStore, SqlAlchemyEmployeeStore, StorageError
from app.services.employee_service import EmployeeService, EmployeeOperationResult, OperationStatus

__all__ = [
    # Data access
    "EmployeeStore",
    "SqlAlchemyEmployeeStore",
    "StorageError",
    # Use cases
    "EmployeeService",
    "EmployeeOperationResult",
    "OperationStatus",
]
