from pydantic import BaseModel, Field

from app.models.employee import EmployeeEntity


class Employee(BaseModel):
    """Request payload for create and update. Carries no identity."""
    name: str

    def to_entity(self, employee_id: int | None = None) -> EmployeeEntity:
        entity = EmployeeEntity(name=self.name)
        # Leave the id unset on create so the database assigns it
        if employee_id is not None:
            entity.employee_id = employee_id
        return entity


class EmployeeRecord(BaseModel):
    employeeId: int
    name: str | None = None

    @classmethod
    def from_entity(cls, entity: EmployeeEntity) -> "EmployeeRecord":
        return cls(employeeId=entity.employee_id, name=entity.name)


class ErrorDetail(BaseModel):
    detail: str = Field(..., examples=["Employee with ID 1 not found."])
