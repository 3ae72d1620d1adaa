from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError

from app.api.deps import get_employee_service
from app.schemas.employee import Employee, EmployeeRecord, ErrorDetail
from app.services.employee_service import EmployeeService

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorDetail}}

# Bodies are validated in the handlers: a bad payload is a 400, and on update
# the id is checked first.
_EMPLOYEE_BODY = {
    "requestBody": {
        "content": {"application/json": {"schema": Employee.model_json_schema()}},
    }
}


def _not_found(employee_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Employee with ID {employee_id} not found.",
    )


def _parse_employee(payload: Any, missing_detail: str) -> Employee:
    if payload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing_detail)
    try:
        return Employee.model_validate(payload)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid employee data.",
        )


@router.get("", response_model=List[EmployeeRecord])
async def get_all_employees(
    service: EmployeeService = Depends(get_employee_service),
):
    employees = await service.get_employees()
    return [EmployeeRecord.from_entity(e) for e in employees]


@router.get("/{employee_id}", response_model=EmployeeRecord, responses=_NOT_FOUND)
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = await service.get_employee(employee_id)
    if employee is None:
        raise _not_found(employee_id)
    return EmployeeRecord.from_entity(employee)


@router.post(
    "",
    response_model=EmployeeRecord,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorDetail}, 500: {"model": ErrorDetail}},
    openapi_extra=_EMPLOYEE_BODY,
)
async def create_employee(
    request: Request,
    response: Response,
    payload: Any = Body(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """Create an employee. The store assigns the id; ``Location`` points at the new record."""
    employee = _parse_employee(payload, "Employee data is required.")

    result = await service.create_employee(employee.to_entity())
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating employee.",
        )

    created = EmployeeRecord.from_entity(result.employee)
    response.headers["Location"] = str(
        request.url_for("get_employee", employee_id=created.employeeId)
    )
    return created


@router.put(
    "/{employee_id}",
    response_model=EmployeeRecord,
    responses={400: {"model": ErrorDetail}, **_NOT_FOUND, 500: {"model": ErrorDetail}},
    openapi_extra=_EMPLOYEE_BODY,
)
async def update_employee(
    employee_id: int,
    payload: Any = Body(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """Rename an employee. The id in the path wins over anything in the body."""
    if employee_id <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid employee ID.")
    employee = _parse_employee(payload, "Invalid employee data.")

    result = await service.update_employee(employee.to_entity(employee_id))
    if result.not_found:
        raise _not_found(employee_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating employee.",
        )

    return EmployeeRecord.from_entity(result.employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, 500: {"model": ErrorDetail}},
)
async def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    result = await service.delete_employee(employee_id)
    if result.not_found:
        raise _not_found(employee_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error deleting employee.",
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
