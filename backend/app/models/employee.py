from sqlalchemy import Column, Integer, String

from app.db.base_class import Base


class EmployeeEntity(Base):
    """Persisted employee row. Column names follow the existing ``Employees`` table."""

    __tablename__ = "Employees"  # type: ignore[assignment]

    employee_id = Column("EmployeeId", Integer, primary_key=True, autoincrement=True)
    name = Column("Name", String(255))
