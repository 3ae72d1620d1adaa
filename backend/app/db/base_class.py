from typing import Any

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    # Default table name is the class name; models override it where the
    # existing schema uses another name.
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    def __repr__(self) -> str:
        columns: dict[str, Any] = {
            attr.key: getattr(self, attr.key) for attr in self.__mapper__.column_attrs
        }
        fields = ", ".join(f"{k}={v!r}" for k, v in columns.items())
        return f"{type(self).__name__}({fields})"
