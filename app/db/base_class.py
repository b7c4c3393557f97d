# /app/db/base_class.py

from sqlalchemy.orm import declarative_base, declared_attr


class _Base:
    """
    Shared declarative base. Models that do not set `__tablename__`
    explicitly get the lower-cased class name with an "s" appended.
    """

    @declared_attr
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"


Base = declarative_base(cls=_Base)
