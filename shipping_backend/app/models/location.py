from sqlalchemy import String, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from shipping_backend.app.core.base import Base


class Department(Base):
    __tablename__ = 'departments'
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(2), unique=True)  # UBIGEO department, e.g. "15"
    name: Mapped[str] = mapped_column(String(100))


class Province(Base):
    __tablename__ = 'provinces'
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(4), unique=True)  # e.g. "1501"
    name: Mapped[str] = mapped_column(String(100))
    department_id: Mapped[int] = mapped_column(ForeignKey('departments.id'))

    __table_args__ = (
        Index('ix_provinces_department_id', 'department_id'),
    )


class District(Base):
    __tablename__ = 'districts'
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(6), unique=True)  # full UBIGEO, e.g. "150122"
    name: Mapped[str] = mapped_column(String(100))
    province_id: Mapped[int] = mapped_column(ForeignKey('provinces.id'))

    __table_args__ = (
        Index('ix_districts_province_id', 'province_id'),
    )
