import datetime as dt
from sqlalchemy import String, Float, Integer, Date
from sqlalchemy.orm import Mapped, mapped_column

from personapp.db.base import Base
from personapp.db.models._mixins import TimestampMixin

class Person(Base, TimestampMixin):
    """Single-table hierarchy; ``type`` holds the row tag the person was imported with."""

    __tablename__ = "person"

    id: Mapped[int] = mapped_column(primary_key=True)
    type: Mapped[str] = mapped_column(String(32), index=True)

    first_name: Mapped[str] = mapped_column(String(128))
    last_name: Mapped[str] = mapped_column(String(128), index=True)
    pesel: Mapped[str] = mapped_column(String(11), index=True)
    height: Mapped[float] = mapped_column(Float)
    weight: Mapped[float] = mapped_column(Float)
    email: Mapped[str] = mapped_column(String(256))

    __mapper_args__ = {
        "polymorphic_on": "type",
        "polymorphic_identity": "PERSON",
    }


class Employee(Person):
    current_position: Mapped[str | None] = mapped_column(String(128), nullable=True)
    current_salary: Mapped[float | None] = mapped_column(Float, nullable=True)
    employment_start: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "EMPLOYEE"}


class Student(Person):
    university: Mapped[str | None] = mapped_column(String(256), nullable=True)
    field_of_study: Mapped[str | None] = mapped_column(String(256), nullable=True)
    year_of_study: Mapped[int | None] = mapped_column(Integer, nullable=True)
    scholarship: Mapped[float | None] = mapped_column(Float, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "STUDENT"}


class Retiree(Person):
    pension: Mapped[float | None] = mapped_column(Float, nullable=True)
    years_worked: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "RETIREE"}
