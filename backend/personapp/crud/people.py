from typing import Iterable
from sqlalchemy.orm import Session
from personapp.db.models.person import Person

def save_all(db: Session, people: Iterable[Person]) -> int:
    people = list(people)
    db.add_all(people)
    db.commit()
    return len(people)

def list_people(db: Session, type: str | None = None):
    q = db.query(Person)
    if type is not None:
        q = q.filter(Person.type==type.upper())
    return q.order_by(Person.id).all()
