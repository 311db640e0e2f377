"""
Database models for Kinfolk.

All models use SQLModel for type-safe ORM with Pydantic validation.
A relationship is stored once, in the direction it was authored:
to_person is the relationship_code of from_person.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from app.ontology import Gender, RelationshipCode


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Person(SQLModel, table=True):
    """
    Person in a family tree.
    """

    __tablename__ = "persons"

    person_id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    first_name: str
    last_name: Optional[str] = None
    gender: Optional[Gender] = None

    # Metadata
    is_active: bool = Field(default=True)

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Relationship(SQLModel, table=True):
    """
    Typed kinship edge between two persons.
    """

    __tablename__ = "relationships"

    relationship_id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)

    from_person_id: UUID = Field(foreign_key="persons.person_id", index=True)
    to_person_id: UUID = Field(foreign_key="persons.person_id", index=True)

    relationship_code: RelationshipCode
    specific_value: Optional[str] = None

    # Free text the relationship was resolved from, if any
    source_label: Optional[str] = None
