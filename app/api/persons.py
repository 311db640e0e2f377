"""Person API endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel, or_, select

from app.database import get_session
from app.models import Person, Relationship
from app.ontology import Gender, get_inverse_code

logger = logging.getLogger(__name__)

router = APIRouter()


class PersonCreate(SQLModel):
    first_name: str
    last_name: Optional[str] = None
    gender: Optional[Gender] = None


def serialize_person(person: Person) -> dict:
    return {
        "person_id": str(person.person_id),
        "first_name": person.first_name,
        "last_name": person.last_name,
        "display_name": person.display_name,
        "gender": person.gender.value if person.gender else None,
        "is_active": person.is_active,
        "created_at": person.created_at.isoformat(),
        "updated_at": person.updated_at.isoformat(),
    }


@router.post("", status_code=201)
async def create_person(
    payload: PersonCreate,
    session: Session = Depends(get_session),
) -> dict:
    """Create a person."""
    person = Person(**payload.model_dump())
    session.add(person)
    session.commit()
    session.refresh(person)

    logger.info("Created person %s", person.person_id)
    return serialize_person(person)


@router.get("/{person_id}")
async def get_person(
    person_id: UUID,
    session: Session = Depends(get_session),
) -> dict:
    """
    Get person by ID.
    """
    person = session.get(Person, person_id)
    if not person:
        raise HTTPException(status_code=404, detail="Person not found")

    return serialize_person(person)


@router.get("/{person_id}/relationships")
async def get_person_relationships(
    person_id: UUID,
    session: Session = Depends(get_session),
) -> dict:
    """
    Get all relationships a person takes part in.

    Each entry is seen from this person: "relationship_code" is what the
    other person is to them. Entries are grouped by relationship code.
    """
    person = session.get(Person, person_id)
    if not person:
        raise HTTPException(status_code=404, detail="Person not found")

    statement = select(Relationship).where(
        or_(
            Relationship.from_person_id == person_id,
            Relationship.to_person_id == person_id,
        )
    )
    relationships = session.exec(statement).all()

    grouped = {}
    for rel in relationships:
        outgoing = rel.from_person_id == person_id
        code = rel.relationship_code if outgoing else get_inverse_code(rel.relationship_code)
        other_id = rel.to_person_id if outgoing else rel.from_person_id

        grouped.setdefault(code.value, []).append(
            {
                "relationship_id": str(rel.relationship_id),
                "person_id": str(other_id),
                # The specific value only describes the stored direction
                "specific_value": rel.specific_value if outgoing else None,
                "source_label": rel.source_label,
            }
        )

    return {
        "person_id": str(person_id),
        "relationships": grouped,
        "total_relationships": len(relationships),
    }
