"""Relationship authoring API endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from app.api.kinship import serialize_options
from app.config import settings
from app.database import get_session
from app.kinship.labels import is_specific_value
from app.kinship.resolver import resolve_kinship_label
from app.models import Person, Relationship
from app.ontology import Locale, RelationshipCode

logger = logging.getLogger(__name__)

router = APIRouter()


class RelationshipCreate(SQLModel):
    """
    New relationship: to_person is the given relationship of from_person.

    Either a free-text `label` or a structured `relationship_code`
    (optionally with `specific_value`) must be given. When both are given
    they must agree.
    """

    from_person_id: UUID
    to_person_id: UUID
    label: Optional[str] = None
    relationship_code: Optional[RelationshipCode] = None
    specific_value: Optional[str] = None
    locale: Optional[Locale] = None


def serialize_relationship(rel: Relationship) -> dict:
    return {
        "relationship_id": str(rel.relationship_id),
        "from_person_id": str(rel.from_person_id),
        "to_person_id": str(rel.to_person_id),
        "relationship_code": rel.relationship_code.value,
        "specific_value": rel.specific_value,
        "source_label": rel.source_label,
        "created_at": rel.created_at.isoformat(),
    }


@router.post("", status_code=201)
async def create_relationship(
    payload: RelationshipCreate,
    session: Session = Depends(get_session),
) -> dict:
    """
    Create a relationship between two persons.

    A free-text label is resolved first. When it is not recognized the
    request fails with 422 and the structured options to pick from.
    """
    if payload.from_person_id == payload.to_person_id:
        raise HTTPException(status_code=400, detail="A person cannot be related to themselves")

    for person_id in (payload.from_person_id, payload.to_person_id):
        if not session.get(Person, person_id):
            raise HTTPException(status_code=404, detail=f"Person not found: {person_id}")

    locale = payload.locale or settings.default_locale

    if payload.label is not None:
        mapped = resolve_kinship_label(payload.label, locale)
        if mapped is None:
            logger.info("Relationship label not recognized: %r", payload.label)
            raise HTTPException(
                status_code=422,
                detail={
                    "message": "Relationship label not recognized",
                    "label": payload.label,
                    "options": serialize_options(locale),
                },
            )
        if payload.relationship_code not in (None, mapped.relationship_code) or (
            payload.specific_value not in (None, mapped.specific_value)
        ):
            raise HTTPException(
                status_code=400,
                detail=f"Label {payload.label!r} resolves to {mapped.relationship_code.value}"
                f"/{mapped.specific_value}, which conflicts with the given relationship",
            )
        code = mapped.relationship_code
        specific_value = mapped.specific_value

    elif payload.relationship_code is not None:
        code = payload.relationship_code
        specific_value = payload.specific_value
        if specific_value is not None and not is_specific_value(code, specific_value):
            raise HTTPException(
                status_code=400,
                detail=f"Unknown specific value {specific_value!r} for {code.value}",
            )

    else:
        raise HTTPException(
            status_code=400, detail="Either label or relationship_code is required"
        )

    relationship = Relationship(
        from_person_id=payload.from_person_id,
        to_person_id=payload.to_person_id,
        relationship_code=code,
        specific_value=specific_value,
        source_label=payload.label,
    )
    session.add(relationship)
    session.commit()
    session.refresh(relationship)

    logger.info(
        "Created relationship %s: %s is %s of %s",
        relationship.relationship_id,
        relationship.to_person_id,
        code.value,
        relationship.from_person_id,
    )
    return serialize_relationship(relationship)


@router.get("/{relationship_id}")
async def get_relationship(
    relationship_id: UUID,
    session: Session = Depends(get_session),
) -> dict:
    """Get relationship by ID."""
    relationship = session.get(Relationship, relationship_id)
    if not relationship:
        raise HTTPException(status_code=404, detail="Relationship not found")

    return serialize_relationship(relationship)


@router.delete("/{relationship_id}", status_code=204)
async def delete_relationship(
    relationship_id: UUID,
    session: Session = Depends(get_session),
) -> None:
    """Delete a relationship."""
    relationship = session.get(Relationship, relationship_id)
    if not relationship:
        raise HTTPException(status_code=404, detail="Relationship not found")

    session.delete(relationship)
    session.commit()
    logger.info("Deleted relationship %s", relationship_id)
