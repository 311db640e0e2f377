"""Kinship vocabulary API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.config import settings
from app.kinship.composition import compose_relationship
from app.kinship.labels import (
    Qualifiers,
    generate_kinship_label,
    relationship_options,
    specific_options,
    specific_value_for,
)
from app.kinship.resolver import resolve_kinship_label
from app.ontology import Gender, Halfness, Lineage, Locale, RelationshipCode

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_options(locale: Locale) -> list[dict]:
    """Structured fallback for labels that were not recognized."""
    return [
        {"code": option.code.value, "label": option.label, "category": option.category}
        for option in relationship_options(locale)
    ]


@router.get("/resolve")
async def resolve_label(
    label: str = Query(..., description="Free-text kinship label"),
    locale: Optional[Locale] = Query(None),
) -> dict:
    """
    Resolve a free-text kinship label.

    An unrecognized label is a normal outcome: the response carries
    recognized=false and the structured options to choose from instead.
    """
    locale = locale or settings.default_locale
    mapped = resolve_kinship_label(label, locale)

    if mapped is None:
        logger.debug("Kinship label not recognized: %r (%s)", label, locale.value)
        return {
            "label": label,
            "recognized": False,
            "relationship_code": None,
            "specific_value": None,
            "options": serialize_options(locale),
        }

    return {
        "label": label,
        "recognized": True,
        "relationship_code": mapped.relationship_code.value,
        "specific_value": mapped.specific_value,
    }


@router.get("/label")
async def kinship_label(
    code: str = Query(..., description="Relationship code"),
    gender: Gender = Query(Gender.UNKNOWN),
    halfness: Halfness = Query(Halfness.FULL),
    lineage: Optional[Lineage] = Query(None),
    level: int = Query(0, ge=0, le=5),
    cousin_degree: int = Query(1, ge=1, le=10),
    cousin_removed: int = Query(0, ge=0, le=5),
    locale: Optional[Locale] = Query(None),
) -> dict:
    """Generate a localized label for a code, gender and qualifiers."""
    qualifiers = Qualifiers(
        halfness=halfness,
        lineage=lineage,
        cousin_degree=cousin_degree,
        cousin_removed=cousin_removed,
        level=level,
    )
    label = generate_kinship_label(code, gender, qualifiers, locale or settings.default_locale)
    return {"code": code, "gender": gender.value, "label": label}


@router.get("/options")
async def list_options(locale: Optional[Locale] = Query(None)) -> dict:
    """Relationship codes for a structured dropdown."""
    return {"options": serialize_options(locale or settings.default_locale)}


@router.get("/options/{code}")
async def list_specific_options(code: str, locale: Optional[Locale] = Query(None)) -> dict:
    """Gender- and degree-specific values for one relationship code."""
    options = specific_options(code, locale or settings.default_locale)
    if not options:
        raise HTTPException(status_code=404, detail="Unknown relationship code")

    return {
        "code": code,
        "options": [
            {
                "value": option.value,
                "label": option.label,
                "gender": option.gender.value,
                "qualifiers": option.qualifiers,
            }
            for option in options
        ],
    }


@router.get("/compose")
async def compose(
    via: RelationshipCode = Query(..., description="My relationship to the intermediate person"),
    then: RelationshipCode = Query(..., description="New person's relationship to the intermediate"),
    gender: Gender = Query(Gender.UNKNOWN, description="Gender of the new person"),
) -> dict:
    """Compose a relationship through an intermediate person."""
    code = compose_relationship(via, then)

    return {
        "via": via.value,
        "then": then.value,
        "recognized": code is not None,
        "relationship_code": code.value if code else None,
        "specific_value": specific_value_for(code, gender) if code else None,
    }
