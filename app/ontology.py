"""
Kinfolk Kinship Vocabulary v0.1.0

This module defines the closed vocabulary used throughout the system.
Resolver rule tables, label generators, storage, and API layers must
conform to these definitions.
"""

from enum import Enum
from typing import Final

ONTOLOGY_VERSION: Final[str] = "0.1.0"


class RelationshipCode(str, Enum):
    """Coarse kinship category, independent of gender and lineage degree."""

    PARENT = "parent"
    CHILD = "child"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    SIBLING = "sibling"
    AUNT_UNCLE = "aunt_uncle"
    NIECE_NEPHEW = "niece_nephew"
    COUSIN = "cousin"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    NONBINARY = "nonbinary"
    UNKNOWN = "unknown"


class Halfness(str, Enum):
    """Sibling qualifier."""

    FULL = "full"
    HALF = "half"
    ADOPTIVE = "adoptive"
    FOSTER = "foster"


class Lineage(str, Enum):
    """Side of the family a half relation comes through."""

    MATERNAL = "maternal"
    PATERNAL = "paternal"
    BOTH = "both"
    UNKNOWN = "unknown"


class Locale(str, Enum):
    RU = "ru"
    EN = "en"


class Direction(str, Enum):
    """Generational direction of a graph edge."""

    UP = "up"  # toward an ancestor
    DOWN = "down"  # toward a descendant
    LATERAL = "lateral"


class DegreeCategory(str, Enum):
    DIRECT = "direct"
    EXTENDED = "extended"
    COUSIN = "cousin"
    OTHER = "other"


# Edge inverses: if B is A's parent, A is B's child
INVERSE_CODES = {
    RelationshipCode.PARENT: RelationshipCode.CHILD,
    RelationshipCode.CHILD: RelationshipCode.PARENT,
    RelationshipCode.GRANDPARENT: RelationshipCode.GRANDCHILD,
    RelationshipCode.GRANDCHILD: RelationshipCode.GRANDPARENT,
    RelationshipCode.SIBLING: RelationshipCode.SIBLING,
    RelationshipCode.COUSIN: RelationshipCode.COUSIN,
    RelationshipCode.AUNT_UNCLE: RelationshipCode.NIECE_NEPHEW,
    RelationshipCode.NIECE_NEPHEW: RelationshipCode.AUNT_UNCLE,
}

# Generation steps as (up, down) from the common ancestor
GENERATION_STEPS = {
    RelationshipCode.PARENT: (1, 0),
    RelationshipCode.GRANDPARENT: (2, 0),
    RelationshipCode.CHILD: (0, 1),
    RelationshipCode.GRANDCHILD: (0, 2),
    RelationshipCode.SIBLING: (0, 0),
    RelationshipCode.AUNT_UNCLE: (1, 0),
    RelationshipCode.NIECE_NEPHEW: (0, 1),
    RelationshipCode.COUSIN: (1, 1),
}


def get_inverse_code(code: RelationshipCode) -> RelationshipCode:
    """Return the relationship seen from the other end of the edge."""
    return INVERSE_CODES[code]


def get_direction(code: RelationshipCode) -> Direction:
    """Return the generational direction of an edge with this code."""
    up, down = GENERATION_STEPS[code]
    if up > down:
        return Direction.UP
    elif down > up:
        return Direction.DOWN
    else:
        return Direction.LATERAL
