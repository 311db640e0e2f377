"""Compose a relationship through an intermediate person.

Example: the sibling of my parent is my aunt/uncle.
"""

from typing import Optional

from app.ontology import RelationshipCode

# (my relationship to the intermediate, new person's relationship to the intermediate)
COMPOSITION_RULES = {
    (RelationshipCode.PARENT, RelationshipCode.SIBLING): RelationshipCode.AUNT_UNCLE,
    (RelationshipCode.PARENT, RelationshipCode.PARENT): RelationshipCode.GRANDPARENT,
    (RelationshipCode.PARENT, RelationshipCode.CHILD): RelationshipCode.SIBLING,
    (RelationshipCode.CHILD, RelationshipCode.CHILD): RelationshipCode.GRANDCHILD,
    (RelationshipCode.SIBLING, RelationshipCode.CHILD): RelationshipCode.NIECE_NEPHEW,
    (RelationshipCode.SIBLING, RelationshipCode.SIBLING): RelationshipCode.SIBLING,
    (RelationshipCode.AUNT_UNCLE, RelationshipCode.CHILD): RelationshipCode.COUSIN,
}


def compose_relationship(
    via: RelationshipCode, then: RelationshipCode
) -> Optional[RelationshipCode]:
    """
    Return my relationship to a person reached through an intermediate.

    `via` is my relationship to the intermediate, `then` is the new
    person's relationship to the intermediate. None when no rule applies.
    """
    return COMPOSITION_RULES.get((via, then))
