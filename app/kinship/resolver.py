"""
Kinship label resolver.

Turns a free-text kinship phrase ("тётя", "двоюродный брат") into a
canonical (relationship code, specific value) pair. Resolution is a pure
function of the stripped, lowercased label: an ordered rule table is
evaluated and the first matching rule wins. A label that matches nothing
resolves to None, which callers handle as a normal branch (typically by
offering the structured options from app.kinship.labels).

Rule tables are plain data, one per locale.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.ontology import Locale, RelationshipCode


@dataclass(frozen=True)
class MappedKinship:
    """Result of a successful resolution."""

    relationship_code: RelationshipCode
    specific_value: str


class MatchStyle(str, Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"


@dataclass(frozen=True)
class KinshipRule:
    """
    One row of a rule table.

    EXACT matches when the label equals one of `patterns`; PREFIX when the
    label starts with one of them. SUBSTRING needs one of `patterns` (the
    degree marker) and one of `terms` anywhere in the label. A rule never
    matches a label containing any of `forbidden`.
    """

    style: MatchStyle
    patterns: tuple[str, ...]
    result: MappedKinship
    terms: tuple[str, ...] = ()
    forbidden: tuple[str, ...] = ()

    def matches(self, label: str) -> bool:
        if any(marker in label for marker in self.forbidden):
            return False

        if self.style == MatchStyle.EXACT:
            return label in self.patterns
        elif self.style == MatchStyle.PREFIX:
            return label.startswith(self.patterns)
        else:
            return any(p in label for p in self.patterns) and any(t in label for t in self.terms)


def normalize_label(label: str) -> str:
    """Trim surrounding whitespace, then lowercase."""
    return label.strip().lower()


class KinshipResolver:
    """Resolve labels against one ordered rule table."""

    def __init__(self, rules: tuple[KinshipRule, ...]):
        self.rules = rules

    def resolve(self, label: str) -> Optional[MappedKinship]:
        normalized = normalize_label(label)
        if not normalized:
            return None

        for rule in self.rules:
            if rule.matches(normalized):
                return rule.result
        return None


def _mapped(code: RelationshipCode, value: str) -> MappedKinship:
    return MappedKinship(relationship_code=code, specific_value=value)


# Russian

RU_FIRST_DEGREE_MARKERS = ("двоюродн",)
RU_SECOND_DEGREE_MARKERS = ("троюродн",)
RU_DEGREE_MARKERS = RU_FIRST_DEGREE_MARKERS + RU_SECOND_DEGREE_MARKERS
RU_MALE_TERMS = ("брат",)
RU_FEMALE_TERMS = ("сестр",)
# Any other kinship noun makes a degree-marked label compound
RU_OTHER_HEAD_NOUNS = (
    "мам", "мать", "матер", "пап", "отец", "отц",
    "сын", "доч", "бабушк", "бабул", "дед", "внук", "внуч",
    "тёт", "тет", "дяд", "племянн",
)


def _ru_exact(patterns: tuple[str, ...], code: RelationshipCode, value: str) -> KinshipRule:
    return KinshipRule(
        MatchStyle.EXACT, patterns, _mapped(code, value), forbidden=RU_DEGREE_MARKERS
    )


def _ru_prefix(patterns: tuple[str, ...], code: RelationshipCode, value: str) -> KinshipRule:
    return KinshipRule(
        MatchStyle.PREFIX, patterns, _mapped(code, value), forbidden=RU_DEGREE_MARKERS
    )


def _ru_cousin(markers: tuple[str, ...], terms: tuple[str, ...], value: str) -> KinshipRule:
    other_markers = tuple(m for m in RU_DEGREE_MARKERS if m not in markers)
    other_terms = RU_FEMALE_TERMS if terms == RU_MALE_TERMS else RU_MALE_TERMS
    return KinshipRule(
        MatchStyle.SUBSTRING,
        markers,
        _mapped(RelationshipCode.COUSIN, value),
        terms=terms,
        forbidden=other_markers + other_terms + RU_OTHER_HEAD_NOUNS,
    )


# Order matters: exact labels, then degree-qualified cousins, then prefixes.
RU_RULES: tuple[KinshipRule, ...] = (
    _ru_exact(("мама", "мать"), RelationshipCode.PARENT, "mother"),
    _ru_exact(("папа", "отец"), RelationshipCode.PARENT, "father"),
    _ru_exact(("брат", "родной брат"), RelationshipCode.SIBLING, "brother"),
    _ru_exact(("сестра", "родная сестра"), RelationshipCode.SIBLING, "sister"),
    _ru_cousin(RU_FIRST_DEGREE_MARKERS, RU_MALE_TERMS, "cousin_m_1st"),
    _ru_cousin(RU_FIRST_DEGREE_MARKERS, RU_FEMALE_TERMS, "cousin_f_1st"),
    _ru_cousin(RU_SECOND_DEGREE_MARKERS, RU_MALE_TERMS, "cousin_m_2nd"),
    _ru_cousin(RU_SECOND_DEGREE_MARKERS, RU_FEMALE_TERMS, "cousin_f_2nd"),
    _ru_prefix(("сын",), RelationshipCode.CHILD, "son"),
    _ru_prefix(("дочь", "дочка"), RelationshipCode.CHILD, "daughter"),
    _ru_prefix(("бабушка", "бабуля"), RelationshipCode.GRANDPARENT, "grandmother"),
    _ru_prefix(("дедушка", "дед"), RelationshipCode.GRANDPARENT, "grandfather"),
    _ru_prefix(("внучка",), RelationshipCode.GRANDCHILD, "granddaughter"),
    _ru_prefix(("внук",), RelationshipCode.GRANDCHILD, "grandson"),
    _ru_prefix(("тётя", "тетя", "тётка", "тетка"), RelationshipCode.AUNT_UNCLE, "aunt"),
    _ru_prefix(("дядя", "дядюшка", "дядька"), RelationshipCode.AUNT_UNCLE, "uncle"),
    _ru_prefix(("племянница",), RelationshipCode.NIECE_NEPHEW, "niece"),
    _ru_prefix(("племянник",), RelationshipCode.NIECE_NEPHEW, "nephew"),
)


# English. No cousin rules: English cousin terms carry no gender.

EN_FORBIDDEN = ("in-law", "in law", "step", "half", "great")


def _en_exact(patterns: tuple[str, ...], code: RelationshipCode, value: str) -> KinshipRule:
    return KinshipRule(MatchStyle.EXACT, patterns, _mapped(code, value), forbidden=EN_FORBIDDEN)


def _en_prefix(patterns: tuple[str, ...], code: RelationshipCode, value: str) -> KinshipRule:
    return KinshipRule(MatchStyle.PREFIX, patterns, _mapped(code, value), forbidden=EN_FORBIDDEN)


EN_RULES: tuple[KinshipRule, ...] = (
    _en_exact(("mother", "mom", "mum"), RelationshipCode.PARENT, "mother"),
    _en_exact(("father", "dad"), RelationshipCode.PARENT, "father"),
    _en_exact(("brother", "full brother"), RelationshipCode.SIBLING, "brother"),
    _en_exact(("sister", "full sister"), RelationshipCode.SIBLING, "sister"),
    _en_prefix(("son",), RelationshipCode.CHILD, "son"),
    _en_prefix(("daughter",), RelationshipCode.CHILD, "daughter"),
    _en_prefix(("grandmother", "grandma", "granny"), RelationshipCode.GRANDPARENT, "grandmother"),
    _en_prefix(("grandfather", "grandpa"), RelationshipCode.GRANDPARENT, "grandfather"),
    _en_prefix(("granddaughter",), RelationshipCode.GRANDCHILD, "granddaughter"),
    _en_prefix(("grandson",), RelationshipCode.GRANDCHILD, "grandson"),
    _en_prefix(("aunt",), RelationshipCode.AUNT_UNCLE, "aunt"),
    _en_prefix(("uncle",), RelationshipCode.AUNT_UNCLE, "uncle"),
    _en_prefix(("niece",), RelationshipCode.NIECE_NEPHEW, "niece"),
    _en_prefix(("nephew",), RelationshipCode.NIECE_NEPHEW, "nephew"),
)


RESOLVERS = {
    Locale.RU: KinshipResolver(RU_RULES),
    Locale.EN: KinshipResolver(EN_RULES),
}


def resolve_kinship_label(label: str, locale: Locale = Locale.RU) -> Optional[MappedKinship]:
    """Resolve a kinship label in the given locale. None if not recognized."""
    return RESOLVERS[locale].resolve(label)
