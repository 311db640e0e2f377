"""
Kinship label generation and structured relationship options.

This is the inverse of the resolver: a relationship code plus gender and
qualifiers becomes a localized label. The option catalogs back the
structured selection widget offered when a free-text label is not
recognized.
"""

from dataclasses import dataclass, field
from typing import Optional

from app.ontology import Gender, Halfness, Lineage, Locale, RelationshipCode


@dataclass(frozen=True)
class Qualifiers:
    """Degree and lineage refinements of a relationship."""

    halfness: Halfness = Halfness.FULL
    lineage: Optional[Lineage] = None
    cousin_degree: int = 1
    cousin_removed: int = 0
    level: int = 0


@dataclass(frozen=True)
class RelationshipOption:
    code: RelationshipCode
    label: str
    category: str  # direct, extended


@dataclass(frozen=True)
class SpecificOption:
    value: str
    label: str
    gender: Gender
    qualifiers: dict = field(default_factory=dict)


KINSHIP_MAPS = {
    Locale.RU: {
        "parent": ("отец", "мать", "родитель"),
        "child": ("сын", "дочь", "ребёнок"),
        "grandparent": ("дед", "бабушка", "прародитель"),
        "grandchild": ("внук", "внучка", "внук/внучка"),
        "sibling": ("брат", "сестра", "брат/сестра"),
        "aunt_uncle": ("дядя", "тётя", "дядя/тётя"),
        "niece_nephew": ("племянник", "племянница", "племянник/племянница"),
        "half_paternal": ("единокровный", "единокровная"),
        "half_maternal": ("единоутробный", "единоутробная"),
        "adoptive": ("приёмный", "приёмная"),
        "foster": ("сводный", "сводная"),
        # Index 0 is the first lineage degree (двоюродный)
        "degree_adj_m": ("двоюродный", "троюродный", "четвероюродный", "пятиюродный", "шестиюродный"),
        "degree_adj_f": ("двоюродная", "троюродная", "четвероюродная", "пятиюродная", "шестиюродная"),
        "removed_suffix": {1: " (один раз в стороне)", 2: " (два раза в стороне)"},
    },
    Locale.EN: {
        "parent": ("father", "mother", "parent"),
        "child": ("son", "daughter", "child"),
        "grandparent": ("grandfather", "grandmother", "grandparent"),
        "grandchild": ("grandson", "granddaughter", "grandchild"),
        "sibling": ("brother", "sister", "sibling"),
        "aunt_uncle": ("uncle", "aunt", "aunt/uncle"),
        "niece_nephew": ("nephew", "niece", "niece/nephew"),
        "removed_suffix": {1: " once removed", 2: " twice removed", 3: " thrice removed"},
    },
}


def _pick(forms: tuple[str, ...], gender: Gender) -> str:
    """Pick the male, female or neutral form."""
    if gender == Gender.MALE:
        return forms[0]
    elif gender == Gender.FEMALE:
        return forms[1]
    return forms[2] if len(forms) > 2 else forms[0]


def ru_degree_adjective(degree: int, gender: Gender) -> str:
    """Russian lineage-degree adjective, 1 -> двоюродный."""
    maps = KINSHIP_MAPS[Locale.RU]
    adjectives = maps["degree_adj_f"] if gender == Gender.FEMALE else maps["degree_adj_m"]
    if 1 <= degree <= len(adjectives):
        return adjectives[degree - 1]
    suffix = "ая" if gender == Gender.FEMALE else "ый"
    return f"{degree + 1}-юродн{suffix}"


def ordinal(n: int) -> str:
    """English ordinal: 1st, 2nd, 3rd, 4th, 11th, 21st."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def generate_kinship_label(
    code: str,
    gender: Gender = Gender.UNKNOWN,
    qualifiers: Optional[Qualifiers] = None,
    locale: Locale = Locale.RU,
) -> str:
    """
    Generate a localized label for a relationship.

    Unknown codes are returned unchanged.
    """
    qualifiers = qualifiers or Qualifiers()
    try:
        code = RelationshipCode(code)
    except ValueError:
        return str(code)

    maps = KINSHIP_MAPS[locale]

    if code == RelationshipCode.SIBLING:
        return _sibling_label(gender, qualifiers, locale)
    if code in (RelationshipCode.AUNT_UNCLE, RelationshipCode.NIECE_NEPHEW):
        return _leveled_label(code, gender, qualifiers.level, locale)
    if code == RelationshipCode.COUSIN:
        return _cousin_label(gender, qualifiers, locale)

    return _pick(maps[code.value], gender)


def _sibling_label(gender: Gender, qualifiers: Qualifiers, locale: Locale) -> str:
    maps = KINSHIP_MAPS[locale]
    base = _pick(maps["sibling"], gender)
    halfness = qualifiers.halfness

    if halfness == Halfness.FULL:
        return base

    if locale == Locale.EN:
        if halfness == Halfness.HALF:
            if qualifiers.lineage in (Lineage.PATERNAL, Lineage.MATERNAL):
                return f"half-{base} ({qualifiers.lineage.value})"
            return f"half-{base}"
        if halfness == Halfness.ADOPTIVE:
            return f"adoptive {base}"
        return f"step{base}"

    female = 1 if gender == Gender.FEMALE else 0
    if halfness == Halfness.HALF:
        key = "half_paternal" if qualifiers.lineage == Lineage.PATERNAL else "half_maternal"
        return f"{maps[key][female]} {base}"
    if halfness == Halfness.ADOPTIVE:
        return f"{maps['adoptive'][female]} {base}"
    return f"{maps['foster'][female]} {base}"


def _leveled_label(code: RelationshipCode, gender: Gender, level: int, locale: Locale) -> str:
    base = _pick(KINSHIP_MAPS[locale][code.value], gender)
    if level <= 0:
        return base
    if locale == Locale.EN:
        return f"{ordinal(level + 1)} {base}"
    return f"{ru_degree_adjective(level, gender)} {base}"


def _cousin_label(gender: Gender, qualifiers: Qualifiers, locale: Locale) -> str:
    maps = KINSHIP_MAPS[locale]
    degree = max(qualifiers.cousin_degree, 1)
    removed = max(qualifiers.cousin_removed, 0)

    if locale == Locale.EN:
        suffix = maps["removed_suffix"].get(removed, f" {removed}x removed") if removed else ""
        return f"{ordinal(degree)} cousin{suffix}"

    noun = maps["sibling"][1] if gender == Gender.FEMALE else maps["sibling"][0]
    suffix = maps["removed_suffix"].get(removed, f" ({removed} раз в стороне)") if removed else ""
    return f"{ru_degree_adjective(degree, gender)} {noun}{suffix}"


BLOOD_RELATIONSHIP_OPTIONS = (
    (RelationshipCode.PARENT, "Родитель", "Parent", "direct"),
    (RelationshipCode.CHILD, "Ребёнок", "Child", "direct"),
    (RelationshipCode.SIBLING, "Брат/Сестра", "Sibling", "direct"),
    (RelationshipCode.GRANDPARENT, "Дед/Бабушка", "Grandparent", "direct"),
    (RelationshipCode.GRANDCHILD, "Внук/Внучка", "Grandchild", "direct"),
    (RelationshipCode.AUNT_UNCLE, "Дядя/Тётя", "Aunt/Uncle", "extended"),
    (RelationshipCode.NIECE_NEPHEW, "Племянник/Племянница", "Nephew/Niece", "extended"),
    (RelationshipCode.COUSIN, "Двоюродный(ая)", "Cousin", "extended"),
)


def relationship_options(locale: Locale = Locale.RU) -> list[RelationshipOption]:
    """Top-level relationship codes for a dropdown."""
    return [
        RelationshipOption(code=code, label=ru if locale == Locale.RU else en, category=category)
        for code, ru, en, category in BLOOD_RELATIONSHIP_OPTIONS
    ]


_M, _F = Gender.MALE, Gender.FEMALE

# code -> (value, ru label, en label, gender, qualifiers)
SPECIFIC_OPTIONS = {
    RelationshipCode.PARENT: (
        ("mother", "Мама", "Mother", _F, {}),
        ("father", "Папа", "Father", _M, {}),
    ),
    RelationshipCode.CHILD: (
        ("son", "Сын", "Son", _M, {}),
        ("daughter", "Дочь", "Daughter", _F, {}),
    ),
    RelationshipCode.SIBLING: (
        ("brother", "Брат (родной)", "Brother", _M, {"halfness": "full"}),
        ("sister", "Сестра (родная)", "Sister", _F, {"halfness": "full"}),
        ("half_brother_p", "Единокровный брат", "Paternal half-brother", _M,
         {"halfness": "half", "lineage": "paternal"}),
        ("half_sister_p", "Единокровная сестра", "Paternal half-sister", _F,
         {"halfness": "half", "lineage": "paternal"}),
        ("half_brother_m", "Единоутробный брат", "Maternal half-brother", _M,
         {"halfness": "half", "lineage": "maternal"}),
        ("half_sister_m", "Единоутробная сестра", "Maternal half-sister", _F,
         {"halfness": "half", "lineage": "maternal"}),
    ),
    RelationshipCode.GRANDPARENT: (
        ("grandfather", "Дедушка", "Grandfather", _M, {}),
        ("grandmother", "Бабушка", "Grandmother", _F, {}),
    ),
    RelationshipCode.GRANDCHILD: (
        ("grandson", "Внук", "Grandson", _M, {}),
        ("granddaughter", "Внучка", "Granddaughter", _F, {}),
    ),
    RelationshipCode.AUNT_UNCLE: (
        ("uncle", "Дядя", "Uncle", _M, {"level": 0}),
        ("aunt", "Тётя", "Aunt", _F, {"level": 0}),
        ("uncle_2nd", "Двоюродный дядя", "2nd uncle", _M, {"level": 1}),
        ("aunt_2nd", "Двоюродная тётя", "2nd aunt", _F, {"level": 1}),
    ),
    RelationshipCode.NIECE_NEPHEW: (
        ("nephew", "Племянник", "Nephew", _M, {"level": 0}),
        ("niece", "Племянница", "Niece", _F, {"level": 0}),
        ("nephew_2nd", "Двоюродный племянник", "2nd nephew", _M, {"level": 1}),
        ("niece_2nd", "Двоюродная племянница", "2nd niece", _F, {"level": 1}),
    ),
    RelationshipCode.COUSIN: (
        ("cousin_m_1st", "Двоюродный брат", "1st cousin (male)", _M,
         {"cousin_degree": 1, "cousin_removed": 0}),
        ("cousin_f_1st", "Двоюродная сестра", "1st cousin (female)", _F,
         {"cousin_degree": 1, "cousin_removed": 0}),
        ("cousin_m_2nd", "Троюродный брат", "2nd cousin (male)", _M,
         {"cousin_degree": 2, "cousin_removed": 0}),
        ("cousin_f_2nd", "Троюродная сестра", "2nd cousin (female)", _F,
         {"cousin_degree": 2, "cousin_removed": 0}),
    ),
}


def specific_options(code: str, locale: Locale = Locale.RU) -> list[SpecificOption]:
    """Gender- and degree-specific choices for a code. Empty for unknown codes."""
    try:
        code = RelationshipCode(code)
    except ValueError:
        return []

    return [
        SpecificOption(
            value=value,
            label=ru if locale == Locale.RU else en,
            gender=gender,
            qualifiers=dict(qualifiers),
        )
        for value, ru, en, gender, qualifiers in SPECIFIC_OPTIONS[code]
    ]


def is_specific_value(code: RelationshipCode, value: str) -> bool:
    """Check that a specific value belongs to a code's vocabulary."""
    return any(option[0] == value for option in SPECIFIC_OPTIONS[code])


def specific_value_for(code: RelationshipCode, gender: Gender) -> Optional[str]:
    """
    Plain specific value for a code and a binary gender.

    Returns the first (closest degree, full) option of that gender,
    or None when the gender does not select one.
    """
    if gender not in (Gender.MALE, Gender.FEMALE):
        return None
    for value, _ru, _en, option_gender, _qualifiers in SPECIFIC_OPTIONS[code]:
        if option_gender == gender:
            return value
    return None
