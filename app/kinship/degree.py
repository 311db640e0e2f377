"""
Relationship degree calculation.

Turns a found path into a human-readable relationship ("1st cousin once
removed", "Двоюродный брат/сестра") with a numeric degree and a category.

Every relationship code is expanded into generational moves (U = one
generation up, D = one down); a child's parent is taken to be the person
the move started from, so each "D then U" pair cancels. What remains is
always U*a D*b, and (a, b) determines the relationship.
"""

from dataclasses import dataclass

from app.kinship.labels import ordinal, ru_degree_adjective
from app.kinship.path_finder import PathStep
from app.ontology import DegreeCategory, Gender, Locale, RelationshipCode


@dataclass(frozen=True)
class RelationshipDegree:
    label: str
    description: str
    degree: int
    category: DegreeCategory


MOVES = {
    RelationshipCode.PARENT: "U",
    RelationshipCode.CHILD: "D",
    RelationshipCode.GRANDPARENT: "UU",
    RelationshipCode.GRANDCHILD: "DD",
    RelationshipCode.SIBLING: "UD",
    RelationshipCode.AUNT_UNCLE: "UUD",
    RelationshipCode.NIECE_NEPHEW: "UDD",
    RelationshipCode.COUSIN: "UUDD",
}

SINGLE_LABELS = {
    RelationshipCode.PARENT: ("Parent", "Родитель", DegreeCategory.DIRECT),
    RelationshipCode.CHILD: ("Child", "Ребёнок", DegreeCategory.DIRECT),
    RelationshipCode.SIBLING: ("Sibling", "Брат/сестра", DegreeCategory.DIRECT),
    RelationshipCode.GRANDPARENT: ("Grandparent", "Бабушка/дедушка", DegreeCategory.DIRECT),
    RelationshipCode.GRANDCHILD: ("Grandchild", "Внук/внучка", DegreeCategory.DIRECT),
    RelationshipCode.AUNT_UNCLE: ("Aunt/Uncle", "Дядя/тётя", DegreeCategory.EXTENDED),
    RelationshipCode.NIECE_NEPHEW: ("Niece/Nephew", "Племянник/племянница", DegreeCategory.EXTENDED),
    RelationshipCode.COUSIN: ("Cousin", "Двоюродный брат/сестра", DegreeCategory.COUSIN),
}

POSSESSIVES = {
    RelationshipCode.PARENT: ("parent's", "родителя"),
    RelationshipCode.CHILD: ("child's", "ребёнка"),
    RelationshipCode.SIBLING: ("sibling's", "брата/сестры"),
    RelationshipCode.GRANDPARENT: ("grandparent's", "бабушки/дедушки"),
    RelationshipCode.GRANDCHILD: ("grandchild's", "внука/внучки"),
    RelationshipCode.AUNT_UNCLE: ("aunt/uncle's", "дяди/тёти"),
    RelationshipCode.NIECE_NEPHEW: ("niece/nephew's", "племянника/племянницы"),
    RelationshipCode.COUSIN: ("cousin's", "кузена/кузины"),
}


def _localized(pair: tuple[str, str], locale: Locale) -> str:
    return pair[1] if locale == Locale.RU else pair[0]


def generation_signature(chain: list[RelationshipCode]) -> tuple[int, int]:
    """Reduce a relationship chain to (generations up, generations down)."""
    stack: list[str] = []
    for code in chain:
        for move in MOVES[code]:
            if move == "U" and stack and stack[-1] == "D":
                stack.pop()
            else:
                stack.append(move)
    return stack.count("U"), stack.count("D")


def calculate_relationship_degree(
    path: list[PathStep], locale: Locale = Locale.EN
) -> RelationshipDegree:
    """Calculate the relationship described by a path of steps."""
    if not path:
        return RelationshipDegree(
            label=_localized(("No connection", "Связь не найдена"), locale),
            description="",
            degree=-1,
            category=DegreeCategory.OTHER,
        )

    if len(path) == 1:
        return RelationshipDegree(
            label=_localized(("Same person", "Это вы"), locale),
            description="",
            degree=0,
            category=DegreeCategory.DIRECT,
        )

    chain = [step.relationship_code for step in path[:-1] if step.relationship_code]

    if len(chain) == 1:
        en, ru, category = SINGLE_LABELS[chain[0]]
        return RelationshipDegree(
            label=_localized((en, ru), locale), description="", degree=1, category=category
        )

    description = " ".join(_localized(POSSESSIVES[code], locale) for code in chain)
    ups, downs = generation_signature(chain)
    label, degree, category = _classify(ups, downs, locale)

    return RelationshipDegree(
        label=label, description=description, degree=degree, category=category
    )


def _classify(ups: int, downs: int, locale: Locale) -> tuple[str, int, DegreeCategory]:
    ru = locale == Locale.RU

    if ups == 0 and downs == 0:
        # Back at the starting generation without a sibling hop, e.g. a child's other parent
        return _localized(("Relative", "Родственник"), locale), 2, DegreeCategory.OTHER

    if downs == 0 or ups == 0:
        return _direct_line(ups - downs, locale)

    if ups == 1 and downs == 1:
        return _localized(("Sibling", "Брат/сестра"), locale), 1, DegreeCategory.DIRECT

    if downs == 1:
        level = ups - 2  # 0 = aunt/uncle, 1 = grandparent's sibling
        if level == 0:
            label = "Дядя/тётя" if ru else "Aunt/Uncle"
        elif ru:
            prefix = "Двоюродный" if level == 1 else f"{level + 1}-юродный"
            label = f"{prefix} дядя/тётя"
        else:
            label = "Great-aunt/uncle" if level == 1 else f"{ordinal(level)} great-aunt/uncle"
        return label, level + 2, DegreeCategory.EXTENDED

    if ups == 1:
        level = downs - 2
        if level == 0:
            label = "Племянник/племянница" if ru else "Niece/Nephew"
        elif ru:
            prefix = "Внучатый" if level == 1 else f"{level + 1}-внучатый"
            label = f"{prefix} племянник/племянница"
        else:
            label = "Grand-niece/nephew" if level == 1 else f"{ordinal(level)} grand-niece/nephew"
        return label, level + 2, DegreeCategory.EXTENDED

    cousin_degree = min(ups, downs) - 1
    removal = abs(ups - downs)
    return _cousin(cousin_degree, removal, locale), cousin_degree + removal + 1, DegreeCategory.COUSIN


def _direct_line(steps: int, locale: Locale) -> tuple[str, int, DegreeCategory]:
    """Ancestor (steps > 0) or descendant (steps < 0)."""
    generations = abs(steps)
    is_ancestor = steps > 0

    if generations == 1:
        label = ("Parent", "Родитель") if is_ancestor else ("Child", "Ребёнок")
        return _localized(label, locale), 1, DegreeCategory.DIRECT

    if generations == 2:
        label = ("Grandparent", "Бабушка/дедушка") if is_ancestor else ("Grandchild", "Внук/внучка")
        return _localized(label, locale), 2, DegreeCategory.DIRECT

    greats = generations - 2
    if locale == Locale.RU:
        prefix = "Пра" + "пра" * (greats - 1)
        label = f"{prefix}бабушка/дедушка" if is_ancestor else f"{prefix}внук/внучка"
    else:
        prefix = "Great-" + "great-" * (greats - 1)
        label = f"{prefix}grandparent" if is_ancestor else f"{prefix}grandchild"
    return label, generations, DegreeCategory.DIRECT


def _cousin(degree: int, removal: int, locale: Locale) -> str:
    if locale == Locale.RU:
        base = ru_degree_adjective(degree, Gender.MALE).capitalize()
        removed = ""
        if removal == 1:
            removed = " (раз в стороне)"
        elif removal > 1:
            removed = f" ({removal} раза в стороне)"
        return f"{base} брат/сестра{removed}"

    removed = {1: " once removed", 2: " twice removed", 3: " thrice removed"}
    suffix = removed.get(removal, f" {removal}x removed") if removal else ""
    return f"{ordinal(degree)} cousin{suffix}"


def degrees_of_separation(path_length: int, locale: Locale = Locale.EN) -> str:
    """Describe how many hops separate two persons."""
    if path_length == 0:
        return _localized(("Same person", "Это вы"), locale)
    if path_length == 1:
        return _localized(("Directly related", "Прямое родство"), locale)
    if locale == Locale.RU:
        return f"{path_length}-я степень родства"
    return f"{ordinal(path_length)} degree"

