"""Small builders for test member lists."""

from models import Member, Relations


def person(
    member_id: str,
    name: str | None = None,
    gender: str = "other",
    birth: str | None = None,
    father: str | None = None,
    mother: str | None = None,
    spouse: str | None = None,
    children: tuple[str, ...] = (),
) -> Member:
    return Member(
        id=member_id,
        name=name or member_id,
        gender=gender,
        birth_date=birth,
        relations=Relations(father, mother, spouse, list(children)),
    )


def couple_with_child() -> list[Member]:
    """A and B married, C their only child."""
    return [
        person("A", "Adam", "male", spouse="B", children=("C",)),
        person("B", "Beth", "female", spouse="A", children=("C",)),
        person("C", "Carl", "male", father="A", mother="B"),
    ]


def single_parent_with_child() -> list[Member]:
    return [
        person("A", "Ann", "female", children=("C",)),
        person("C", "Cody", "male", mother="A"),
    ]
