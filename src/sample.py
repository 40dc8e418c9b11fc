"""A small three-generation family for trying out the layout."""

from models import Member, Relations


def sample_family() -> list[Member]:
    """
    The Smith family: grandparents, three children (one married), and five
    grandchildren listed out of birth order so sibling sorting shows.
    """
    return [
        Member("gp1", "John Smith Sr.", "male", "1930-01-01",
               relations=Relations(spouse_id="gm1", children_ids=["f1", "u1", "a1"])),
        Member("gm1", "Mary Smith", "female", "1932-03-15",
               relations=Relations(spouse_id="gp1", children_ids=["f1", "u1", "a1"])),
        Member("f1", "John Smith Jr.", "male", "1955-07-20",
               relations=Relations("gp1", "gm1", "m1", ["c1", "c2", "c3", "c4", "c5"])),
        Member("m1", "Jane Smith", "female", "1957-11-10",
               relations=Relations(spouse_id="f1", children_ids=["c1", "c2", "c3", "c4", "c5"])),
        Member("u1", "Bob Smith", "male", "1960-04-05",
               relations=Relations("gp1", "gm1", children_ids=["cousin1", "cousin2"])),
        Member("a1", "Susan Smith", "female", "1952-12-10",
               relations=Relations("gp1", "gm1")),
        Member("c1", "Alice Smith", "female", "1980-02-14", relations=Relations("f1", "m1")),
        Member("c2", "Tom Smith", "male", "1985-09-22", relations=Relations("f1", "m1")),
        Member("c3", "Sarah Smith", "female", "1982-06-15", relations=Relations("f1", "m1")),
        Member("c4", "Mike Smith", "male", "1978-11-30", relations=Relations("f1", "m1")),
        Member("c5", "Lisa Smith", "female", "1990-03-08", relations=Relations("f1", "m1")),
        Member("cousin1", "David Smith", "male", "1995-07-12", relations=Relations("u1")),
        Member("cousin2", "Emily Smith", "female", "1992-04-20", relations=Relations("u1")),
    ]
