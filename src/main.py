"""
Command line for editing a family tree and laying it out.

1) Keep the member list in a SQLite key/value store.
2) Add, edit, link and delete members; import/export JSON or import GEDCOM.
3) Assign generations, lay out rows, and synthesize junctions and edges.
4) Validate the data and render the diagram with Graphviz.
"""

import argparse
import json
import logging
from pathlib import Path
import sys

from config import DEFAULT_CONFIG, LayoutConfig, resolve_db_path
from diagram import build_diagram, diagram_to_dict
from errors import ImportFormatError, MemberNotFoundError
from gedcom import read_gedcom
from graph import family_components
from interchange import DEFAULT_EXPORT_NAME, export_members, load_members
from models import GENDERS, Member, Relations, generate_id
from repository import PARENT_ROLES, MemberRepository
from sample import sample_family
from validation import validate_members


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="famtree", description="Family tree builder and layout engine.")
    parser.add_argument("--db", help="SQLite database path (default: $FAMTREE_DB or ./family_tree.db)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all members.")

    add = sub.add_parser("add", help="Add a member.")
    add.add_argument("name")
    add.add_argument("--id", help="Member id (default: generated)")
    add.add_argument("--gender", choices=GENDERS, default="other")
    add.add_argument("--birth")
    add.add_argument("--death")
    add.add_argument("--father")
    add.add_argument("--mother")
    add.add_argument("--spouse")

    update = sub.add_parser("update", help="Edit a member's fields.")
    update.add_argument("id")
    update.add_argument("--name")
    update.add_argument("--gender", choices=GENDERS)
    update.add_argument("--birth")
    update.add_argument("--death")

    delete = sub.add_parser("delete", help="Delete a member and every reference to it.")
    delete.add_argument("id")

    spouse = sub.add_parser("spouse", help="Marry two members, or unlink with --none.")
    spouse.add_argument("id")
    spouse.add_argument("spouse_id", nargs="?")
    spouse.add_argument("--none", action="store_true", help="Remove the spouse link.")

    parent = sub.add_parser("parent", help="Set a member's father or mother.")
    parent.add_argument("child_id")
    parent.add_argument("role", choices=PARENT_ROLES)
    parent.add_argument("parent_id", nargs="?", help="Omit to clear the link.")

    imp = sub.add_parser("import", help="Replace all members with a JSON export.")
    imp.add_argument("path", type=Path)

    ged = sub.add_parser("import-gedcom", help="Replace all members with a GEDCOM file.")
    ged.add_argument("path", type=Path)

    exp = sub.add_parser("export", help="Export all members as JSON.")
    exp.add_argument("path", type=Path, nargs="?", default=Path(DEFAULT_EXPORT_NAME))

    sub.add_parser("sample", help="Add the sample Smith family.")
    sub.add_parser("clear", help="Delete all members.")
    sub.add_parser("validate", help="Report data problems.")

    for name, help_text in (("layout", "Print nodes and edges as JSON."), ("render", "Render the diagram.")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--generation-spacing", type=float)
        cmd.add_argument("--node-spacing", type=float)
        cmd.add_argument("--couple-spacing", type=float)
        if name == "render":
            cmd.add_argument("-o", "--output", type=Path, help="png, svg, pdf or dot file (default: show)")
            cmd.add_argument("--scale", type=float, default=0.5)

    return parser


def layout_config(args: argparse.Namespace) -> LayoutConfig:
    return DEFAULT_CONFIG.with_overrides(
        generation_spacing=args.generation_spacing,
        node_spacing=args.node_spacing,
        couple_spacing=args.couple_spacing,
    )


def run(args: argparse.Namespace, repo: MemberRepository) -> int:
    if args.command == "list":
        members = repo.get_all()
        for m in members:
            r = m.relations
            print(
                f"{m.id:12} {m.name:24} {m.gender:6} {m.birth_date or '':10} "
                f"father={r.father_id or '-'} mother={r.mother_id or '-'} spouse={r.spouse_id or '-'}"
            )
        print(f"{len(members)} family member{'s' if len(members) != 1 else ''}")

    elif args.command == "add":
        member = Member(
            id=args.id or generate_id(),
            name=args.name.strip(),
            gender=args.gender,
            birth_date=args.birth,
            death_date=args.death,
            relations=Relations(father_id=args.father, mother_id=args.mother, spouse_id=args.spouse),
        )
        added = repo.add(member)
        print(f"Added {added.name} ({added.id})")

    elif args.command == "update":
        changes = {
            "name": args.name,
            "gender": args.gender,
            "birth_date": args.birth,
            "death_date": args.death,
        }
        updated = repo.update(args.id, **{k: v for k, v in changes.items() if v is not None})
        print(f"Updated {updated.name} ({updated.id})")

    elif args.command == "delete":
        repo.delete(args.id)
        print(f"Deleted {args.id}")

    elif args.command == "spouse":
        if not args.none and not args.spouse_id:
            print("Give a spouse id or --none")
            return 1
        repo.set_spouse(args.id, None if args.none else args.spouse_id)
        print(f"Updated spouse of {args.id}")

    elif args.command == "parent":
        repo.set_parent(args.child_id, args.parent_id, args.role)
        print(f"Updated {args.role} of {args.child_id}")

    elif args.command == "import":
        members = load_members(args.path)
        repo.replace_all(members)
        print(f"Imported {len(members)} members from {args.path}")

    elif args.command == "import-gedcom":
        print(f"Parsing GEDCOM file: {args.path}")
        members = read_gedcom(args.path)
        repo.replace_all(members)
        print(f"Imported {len(members)} members")

    elif args.command == "export":
        members = repo.get_all()
        export_members(members, args.path)
        print(f"Exported {len(members)} members to {args.path}")

    elif args.command == "sample":
        existing = repo.get_all()
        sample = sample_family()
        clashes = {m.id for m in existing} & {m.id for m in sample}
        if clashes:
            raise ValueError(f"Sample ids already in use: {', '.join(sorted(clashes))}")
        repo.replace_all(existing + sample)
        print(f"Added {len(sample)} sample family members")

    elif args.command == "clear":
        count = len(repo)
        repo.clear()
        print(f"Removed {count} members")

    elif args.command == "validate":
        warnings = validate_members(repo.get_all())
        if warnings:
            print(f"Found {len(warnings)} validation warnings:")
            for w in warnings:
                print(f"  - {w}")
        else:
            print("No validation issues found")

    elif args.command in ("layout", "render"):
        members = repo.get_all()
        diagram = build_diagram(members, layout_config(args), repo.layout_version)
        if args.command == "layout":
            print(json.dumps(diagram_to_dict(diagram), indent=2))
        else:
            families = family_components(members)
            print(f"Laying out {len(members)} members in {len(families)} separate families")
            for anomaly in diagram.anomalies:
                print(f"  - {anomaly}")
            # Graphviz and matplotlib are only needed here
            from plotting import plot_diagram

            plot_diagram(diagram, args.output, args.scale)

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    db_path = resolve_db_path(args.db)
    try:
        with MemberRepository(db_path) as repo:
            return run(args, repo)
    except (ImportFormatError, MemberNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
