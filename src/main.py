"""
1) Load the family tree JSON file into memory.
2) Validate the generations and their children links (done while loading).
3) Lay out every generation: tree ids, positions, lineage colors.
4) Write the Graphviz DOT description.
5) Optionally render it to an image.
"""

import argparse
from pathlib import Path
import sys

from parsing import load_family_data
from plotting import generate_dot_data, render_dot


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Lay out a multi-generation family tree as a Graphviz diagram."
    )
    parser.add_argument("input", type=Path, help="Family tree JSON file")
    parser.add_argument("--dot", type=Path, help="Where to write the DOT description")
    parser.add_argument(
        "--output", type=Path, help="Where to render the diagram (.svg, .png or .pdf)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show positions and joins in the person boxes",
    )
    args = parser.parse_args(argv)

    print(f"Loading family tree: {args.input}", file=sys.stderr)
    try:
        data = load_family_data(args.input)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    children_tree = data["children_tree"]
    n_people = sum(len(generation) for generation in children_tree)
    print(
        f"  Found {n_people} people in {len(children_tree)} generations",
        file=sys.stderr,
    )

    print("Laying out generations...", file=sys.stderr)
    dot, generations = generate_dot_data(data, show_debug_infos=args.debug)
    n_trees = len({p.position[0] for generation in generations for p in generation})
    print(f"  {n_trees} distinct trees", file=sys.stderr)

    if args.dot:
        print(f"Writing DOT to: {args.dot}", file=sys.stderr)
        args.dot.write_text(dot, encoding="utf-8")

    if args.output:
        print(f"Rendering graph to: {args.output}", file=sys.stderr)
        render_dot(dot, args.output)

    if not args.dot and not args.output:
        print(dot)

    print("Done!", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
