"""Left-to-right ordering of people inside each generation."""

from collections import Counter
import math

from graph import build_people, count_joins
from models import Generation, Person, sort_by_position

# Second position component given to a lineage absorbed by another one.
# Must stay far above any sibling sub-position (bounded by the fan-out width).
MERGE_OFFSET = 1000


def _group_score(group: list[Person]) -> tuple[int, int, int]:
    return (
        sum(child.joins for child in group),
        sum(len(child.parents) for child in group),
        sum(len(child.children) for child in group),
    )


def coparent_groups(children: list[Person]) -> list[list[Person]]:
    """
    Split siblings into co-parent groups: people sharing exactly the same
    non-empty set of children. Groups keep first-seen order.
    """
    groups: list[list[Person]] = []
    processed: set[Person] = set()

    for child in children:
        if child in processed:
            continue

        names = {c.name for c in child.children}
        group = [child]
        for other in children:
            if other is child or other in processed:
                continue
            if names and {c.name for c in other.children} == names:
                group.append(other)

        processed.update(group)
        groups.append(group)

    return groups


def sort_children(children: list[Person]) -> list[Person]:
    """
    Order siblings so that co-parents stay side by side.

    Groups are sorted from the least to the most entangled (joins, then
    parents, then children) and laid out as a pyramid: each group goes to the
    right end when the row has an even length, to the left end otherwise.
    With an odd number of groups the row is reversed so the most promising
    group always ends up on the same side.
    """
    groups = coparent_groups(children)
    groups.sort(key=_group_score)

    row: list[Person] = []
    for group in groups:
        group.sort(key=lambda p: (len(p.parents), len(p.children)))
        if len(row) % 2 == 0:
            row = row + group
        else:
            row = group + row

    if len(groups) % 2 == 1:
        row.reverse()

    return row


def _start_trees(people: list[Person], next_tree: int) -> int:
    """Give every unpositioned person a new tree id, biggest families first."""
    for person in sorted(people, key=lambda p: -len(p.children)):
        if person.position[0] is None:
            person.position = [next_tree]
            next_tree += 1
    return next_tree


def _child_subposition(parent: Person, index: int, count: int, same_side: bool) -> int:
    last = parent.position[-1]
    if same_side:
        # Stack the remaining children further on the parent's side
        if last < 0:
            return last - 1 - index
        return last + 1 + index

    # With an odd count, the middle child gets the sign of its parent
    subposition = index - math.ceil(count / 2)
    if subposition >= 0:
        subposition += 1
    if last > 0:
        subposition = -subposition
    return subposition


def merge_trees(
    generations: list[list[Person]], child: Person, parent: Person, generation_index: int
):
    """
    Re-root the whole tree of `parent` under `child`, which already belongs
    to another tree.

    The child's last component is pushed one step away from zero so it
    leaves its sibling set, then every member of the absorbed tree gets the
    child's position prefix behind a large offset. The absorbed tree is
    mirrored when both sides lean the same way.
    """
    if len(child.position) == 1:
        child.position = [child.position[0], 1]

    if child.position[-1] >= 0:
        child.position[-1] += 1
    else:
        child.position[-1] -= 1

    absorbed = parent.position[0]
    reverse = (parent.position[-1] > 0) == (child.position[-1] > 0)
    offset = MERGE_OFFSET + generation_index
    if child.position[-1] <= 0:
        offset = -offset
    prefix = [child.position[0], offset, *child.position[1:]]

    for generation in generations:
        for person in generation:
            if person is child or person.position[0] != absorbed:
                continue
            # Preserve previous subpositions
            tail = person.position[1:]
            if reverse:
                tail = [-x for x in tail]
            person.position = prefix + tail


def assign_positions(generations: list[list[Person]]) -> list[list[Person]]:
    """
    Give every person a position, generation by generation.

    First-generation people and orphans start new trees. Children are placed
    around their parent, nested under its position; a lone child takes its
    parent's exact position. A child whose other parent belongs to another
    tree merges that tree into the child's one.
    """
    if not generations:
        return generations

    next_tree = _start_trees(generations[0], 0)

    for index, generation in enumerate(generations):
        sort_by_position(generation)

        for person in generation:
            siblings = sort_children(person.children)
            same_side = any(child.position[0] is not None for child in person.children)

            for i, child in enumerate(siblings):
                if child.position[0] is not None:
                    continue

                if len(person.children) == 1:
                    child.position = list(person.position)
                else:
                    subposition = _child_subposition(person, i, len(siblings), same_side)
                    child.position = [*person.position, subposition]

                # Give the child sub position to every other parent's tree
                for parent in child.parents:
                    if parent is not person and parent.position[0] != child.position[0]:
                        merge_trees(generations, child, parent, index)

        # Orphans start their own tree
        if index + 1 < len(generations):
            next_tree = _start_trees(generations[index + 1], next_tree)

    return generations


def tree_sizes(generations: list[list[Person]]) -> Counter:
    """Number of people (invisible ones included) per tree id."""
    return Counter(person.position[0] for generation in generations for person in generation)


def reindex_trees(generations: list[list[Person]]) -> list[list[Person]]:
    """
    Renumber tree ids 0, 1, 2, ... from the biggest tree to the smallest,
    then re-sort every generation.
    """
    mapping = {
        tree: rank for rank, (tree, _) in enumerate(tree_sizes(generations).most_common())
    }
    for generation in generations:
        for person in generation:
            person.position[0] = mapping[person.position[0]]

    for generation in generations:
        sort_by_position(generation)

    return generations


def sort_data(children_tree: list[Generation]) -> list[list[Person]]:
    """Build, position and order the Person graph of a children tree."""
    generations = build_people(children_tree)
    count_joins(generations)
    assign_positions(generations)
    return reindex_trees(generations)
