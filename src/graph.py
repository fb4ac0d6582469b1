"""Person graph building and NetworkX export."""

import networkx as nx

from models import Generation, Person


def build_people(children_tree: list[Generation]) -> list[list[Person]]:
    """
    Build the linked Person graph from the raw generations.

    Every visible person without children gets one invisible child in the
    next generation, so the renderer keeps the same vertical spacing under
    every branch. Childless people of the last generation get theirs in an
    extra trailing generation made only of invisible people.

    The children tree is assumed to be valid (see validation.validate_data).
    """
    # Create persons without the children and parents
    generations: list[list[Person]] = [
        [
            Person(name, index, title=data.get("title") or None)
            for name, data in generation.items()
        ]
        for index, generation in enumerate(children_tree)
    ]
    if not generations:
        return generations

    # Add children
    spacers: list[Person] = []
    for generation in generations:
        for person in generation:
            if person.invisible:
                continue

            children_names = children_tree[person.generation][person.name]["children"]
            if children_names:
                # Keep the next generation's order, not the declaration order
                person.children = [
                    p
                    for p in generations[person.generation + 1]
                    if not p.invisible and p.name in children_names
                ]
                continue

            dummy = Person(f"inv_{person.name}", person.generation + 1, invisible=True)
            person.children = [dummy]
            if person.generation + 1 < len(generations):
                generations[person.generation + 1].append(dummy)
            else:
                spacers.append(dummy)

    if spacers:
        generations.append(spacers)

    # Add parents
    for index in range(1, len(generations)):
        for person in generations[index]:
            person.parents = [p for p in generations[index - 1] if person in p.children]

    return generations


def count_joins(generations: list[list[Person]]) -> list[list[Person]]:
    """
    Count, for every person, the joins they are responsible for.

    A join is the meeting of two lineages that were distinct until a shared
    child linked them. A child with n parents accounts for n - 1 joins, and
    every person carries the joins of all their descendants.
    """
    for generation in reversed(generations):
        for person in generation:
            person.joins += sum(child.joins for child in person.children)
            if len(person.parents) > 1:
                person.joins += len(person.parents) - 1
    return generations


def find_person(generations: list[list[Person]], name: str, generation: int) -> Person:
    """Look up a visible person by name in a given generation."""
    if 0 <= generation < len(generations):
        for person in generations[generation]:
            if person.name == name and not person.invisible:
                return person
    raise ValueError(f"Person {name!r} not found in generation {generation}")


def build_graph(generations: list[list[Person]]) -> nx.DiGraph:
    """
    Export the laid out Person graph as a NetworkX directed graph.

    Nodes are keyed by Person.node_id and carry the layout metadata
    (position, color, joins). Edges go from parent to child.
    """
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for generation in generations:
        for person in generation:
            G.add_node(
                person.node_id,
                person_name=person.name,
                generation=person.generation,
                position=tuple(person.position),
                color=person.color,
                joins=person.joins,
                title=person.title,
                invisible=person.invisible,
            )

    for generation in generations:
        for person in generation:
            for child in person.children:
                G.add_edge(person.node_id, child.node_id)

    return G
