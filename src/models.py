"""Data classes for family tree entities."""

from dataclasses import dataclass, field
from typing import NotRequired, TypedDict


class PersonData(TypedDict):
    children: list[str]
    title: NotRequired[str | None]


# One generation maps person name -> person data, in display order
Generation = dict[str, PersonData]


class FamilyData(TypedDict):
    first_year: int
    children_tree: list[Generation]


@dataclass(eq=False)
class Person:
    """
    A person node of the layout graph.

    Nodes are rebuilt from the family data on every layout run. `children` is
    authoritative; `parents` is derived from it. `position` starts as [None]
    and is filled in by the position assigner: the first component is the
    tree (lineage) id, the following ones order the person inside that tree.
    """

    name: str
    generation: int
    joins: int = 0
    children: list["Person"] = field(default_factory=list)
    parents: list["Person"] = field(default_factory=list)
    title: str | None = None
    invisible: bool = False
    position: list[int | None] = field(default_factory=lambda: [None])
    color: str | None = None

    @property
    def node_id(self) -> str:
        # Names are only unique within a generation
        return f"{self.name}_{self.generation}"

    @property
    def tree(self) -> int | None:
        return self.position[0]

    def __repr__(self) -> str:
        children = ", ".join(c.name for c in self.children)
        parents = ", ".join(p.name for p in self.parents)
        position = ", ".join(str(x) for x in self.position)
        return (
            f"Person(name={self.name}, generation={self.generation}, "
            f"children=[{children}], parents=[{parents}], "
            f"position=[{position}], color={self.color})"
        )


def sortable_position(position: list[int | None], width: int) -> tuple[int, ...]:
    """Pad a position with trailing zeros up to `width` components."""
    padded = [0 if x is None else x for x in position]
    padded.extend([0] * (width - len(padded)))
    return tuple(padded)


def compare_positions(a: list[int | None], b: list[int | None]) -> int:
    """
    Compare two positions lexicographically, missing trailing components
    counting as 0. Returns -1, 0 or 1.
    """
    width = max(len(a), len(b))
    key_a = sortable_position(a, width)
    key_b = sortable_position(b, width)
    return (key_a > key_b) - (key_a < key_b)


def sort_by_position(people: list[Person]):
    """Stable in-place sort of people by their padded position."""
    if not people:
        return
    width = max(len(p.position) for p in people)
    people.sort(key=lambda p: sortable_position(p.position, width))
