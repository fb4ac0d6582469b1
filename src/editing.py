"""
Editing operations on family tree data.

Every operation takes a FamilyData document and returns an edited copy; the
input is never modified. Invalid edits raise ValueError with the message
of the failed name or title check.
"""

import copy

from models import FamilyData, Generation, PersonData
from validation import is_name_valid, is_title_valid


def _generation(data: FamilyData, generation: int) -> Generation:
    tree = data["children_tree"]
    if not 0 <= generation < len(tree):
        raise ValueError(f"Generation {generation} does not exist")
    return tree[generation]


def _person(data: FamilyData, generation: int, name: str) -> PersonData:
    people = _generation(data, generation)
    if name not in people:
        raise ValueError(f"Person {name!r} not found in generation {generation}")
    return people[name]


def _check_name(name: str, generation_names) -> None:
    ok, error = is_name_valid(name, list(generation_names))
    if not ok:
        raise ValueError(error)


def _new_person(title: str | None) -> PersonData:
    if not title:
        return {"children": []}
    ok, error = is_title_valid(title)
    if not ok:
        raise ValueError(error)
    return {"children": [], "title": title}


def add_generation(data: FamilyData) -> FamilyData:
    data = copy.deepcopy(data)
    data["children_tree"].append({})
    return data


def remove_generation(data: FamilyData, generation: int) -> FamilyData:
    """Remove an empty generation. Generations holding people are kept."""
    data = copy.deepcopy(data)
    if _generation(data, generation):
        raise ValueError("Only an empty generation can be removed.")
    del data["children_tree"][generation]
    return data


def add_person(data: FamilyData, generation: int, name: str, title: str | None = None) -> FamilyData:
    """
    Add a childless person at the end of a generation.

    Missing generations up to `generation` are created. An empty title means
    no title.
    """
    data = copy.deepcopy(data)
    tree = data["children_tree"]
    while len(tree) <= generation:
        tree.append({})

    _check_name(name, tree[generation])
    tree[generation][name] = _new_person(title)
    return data


def rename_person(data: FamilyData, generation: int, old_name: str, new_name: str) -> FamilyData:
    """
    Rename a person, keeping their place in the generation, and update the
    children lists of their parents.
    """
    data = copy.deepcopy(data)
    _person(data, generation, old_name)
    if new_name == old_name:
        return data

    people = data["children_tree"][generation]
    _check_name(new_name, (name for name in people if name != old_name))

    data["children_tree"][generation] = {
        (new_name if name == old_name else name): person_data
        for name, person_data in people.items()
    }

    if generation > 0:
        for parent_data in data["children_tree"][generation - 1].values():
            parent_data["children"] = [
                new_name if child == old_name else child for child in parent_data["children"]
            ]
    return data


def set_title(data: FamilyData, generation: int, name: str, title: str | None) -> FamilyData:
    data = copy.deepcopy(data)
    person_data = _person(data, generation, name)
    if not title:
        person_data.pop("title", None)
        return data

    ok, error = is_title_valid(title)
    if not ok:
        raise ValueError(error)
    person_data["title"] = title
    return data


def remove_person(data: FamilyData, generation: int, name: str) -> FamilyData:
    """Remove a person and drop them from their parents' children lists."""
    data = copy.deepcopy(data)
    _person(data, generation, name)
    del data["children_tree"][generation][name]

    if generation > 0:
        for parent_data in data["children_tree"][generation - 1].values():
            parent_data["children"] = [c for c in parent_data["children"] if c != name]
    return data


def add_child(data: FamilyData, generation: int, name: str, child: str) -> FamilyData:
    """
    Make `child` a child of `name`.

    The child is created, without a title, in the next generation when it
    does not exist yet; the next generation is created too if needed.
    """
    data = copy.deepcopy(data)
    person_data = _person(data, generation, name)
    if child in person_data["children"]:
        return data

    tree = data["children_tree"]
    if len(tree) <= generation + 1:
        tree.append({})
    if child not in tree[generation + 1]:
        _check_name(child, tree[generation + 1])
        tree[generation + 1][child] = {"children": []}

    person_data["children"].append(child)
    return data


def remove_child(data: FamilyData, generation: int, name: str, child: str) -> FamilyData:
    """Unlink a child from a parent. The child stays in the next generation."""
    data = copy.deepcopy(data)
    person_data = _person(data, generation, name)
    person_data["children"] = [c for c in person_data["children"] if c != child]
    return data


def add_parent(data: FamilyData, generation: int, name: str, parent: str) -> FamilyData:
    """
    Make `parent` a parent of `name`.

    The parent is created in the previous generation when it does not exist
    yet. People of the first generation cannot get parents.
    """
    if generation == 0:
        raise ValueError("People of the first generation cannot have parents.")

    data = copy.deepcopy(data)
    _person(data, generation, name)
    previous = data["children_tree"][generation - 1]
    if parent not in previous:
        _check_name(parent, previous)
        previous[parent] = {"children": []}

    if name not in previous[parent]["children"]:
        previous[parent]["children"].append(name)
    return data


def remove_parent(data: FamilyData, generation: int, name: str, parent: str) -> FamilyData:
    if generation == 0:
        raise ValueError("People of the first generation cannot have parents.")

    data = copy.deepcopy(data)
    _person(data, generation, name)
    parent_data = _person(data, generation - 1, parent)
    parent_data["children"] = [c for c in parent_data["children"] if c != name]
    return data


def parents_of(data: FamilyData, generation: int, name: str) -> list[str]:
    """Names of the people of the previous generation listing `name` as a child."""
    _person(data, generation, name)
    if generation == 0:
        return []
    return [
        parent
        for parent, parent_data in data["children_tree"][generation - 1].items()
        if name in parent_data["children"]
    ]
