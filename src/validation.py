"""Validation of family tree data before layout."""

from ordinals import english_ordinal

FORBIDDEN_CHARACTERS = ',;:"\\{}[]<>'
MAX_NAME_LENGTH = 100


def validate_data(children_tree) -> list[str]:
    """
    Validate the structure of a children tree:
    - The tree is a list of generations, each a dict of name -> person data
    - Every person data is a dict with a 'children' list of strings
    - Every child is a person of the next generation

    The layout code relies on all of these. Returns a list of error messages.
    """
    errors: list[str] = []

    if not isinstance(children_tree, list):
        return ["'children_tree' must be a list."]

    for index, generation in enumerate(children_tree):
        where = f"the {english_ordinal(index + 1)} generation"

        if not isinstance(generation, dict):
            errors.append(f"The {english_ordinal(index + 1)} generation is not a dictionary.")
            continue

        next_generation = children_tree[index + 1] if index + 1 < len(children_tree) else {}
        next_names = set(next_generation) if isinstance(next_generation, dict) else set()

        for name, person_data in generation.items():
            if not isinstance(name, str):
                errors.append(f"The key '{name}' in {where} is not a string.")
                continue

            if not isinstance(person_data, dict):
                errors.append(f"The value of '{name}' in {where} is not a dictionary.")
                continue

            if "children" not in person_data:
                errors.append(f"The 'children' key is missing for '{name}' in {where}.")
                continue

            children = person_data["children"]
            if not isinstance(children, list):
                errors.append(f"The 'children' value of '{name}' in {where} is not a list.")
                continue

            title = person_data.get("title")
            if title is not None and not isinstance(title, str):
                errors.append(f"The title of '{name}' in {where} is not a string.")

            for child in children:
                if not isinstance(child, str):
                    errors.append(
                        f"The element '{child}' in the children of '{name}' in {where} "
                        f"is not a string."
                    )
                elif child not in next_names:
                    errors.append(
                        f"The name '{child}' (child of '{name}' in {where}) is not a person "
                        f"of the {english_ordinal(index + 2)} generation."
                    )

    return errors


def _check_text(text: str, what: str) -> str | None:
    if any(c in text for c in FORBIDDEN_CHARACTERS):
        return f"The {what} contains invalid characters among {' '.join(FORBIDDEN_CHARACTERS)}"
    if len(text) > MAX_NAME_LENGTH:
        return f"The {what} is too long."
    return None


def is_name_valid(name: str, generation_names: list[str]) -> tuple[bool, str | None]:
    """Check a person name before adding it to a generation."""
    if name.strip() == "":
        return False, "The name cannot be empty."
    error = _check_text(name, "name")
    if error:
        return False, error
    if name in generation_names:
        return False, "This name is already used in this generation."
    return True, None


def is_title_valid(title: str) -> tuple[bool, str | None]:
    error = _check_text(title, "title")
    return error is None, error
