"""Loading of family tree JSON documents."""

import json
from pathlib import Path

from models import FamilyData
from validation import validate_data


def parse_family_data(text: str) -> FamilyData:
    """
    Parse a family tree JSON document and check it.

    The document must look like:
        {"first_year": 2020, "children_tree": [{"A": {"children": ["X"]}}, ...]}

    Raises ValueError with a readable message when it does not.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not read the JSON document: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("The JSON document must be an object.")

    if data.get("children_tree") is None:
        raise ValueError("The JSON document must have a 'children_tree' property.")

    first_year = data.get("first_year")
    if first_year is None:
        raise ValueError("The JSON document must have a 'first_year' property.")
    # bool is a subclass of int
    if not isinstance(first_year, int) or isinstance(first_year, bool):
        raise ValueError("The 'first_year' property must be an integer.")

    errors = validate_data(data["children_tree"])
    if errors:
        raise ValueError(f"Invalid data: {errors[0]}")

    return data


def load_family_data(filepath: Path) -> FamilyData:
    """Read and check a family tree JSON file."""
    filepath = Path(filepath)
    if filepath.suffix.lower() != ".json":
        raise ValueError(f"Please select a JSON file: {filepath}")

    return parse_family_data(filepath.read_text(encoding="utf-8"))
