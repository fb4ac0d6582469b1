"""Ordinal names for generation numbers."""


def french_ordinal(number: int, feminine: bool = True) -> str:
    """French abbreviated ordinal: 1ère / 1er, then 2ème, 3ème, ..."""
    if number == 1:
        return "1ère" if feminine else "1er"
    return f"{number}ème"


def english_ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"
