from __future__ import annotations


def stress_pattern_str(pattern: str) -> str:
    """Display form of a stress pattern: "102" -> "1-0-1" (2 folded into 1)."""
    if not pattern:
        return ""
    # normalize 2→1 so pattern is binary
    return "-".join("1" if d != "0" else "0" for d in pattern)


def metrical_name(pattern: str) -> str:
    mapping = {
        "1-0": "Trochee",
        "0-1": "Iamb",
        "1-0-0": "Dactyl",
        "0-0-1": "Anapest",
        "1-1": "Spondee",
        "0-1-0": "Amphibrach",
        "1-0-1": "Cretic",
        "0-1-1": "Bacchius",
        "1-1-0": "Antibacchius",
    }
    return mapping.get(pattern, "—")
