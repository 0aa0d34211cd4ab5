from collections import Counter

def with_staff_counts(roles: list[dict], staff: list[dict]) -> list[dict]:
    """staffCount is a projection over the roster; it is never stored."""
    counts = Counter(s.get("role") for s in staff)
    return [{**r, "staffCount": counts.get(r["name"], 0)} for r in roles]

def staff_count(role_name: str, staff: list[dict]) -> int:
    return sum(1 for s in staff if s.get("role") == role_name)
