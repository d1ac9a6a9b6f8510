def ensure_positive_int(value, field: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be an integer") from None
    if number < 1:
        raise ValueError(f"{field} must be > 0")
    return number


def require_str(value, field: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValueError(f"{field} required")
    return text
