from smsdash.shared.exceptions import ValidationError


def required_text(value: str | None, field: str) -> str:
    """Return the stripped value, or raise the 400 the dashboard forms expect."""
    if value is None or not value.strip():
        raise ValidationError(
            f"Missing required field: {field}",
            "MISSING_FIELD",
            {"field": field},
        )
    return value.strip()
