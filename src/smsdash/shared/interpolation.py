"""
Message template interpolation.

Templates use ``{{ name }}`` placeholders, e.g.::

    interpolate_message("Hello {{name}}, your code is {{ code }}",
                        {"name": "João", "code": "123"})
    # -> "Hello João, your code is 123"
"""

import re
from collections.abc import Mapping
from typing import Any

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([^}]+?)\s*\}\}")


def interpolate_message(template: str, variables: Mapping[str, Any]) -> str:
    """Replace ``{{ key }}`` placeholders with the matching variable values.

    Falsy values render as an empty string. Placeholders with no matching
    key are left untouched.
    """
    result = template
    for key, value in variables.items():
        placeholder = re.compile(r"\{\{\s*" + re.escape(str(key)) + r"\s*\}\}")
        replacement = str(value) if value else ""
        result = placeholder.sub(lambda _m, r=replacement: r, result)
    return result


def extract_variables(template: str) -> list[str]:
    """Return the unique placeholder names used in a template, in order."""
    seen: dict[str, None] = {}
    for match in _PLACEHOLDER_RE.finditer(template):
        seen.setdefault(match.group(1).strip(), None)
    return list(seen)
