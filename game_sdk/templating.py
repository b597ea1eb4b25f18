"""Placeholder substitution for function request templates.

Templates reference values with ``{{ name }}``. Substitution is a single
pass: inserted text is never scanned again, and a name with no value
becomes an empty string.
"""

import json
import re
from typing import Any, List, Mapping

PLACEHOLDER_PATTERN = re.compile(r"\{\{(.*?)\}\}")

_MISSING = object()


def find_placeholders(template: str) -> List[str]:
    """Return the trimmed placeholder names in order of appearance."""
    return [match.strip() for match in PLACEHOLDER_PATTERN.findall(template)]


def has_placeholders(template: str) -> bool:
    return PLACEHOLDER_PATTERN.search(template) is not None


def interpolate(template: str, values: Mapping[str, Any]) -> str:
    """
    Replace every ``{{ key }}`` in ``template`` with its value.

    A key that is not present is looked up as a dotted path
    (``response.result.message_id``) through nested mappings and lists.
    Anything still unresolved is replaced with an empty string.

    Args:
        template: Text containing zero or more placeholders
        values: Values keyed by placeholder name

    Returns:
        The interpolated text
    """
    def replace(match: "re.Match[str]") -> str:
        return _render(_lookup(values, match.group(1).strip()))

    return PLACEHOLDER_PATTERN.sub(replace, template)


def _lookup(values: Mapping[str, Any], key: str) -> Any:
    if key in values:
        return values[key]
    if "." not in key:
        return None

    current: Any = values
    for part in key.split("."):
        if isinstance(current, Mapping):
            current = current.get(part, _MISSING)
        elif isinstance(current, (list, tuple)) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else _MISSING
        else:
            return None
        if current is _MISSING:
            return None
    return current


def _render(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
