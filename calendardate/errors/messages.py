"""Default message templates for validation failure codes."""

from typing import Any, Mapping

DEFAULT_LABEL = "value"

MESSAGES: dict[str, str] = {
    "calendardate.base": "{label} must be a string",
    "calendardate.empty": "{label} is not allowed to be empty",
    "calendardate.trim": "{label} must not have leading or trailing whitespace",
    "calendardate.format": "{label} must be a valid date in {format} format",
    "calendardate.parse": "{label} with value {value} fails to be parsed by a callback",
    "calendardate.eq": "{label} must be equal to {date}",
    "calendardate.ge": "{label} must be greater or equal to {date}",
    "calendardate.gt": "{label} must be greater than {date}",
    "calendardate.le": "{label} must be less or equal to {date}",
    "calendardate.lt": "{label} must be less than {date}",
    "calendardate.future": "{label} must be in the future",
    "calendardate.past": "{label} must be in the past",
    "calendardate.exact": "{label} must be exactly {duration} away from {date}",
    "calendardate.min": "{label} must be at least {duration} away from {date}",
    "calendardate.max": "{label} must be at most {duration} away from {date}",
    "calendardate.ref": "{label} references {reference} which is not a valid calendar date",
}


class _Placeholders(dict):
    """Leaves unknown placeholders visible instead of raising KeyError."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def render_message(code: str, details: Mapping[str, Any], label: str = DEFAULT_LABEL) -> str:
    """
    Render the default message for a failure code.

    Args:
        code: Failure code such as ``calendardate.gt``
        details: Values substituted into the template
        label: Name of the validated field

    Returns:
        Human-readable message; the bare code when no template is registered
    """
    template = MESSAGES.get(code)
    if template is None:
        return code

    values = _Placeholders({key: _quote(value) for key, value in details.items()})
    values["label"] = label
    return template.format_map(values)


def _quote(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)
