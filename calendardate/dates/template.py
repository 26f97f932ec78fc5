"""
Format template compiler.

Turns templates such as ``DD/MM/YYYY`` into a FormatTemplate holding the
component widths, the literal separators and a strict matching pattern.
Templates name two or three of year, month and day, each at most once.
"""

import re
from functools import lru_cache

from ..errors import InvalidFormatTemplateError
from ..logging.config import get_logger
from .models import ComponentKind, ComponentSpec, FormatTemplate

logger = get_logger(__name__)

_TOKEN = r"(YYYY|YY|MM|M|DD|D)"
_SEPARATOR = r"([-,./\s]*)"

TEMPLATE_RE = re.compile(rf"^{_TOKEN}{_SEPARATOR}{_TOKEN}(?:{_SEPARATOR}{_TOKEN})?$")

TOKEN_WIDTHS = {
    "YYYY": 4,
    "YY": 2,
    "MM": 2,
    "M": 1,
    "DD": 2,
    "D": 1,
}

_GROUP_NAMES = {
    ComponentKind.YEAR: "year",
    ComponentKind.MONTH: "month",
    ComponentKind.DAY: "day",
}


def is_valid_template(template: object) -> bool:
    """Check whether a template would compile, without raising."""
    if not isinstance(template, str):
        return False
    try:
        compile_template(template)
    except InvalidFormatTemplateError:
        return False
    return True


def compile_template(template: str) -> FormatTemplate:
    """
    Compile a format template.

    Args:
        template: Template string, e.g. ``YYYY-MM-DD`` or ``M/D/YY``

    Returns:
        Immutable FormatTemplate

    Raises:
        InvalidFormatTemplateError: If the template does not follow the grammar
            or repeats a component kind
    """
    if not isinstance(template, str):
        raise InvalidFormatTemplateError(
            f"format expected non-empty string or a function, got '{template}'",
            template=template,
        )
    return _compile(template)


@lru_cache(maxsize=128)
def _compile(template: str) -> FormatTemplate:
    match = TEMPLATE_RE.match(template)
    if not match:
        raise InvalidFormatTemplateError(f"Invalid format string: '{template}'", template=template)

    # Groups alternate token, separator, token, separator, token
    groups = match.groups()
    tokens = [token for token in groups[0::2] if token is not None]
    separators = tuple(sep for sep in groups[1::2] if sep is not None)[:len(tokens) - 1]

    components = tuple(
        ComponentSpec(kind=ComponentKind(token[0]), width=TOKEN_WIDTHS[token], token=token)
        for token in tokens
    )

    kinds = [component.kind for component in components]
    if len(set(kinds)) != len(kinds):
        raise InvalidFormatTemplateError(
            f"Invalid format string: '{template}'",
            template=template,
            context={"reason": "duplicate component", "kinds": [kind.value for kind in kinds]},
        )

    compiled = FormatTemplate(
        source=template,
        components=components,
        separators=separators,
        pattern=_build_pattern(components, separators),
    )
    logger.debug("Compiled format template", template=template, tokens=tokens)
    return compiled


def _build_pattern(components: tuple[ComponentSpec, ...], separators: tuple[str, ...]) -> re.Pattern:
    parts = []
    for index, component in enumerate(components):
        parts.append(_component_pattern(component))
        if index < len(separators):
            parts.append(re.escape(separators[index]))
    return re.compile("".join(parts))


def _component_pattern(component: ComponentSpec) -> str:
    name = _GROUP_NAMES[component.kind]
    if component.variable_width:
        # Strict parsing: single-letter tokens never carry a leading zero
        return rf"(?P<{name}>[1-9][0-9]?)"
    return rf"(?P<{name}>[0-9]{{{component.width}}})"
