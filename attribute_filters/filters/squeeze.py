import re
from typing import Any

from attribute_filters._helper import each_element
from attribute_filters.filtering import FilterContext
from attribute_filters.filters.base import AttributeFilter, option_aliases

__all__ = ("SQUEEZE", "SQUISH")

_ANY_RUN = re.compile(r"(.)\1+", re.DOTALL)


def _character_class(characters: str) -> str:
    """Translate a character selection like ``a-z`` or ``^0-9`` to a regex class.

    A hyphen between two characters denotes a range, a leading caret negates
    the selection and a backslash makes the next character literal.
    """
    negate = len(characters) > 1 and characters.startswith("^")
    if negate:
        characters = characters[1:]
    literals = []
    escaped = False
    for character in characters:
        if escaped:
            literals.append((character, True))
            escaped = False
        elif character == "\\":
            escaped = True
        else:
            literals.append((character, False))
    if escaped:
        literals.append(("\\", True))

    parts = []
    index = 0
    while index < len(literals):
        character, _ = literals[index]
        if (
            index + 2 < len(literals)
            and literals[index + 1] == ("-", False)
        ):
            parts.append(
                f"{re.escape(character)}-{re.escape(literals[index + 2][0])}"
            )
            index += 3
        else:
            parts.append(re.escape(character))
            index += 1
    return f"[{'^' if negate else ''}{''.join(parts)}]"


def _runs_of(characters: str | None) -> re.Pattern[str]:
    if not characters:
        return _ANY_RUN
    return re.compile(f"({_character_class(characters)})\\1+", re.DOTALL)


def squeeze(value: Any, context: FilterContext) -> Any:
    """Collapse runs of the same character into one character.

    When ``squeeze_other_str`` is annotated, only runs of the characters it
    selects are collapsed. It accepts ranges such as ``a-z`` and a leading
    ``^`` selecting every other character.
    """
    pattern = _runs_of(context.annotation("squeeze_other_str"))
    return each_element(
        value, lambda text: pattern.sub(r"\1", text), only=str
    )


def _squish(text: str) -> str:
    return " ".join(text.split())


def squish(value: Any, context: FilterContext) -> Any:
    """Strip the value and collapse inner whitespace into single spaces."""
    return each_element(value, _squish, only=str)


SQUEEZE = AttributeFilter(
    name="squeeze",
    set_name="should_be_squeezed",
    transform=squeeze,
    options=option_aliases(
        squeeze_other_str=("characters", "chars", "only", "other_str"),
    ),
    default_option="squeeze_other_str",
)

SQUISH = AttributeFilter(
    name="squish",
    set_name="should_be_squished",
    transform=squish,
)
