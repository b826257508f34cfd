"""
Password generation rules.

Rules are parsed and validated once, when they are built. The generator only
ever sees closed enum values, never raw mode strings.
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import ConfigurationError
from .utils.validation import get_rules_errors

logger = logging.getLogger(__name__)


class Transformation(Enum):
    """Case policy applied to every word of a password."""

    NONE = "NONE"
    CAPITALISE = "CAPITALISE"
    ALL_EXCEPT_FIRST = "ALL_EXCEPT_FIRST"
    UPPERCASE = "UPPERCASE"
    RANDOM = "RANDOM"
    ALTERNATING = "ALTERNATING"

    @classmethod
    def parse(cls, value: Union[str, "Transformation"]) -> "Transformation":
        """
        Parse a transformation identifier.

        Matching is case-insensitive, accepts '-' or spaces for '_' and the
        American spelling CAPITALIZE.

        Raises:
            ConfigurationError: If the identifier is unknown
        """
        if isinstance(value, cls):
            return value

        if not isinstance(value, str):
            raise ConfigurationError(f"transform must be a string, got {value!r}")

        name = value.strip().upper().replace("-", "_").replace(" ", "_")
        name = _TRANSFORMATION_ALIASES.get(name, name)

        try:
            return cls[name]
        except KeyError as e:
            options = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"Unknown transform '{value}'. Options are: {options}"
            ) from e


_TRANSFORMATION_ALIASES = {
    "CAPITALIZE": "CAPITALISE",
    "ALLEXCEPTFIRST": "ALL_EXCEPT_FIRST",
}


class SeparatorMode(Enum):
    """How the character between password components is chosen."""

    NONE = "NONE"
    RANDOM = "RANDOM"
    FIXED = "FIXED"


# Values of the persisted separator_char field that select a mode instead of characters
_SEPARATOR_KEYWORDS = {
    "": SeparatorMode.NONE,
    "NONE": SeparatorMode.NONE,
    "RANDOM": SeparatorMode.RANDOM,
}

DEFAULT_SEPARATOR_ALPHABET = "!@$%.&*-+=?:;"


@dataclass(frozen=True)
class Rules:
    """Validated configuration for one batch of passwords."""

    words: int = 2
    min_length: int = 5
    max_length: int = 7
    transform: Transformation = Transformation.CAPITALISE
    separator_mode: Optional[SeparatorMode] = None
    separator_char: str = ""
    separator_alphabet: str = DEFAULT_SEPARATOR_ALPHABET
    match_random_char: bool = True
    digits_before: int = 0
    digits_after: int = 3
    amount: int = 3

    def __post_init__(self) -> None:
        # Without an explicit mode, separator characters mean a fixed separator
        if self.separator_mode is None:
            mode = SeparatorMode.FIXED if self.separator_char else SeparatorMode.RANDOM
            object.__setattr__(self, "separator_mode", mode)
        self.validate()

    @property
    def word_count(self) -> int:
        return self.words

    def validate(self) -> None:
        """
        Check every field.

        Raises:
            ConfigurationError: Listing every problem found
        """
        errors = get_rules_errors(
            self.words, self.min_length, self.max_length,
            self.digits_before, self.digits_after, self.amount,
        )

        if not isinstance(self.transform, Transformation):
            errors.append(f"Unknown transform: {self.transform!r}")

        if not isinstance(self.separator_mode, SeparatorMode):
            errors.append(f"Unknown separator mode: {self.separator_mode!r}")

        if not isinstance(self.separator_char, str):
            errors.append(f"separator_char must be a string, got {self.separator_char!r}")
        elif self.separator_mode is SeparatorMode.FIXED and not self.separator_char:
            errors.append("A fixed separator needs at least one character")
        elif self.separator_mode is not SeparatorMode.FIXED and self.separator_char:
            errors.append(
                f"separator_char {self.separator_char!r} is only used by a fixed separator, "
                f"not {getattr(self.separator_mode, 'value', self.separator_mode)}"
            )

        if not isinstance(self.separator_alphabet, str):
            errors.append(
                f"separator_alphabet must be a string, got {self.separator_alphabet!r}"
            )

        if not isinstance(self.match_random_char, bool):
            errors.append(
                f"match_random_char must be true or false, got {self.match_random_char!r}"
            )

        if errors:
            raise ConfigurationError("Invalid rules: " + "; ".join(errors))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Rules":
        """
        Build rules from their persisted form.

        Missing keys fall back to the defaults and unknown keys are ignored.
        The separator_char value "NONE" (or empty) disables separators,
        "RANDOM" picks from separator_alphabet, anything else is a fixed
        set of characters.

        Raises:
            ConfigurationError: If a value has the wrong type or is out of range
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Rules must be a mapping, got {type(data).__name__}"
            )

        known = {field.name for field in fields(cls)} - {"separator_mode"}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown rule keys: {', '.join(sorted(unknown))}")

        values: Dict[str, Any] = {key: data[key] for key in known if key in data}

        if "transform" in values:
            values["transform"] = Transformation.parse(values["transform"])

        if "separator_char" in values:
            separator = values["separator_char"]
            if not isinstance(separator, str):
                raise ConfigurationError(
                    f"separator_char must be a string, got {separator!r}"
                )
            mode = _SEPARATOR_KEYWORDS.get(separator.upper(), SeparatorMode.FIXED)
            values["separator_mode"] = mode
            values["separator_char"] = separator if mode is SeparatorMode.FIXED else ""

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted form of these rules."""
        if self.separator_mode is SeparatorMode.FIXED:
            separator = self.separator_char
        else:
            separator = self.separator_mode.value

        return {
            "words": self.words,
            "min_length": self.min_length,
            "max_length": self.max_length,
            "transform": self.transform.value,
            "separator_char": separator,
            "separator_alphabet": self.separator_alphabet,
            "match_random_char": self.match_random_char,
            "digits_before": self.digits_before,
            "digits_after": self.digits_after,
            "amount": self.amount,
        }

    def with_overrides(self, overrides: Mapping[str, Any]) -> "Rules":
        """
        Return new rules with some persisted-form values replaced.

        None values are treated as "not supplied".
        """
        merged = self.to_dict()
        merged.update({key: value for key, value in overrides.items() if value is not None})
        return Rules.from_dict(merged)


DEFAULT_RULES = Rules()
