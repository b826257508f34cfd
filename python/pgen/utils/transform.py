"""
Case transformations applied to each selected word.
"""

import random
import secrets
from typing import Callable, Dict, Optional

from ..exceptions import ConfigurationError
from ..rules import Transformation


def capitalise(word: str) -> str:
    """Upper-case the first character, leave the rest alone."""
    return word[:1].upper() + word[1:]


def all_except_first(word: str) -> str:
    """Upper-case the whole word, then lower-case its first character."""
    upper = word.upper()
    return upper[:1].lower() + upper[1:]


def uppercase(word: str) -> str:
    return word.upper()


def alternating(word: str) -> str:
    """Upper-case even indexes and lower-case odd indexes (0-based)."""
    return "".join(
        char.upper() if index % 2 == 0 else char.lower()
        for index, char in enumerate(word)
    )


def random_case(word: str, rng: random.Random) -> str:
    """Flip a fair coin for every character to pick its case."""
    return "".join(
        char.upper() if rng.getrandbits(1) else char.lower()
        for char in word
    )


# Deterministic transformations; RANDOM needs a random source and is handled separately
_TRANSFORMS: Dict[Transformation, Callable[[str], str]] = {
    Transformation.NONE: lambda word: word,
    Transformation.CAPITALISE: capitalise,
    Transformation.ALL_EXCEPT_FIRST: all_except_first,
    Transformation.UPPERCASE: uppercase,
    Transformation.ALTERNATING: alternating,
}


def apply_transformation(word: str, transformation: Transformation,
                         rng: Optional[random.Random] = None) -> str:
    """
    Apply one transformation to a word.

    Args:
        word: Word to transform
        transformation: Which case policy to apply
        rng: Random source, required for Transformation.RANDOM

    Returns:
        The transformed word

    Raises:
        ConfigurationError: If the transformation is not a known variant
    """
    if transformation is Transformation.RANDOM:
        return random_case(word, rng or secrets.SystemRandom())

    try:
        return _TRANSFORMS[transformation](word)
    except KeyError as e:
        raise ConfigurationError(f"Unknown transformation: {transformation!r}") from e
