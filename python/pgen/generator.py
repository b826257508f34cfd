"""
Memorable password generation from dictionary words.
"""

import logging
import random
import secrets
from typing import List, Optional

from .dictionary import WordDictionary, load_default_dictionary
from .rules import DEFAULT_RULES, Rules, SeparatorMode
from .utils.transform import apply_transformation

logger = logging.getLogger(__name__)


class GenerationSession:
    """
    Separator state for building a single password.

    With a random separator and match_random_char enabled, the first
    character drawn is locked and reused for every later gap. A new session
    is created for each password so every password gets its own lock.
    """

    def __init__(self, rules: Rules, rng: random.Random):
        self.rules = rules
        self.rng = rng
        self.locked_char: Optional[str] = None

    def separator(self) -> str:
        """Return the separator for the next gap, or '' when none is emitted."""
        mode = self.rules.separator_mode

        if mode is SeparatorMode.NONE:
            return ""

        if mode is SeparatorMode.FIXED:
            # Lowest code point among the configured characters, not the first one
            return min(self.rules.separator_char)

        if not self.rules.match_random_char:
            return self._random_char()

        if self.locked_char is None:
            self.locked_char = self._random_char()
            logger.debug(f"Locked separator for this password: {self.locked_char!r}")
        return self.locked_char

    def _random_char(self) -> str:
        alphabet = self.rules.separator_alphabet
        if not alphabet:
            return ""
        return self.rng.choice(alphabet)


class PasswordGenerator:
    """Build passwords from dictionary words, digits and separators."""

    def __init__(self,
                 dictionary: Optional[WordDictionary] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            dictionary: Word dictionary to draw from (defaults to the bundled one)
            rng: Random source (defaults to secrets.SystemRandom)
        """
        self.dictionary = dictionary if dictionary is not None else load_default_dictionary()
        self.rng = rng if rng is not None else secrets.SystemRandom()

    def generate(self, rules: Rules = DEFAULT_RULES) -> List[str]:
        """
        Generate one batch of passwords.

        Args:
            rules: Generation rules

        Returns:
            Exactly rules.amount passwords, in generation order

        Raises:
            ConfigurationError: If the rules are invalid
            DictionaryError: If a word length the rules can pick has no words
        """
        rules.validate()
        self._check_buckets(rules)

        logger.debug(f"Generating {rules.amount} passwords: {describe(rules)}")

        passwords = []
        for _ in range(rules.amount):
            passwords.append(self._build_password(rules, GenerationSession(rules, self.rng)))

        return passwords

    def _check_buckets(self, rules: Rules) -> None:
        """Look up every reachable bucket so a gap fails before any password is built."""
        for length in self.word_lengths(rules):
            self.dictionary.lookup(length)

    @staticmethod
    def word_lengths(rules: Rules) -> range:
        """
        Word lengths the rules can select.

        The upper bound is exclusive: max_length itself is only used when it
        equals min_length.
        """
        if rules.max_length > rules.min_length:
            return range(rules.min_length, rules.max_length)
        return range(rules.min_length, rules.min_length + 1)

    def _build_password(self, rules: Rules, session: GenerationSession) -> str:
        words = self.select_words(rules)
        transformed = [apply_transformation(word, rules.transform, self.rng) for word in words]
        logger.debug(f"Transformed words: {transformed}")

        parts = []

        if rules.digits_before:
            parts.append(self.digits(rules.digits_before))
            parts.append(session.separator())

        # One separator per gap between words, none around the group
        for index, word in enumerate(transformed):
            if index:
                parts.append(session.separator())
            parts.append(word)

        if rules.digits_after:
            parts.append(session.separator())
            parts.append(self.digits(rules.digits_after))

        return "".join(parts)

    def select_words(self, rules: Rules) -> List[str]:
        """Pick rules.words words, each from a randomly chosen length bucket."""
        words = []
        for _ in range(rules.words):
            if rules.max_length > rules.min_length:
                length = self.rng.randrange(rules.min_length, rules.max_length)
            else:
                length = rules.min_length
            words.append(self.rng.choice(self.dictionary.lookup(length)))

        logger.debug(f"Selected words: {words}")
        return words

    def digits(self, count: int) -> str:
        """Return count random digits, each in 0-8."""
        return "".join(str(self.rng.randrange(9)) for _ in range(count))


def describe(rules: Rules) -> str:
    """
    Get a human-readable summary of rules.

    Returns:
        Description such as "2 words of length 5-6, capitalise, random separator (matched), 3 digits after"
    """
    lengths = PasswordGenerator.word_lengths(rules)
    if len(lengths) == 1:
        length_desc = f"length {lengths[0]}"
    else:
        length_desc = f"length {lengths[0]}-{lengths[-1]}"

    parts = [
        f"{rules.words} word{'s' if rules.words != 1 else ''} of {length_desc}",
        rules.transform.value.lower().replace("_", " "),
    ]

    if rules.separator_mode is SeparatorMode.NONE:
        parts.append("no separator")
    elif rules.separator_mode is SeparatorMode.FIXED:
        parts.append(f"separator '{min(rules.separator_char)}'")
    else:
        matched = "matched" if rules.match_random_char else "per gap"
        parts.append(f"random separator from '{rules.separator_alphabet}' ({matched})")

    if rules.digits_before:
        parts.append(f"{rules.digits_before} digits before")
    if rules.digits_after:
        parts.append(f"{rules.digits_after} digits after")

    return ", ".join(parts)


def generate_passwords(rules: Optional[Rules] = None,
                       dictionary: Optional[WordDictionary] = None,
                       rng: Optional[random.Random] = None) -> List[str]:
    """
    Convenience function to generate a batch of passwords.

    Args:
        rules: Generation rules (defaults to Rules())
        dictionary: Word dictionary (defaults to the bundled one)
        rng: Random source (defaults to secrets.SystemRandom)

    Returns:
        List of generated passwords
    """
    generator = PasswordGenerator(dictionary=dictionary, rng=rng)
    return generator.generate(rules or DEFAULT_RULES)
