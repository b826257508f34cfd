"""
Unit tests for password generation functionality.
"""

import random
import re

import pytest

from pgen.dictionary import WordDictionary, load_default_dictionary
from pgen.exceptions import ConfigurationError, DictionaryError
from pgen.generator import GenerationSession, PasswordGenerator, describe, generate_passwords
from pgen.rules import Rules, SeparatorMode, Transformation

SEPARATORS = "!@$%.&*-+=?:;"


def plain_rules(**kwargs) -> Rules:
    """Rules without transformation, digits or separators unless overridden."""
    values = {
        "transform": Transformation.NONE,
        "separator_mode": SeparatorMode.NONE,
        "digits_before": 0,
        "digits_after": 0,
        "amount": 1,
    }
    values.update(kwargs)
    return Rules(**values)


def separators_in(password: str) -> list:
    return [char for char in password if not char.isalnum()]


class TestGenerationSession:
    """Test per-password separator selection."""

    def test_no_separator(self):
        """Test that NONE never emits a character."""
        session = GenerationSession(plain_rules(), random.Random(1))
        assert session.separator() == ""
        assert session.separator() == ""

    def test_fixed_separator_uses_lowest_character(self):
        """Test that a fixed separator emits the minimum code point, not the first."""
        rules = plain_rules(separator_mode=SeparatorMode.FIXED, separator_char="ba")
        session = GenerationSession(rules, random.Random(1))

        assert [session.separator() for _ in range(20)] == ["a"] * 20

    def test_matched_random_separator_is_locked(self):
        """Test that the first random separator is reused for the whole session."""
        rules = plain_rules(separator_mode=SeparatorMode.RANDOM, match_random_char=True)
        session = GenerationSession(rules, random.Random(5))

        chars = {session.separator() for _ in range(50)}

        assert len(chars) == 1
        assert chars.pop() in SEPARATORS
        assert session.locked_char is not None

    def test_unmatched_random_separator_varies(self):
        """Test that every gap draws a fresh separator without matching."""
        rules = plain_rules(separator_mode=SeparatorMode.RANDOM, match_random_char=False)
        session = GenerationSession(rules, random.Random(5))

        chars = {session.separator() for _ in range(50)}

        assert len(chars) > 1
        assert chars <= set(SEPARATORS)
        assert session.locked_char is None

    def test_empty_alphabet(self):
        """Test that a random separator with no alphabet emits nothing."""
        for match in (True, False):
            rules = plain_rules(separator_mode=SeparatorMode.RANDOM,
                                separator_alphabet="", match_random_char=match)
            session = GenerationSession(rules, random.Random(1))
            assert session.separator() == ""


class TestPasswordGenerator:
    """Test the password generation engine."""

    @pytest.fixture
    def tiny_dictionary(self):
        """Create a dictionary with one word per bucket."""
        return WordDictionary({3: ["cat"], 4: ["frog"]})

    @pytest.fixture
    def generator(self):
        """Create a generator over the bundled dictionary with a fixed seed."""
        return PasswordGenerator(rng=random.Random(1234))

    def test_amount(self, generator):
        """Test that exactly amount passwords are produced."""
        for amount in (0, 1, 3, 25):
            assert len(generator.generate(Rules(amount=amount))) == amount

    def test_default_rules(self, generator):
        """Test the shape of passwords built from the default rules."""
        passwords = generator.generate()

        assert len(passwords) == 3
        for password in passwords:
            match = re.fullmatch(r"([A-Z][a-z]+)(\W)([A-Z][a-z]+)(\W)([0-8]{3})", password)
            assert match, password
            assert match.group(2) == match.group(4)
            assert 5 <= len(match.group(1)) <= 6
            assert 5 <= len(match.group(3)) <= 6

    def test_word_lengths_exclusive_upper_bound(self, generator):
        """Test that word lengths stay within [min_length, max_length - 1]."""
        rules = plain_rules(words=5, min_length=4, max_length=7,
                            separator_mode=SeparatorMode.FIXED, separator_char="-",
                            amount=200)
        lengths = set()

        for password in generator.generate(rules):
            lengths.update(len(word) for word in password.split("-"))

        assert lengths == {4, 5, 6}

    def test_equal_length_bounds(self, generator):
        """Test that equal bounds select exactly that length."""
        rules = plain_rules(words=3, min_length=9, max_length=9,
                            separator_mode=SeparatorMode.FIXED, separator_char=".",
                            amount=20)

        for password in generator.generate(rules):
            assert [len(word) for word in password.split(".")] == [9, 9, 9]

    def test_word_lengths_helper(self):
        """Test the reachable word lengths."""
        assert list(PasswordGenerator.word_lengths(plain_rules(min_length=3, max_length=4))) == [3]
        assert list(PasswordGenerator.word_lengths(plain_rules(min_length=5, max_length=5))) == [5]
        assert list(PasswordGenerator.word_lengths(plain_rules(min_length=3, max_length=9))) == [3, 4, 5, 6, 7, 8]

    def test_plain_concatenation(self):
        """Test that two untransformed words are concatenated without a separator."""
        dictionary = WordDictionary({3: ["cat", "dog"]})
        generator = PasswordGenerator(dictionary=dictionary, rng=random.Random(9))
        rules = plain_rules(words=2, min_length=3, max_length=3, amount=30)

        passwords = generator.generate(rules)

        assert set(passwords) <= {"catcat", "catdog", "dogcat", "dogdog"}

    def test_plain_concatenation_bundled_dictionary(self, generator):
        """Test concatenation against the bundled word buckets."""
        bucket = set(load_default_dictionary().lookup(5))
        rules = plain_rules(words=2, min_length=5, max_length=6, amount=20)

        for password in generator.generate(rules):
            assert len(password) == 10
            assert password[:5] in bucket
            assert password[5:] in bucket

    def test_digits_before(self, generator):
        """Test that leading digits are three characters in 0-8."""
        rules = plain_rules(words=1, min_length=3, max_length=3, digits_before=3, amount=50)

        for password in generator.generate(rules):
            assert re.fullmatch(r"[0-8]{3}[a-z]{3}", password), password

    def test_digits_never_nine(self, generator):
        """Test that digit generation never produces a 9."""
        digits = generator.digits(2000)

        assert len(digits) == 2000
        assert "9" not in digits
        assert set(digits) == set("012345678")

    def test_digits_zero(self, generator):
        """Test that a count of zero gives an empty string."""
        assert generator.digits(0) == ""

    def test_digit_separators(self, generator):
        """Test separator placement around digit blocks."""
        rules = plain_rules(words=2, min_length=3, max_length=3,
                            separator_mode=SeparatorMode.FIXED, separator_char="_",
                            digits_before=2, digits_after=4, amount=10)

        for password in generator.generate(rules):
            assert re.fullmatch(r"[0-8]{2}_[a-z]{3}_[a-z]{3}_[0-8]{4}", password), password

    def test_digits_without_separator(self, generator):
        """Test that digit blocks attach directly when separators are off."""
        rules = plain_rules(words=1, min_length=4, max_length=4,
                            digits_before=1, digits_after=1, amount=10)

        for password in generator.generate(rules):
            assert re.fullmatch(r"[0-8][a-z]{4}[0-8]", password), password

    def test_matched_separator_within_password(self, generator):
        """Test that one random separator is used for every gap of a password."""
        rules = plain_rules(words=4, separator_mode=SeparatorMode.RANDOM,
                            match_random_char=True, digits_before=2, digits_after=2,
                            amount=50)
        locked = set()

        for password in generator.generate(rules):
            chars = separators_in(password)
            assert len(chars) == 5
            assert len(set(chars)) == 1
            locked.add(chars[0])

        # Each password draws its own lock
        assert len(locked) > 1

    def test_unmatched_separator_varies(self, generator):
        """Test that gaps draw independent separators without matching."""
        rules = plain_rules(words=6, separator_mode=SeparatorMode.RANDOM,
                            match_random_char=False, amount=20)

        mixed = [password for password in generator.generate(rules)
                 if len(set(separators_in(password))) > 1]

        assert mixed

    def test_transform_applied_per_word(self, generator):
        """Test that transformations apply to every word."""
        rules = plain_rules(words=3, transform=Transformation.ALTERNATING,
                            separator_mode=SeparatorMode.FIXED, separator_char=" ",
                            amount=10)

        for password in generator.generate(rules):
            for word in password.split(" "):
                expected = "".join(
                    c.upper() if i % 2 == 0 else c.lower() for i, c in enumerate(word)
                )
                assert word == expected

    def test_scenario(self, tiny_dictionary):
        """Test uppercase words, fixed separator and trailing digits together."""
        generator = PasswordGenerator(dictionary=tiny_dictionary, rng=random.Random(0))
        rules = Rules.from_dict({
            "words": 2,
            "min_length": 3,
            "max_length": 4,
            "transform": "UPPERCASE",
            "separator_char": "-",
            "digits_before": 0,
            "digits_after": 2,
            "amount": 1,
        })

        passwords = generator.generate(rules)

        assert len(passwords) == 1
        assert re.fullmatch(r"CAT-CAT-[0-8]{2}", passwords[0]), passwords[0]

    def test_missing_bucket_aborts_batch(self, tiny_dictionary):
        """Test that a missing bucket raises before any password is built."""
        rng = random.Random(0)
        state = rng.getstate()
        generator = PasswordGenerator(dictionary=tiny_dictionary, rng=rng)
        rules = plain_rules(min_length=3, max_length=6, amount=5)

        with pytest.raises(DictionaryError, match="length 5"):
            generator.generate(rules)

        # Nothing was drawn from the random source
        assert rng.getstate() == state

    def test_rules_revalidated(self, generator):
        """Test that the engine rejects rules invalidated after construction."""
        rules = Rules()
        object.__setattr__(rules, "words", 0)

        with pytest.raises(ConfigurationError, match="words must be at least 1"):
            generator.generate(rules)

    def test_reproducible_with_seed(self):
        """Test that equal seeds produce equal batches."""
        rules = Rules(amount=5, transform=Transformation.RANDOM)

        first = PasswordGenerator(rng=random.Random(99)).generate(rules)
        second = PasswordGenerator(rng=random.Random(99)).generate(rules)

        assert first == second

    def test_default_random_source(self):
        """Test that the default random source is the system one."""
        import secrets
        generator = PasswordGenerator()
        assert isinstance(generator.rng, secrets.SystemRandom)


class TestConvenienceFunctions:
    """Test module-level helpers."""

    def test_generate_passwords(self):
        """Test the convenience wrapper."""
        passwords = generate_passwords(Rules(amount=4), rng=random.Random(3))
        assert len(passwords) == 4

    def test_generate_passwords_defaults(self):
        """Test the convenience wrapper with default rules."""
        assert len(generate_passwords()) == 3

    def test_describe(self):
        """Test the human-readable rules summary."""
        assert describe(Rules()) == (
            "2 words of length 5-6, capitalise, "
            "random separator from '!@$%.&*-+=?:;' (matched), 3 digits after"
        )

        rules = plain_rules(words=1, min_length=4, max_length=4, digits_before=2,
                            separator_mode=SeparatorMode.FIXED, separator_char="zy")
        assert describe(rules) == "1 word of length 4, none, separator 'y', 2 digits before"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
