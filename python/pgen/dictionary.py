"""
Length-bucketed word dictionary.

The bundled dictionary ships as ``pgen/data/words.json``: a JSON object
mapping a word length (as a string) to the list of words of that length.
"""

import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple, Union

from .exceptions import DictionaryError

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_RESOURCE = "words.json"


class WordDictionary:
    """Immutable mapping from word length to the words of that length."""

    def __init__(self, buckets: Mapping[Union[int, str], Iterable[str]]):
        """
        Build a dictionary from length buckets.

        Args:
            buckets: Mapping of length (int or numeric string) to words

        Raises:
            DictionaryError: If a key is not a length or a word does not fit its bucket
        """
        self._buckets: Dict[int, Tuple[str, ...]] = {}

        for key, words in buckets.items():
            length = self._parse_length(key)

            if isinstance(words, str):
                raise DictionaryError(f"Bucket {length} must be a list of words, not a string")

            bucket = tuple(words)
            for word in bucket:
                if not isinstance(word, str):
                    raise DictionaryError(f"Bucket {length} contains a non-string entry: {word!r}")
                if len(word) != length:
                    raise DictionaryError(
                        f"Word '{word}' has length {len(word)} but is in bucket {length}"
                    )

            self._buckets[length] = bucket

    @staticmethod
    def _parse_length(key: Union[int, str]) -> int:
        if isinstance(key, bool):
            raise DictionaryError(f"Invalid bucket length: {key!r}")
        try:
            length = int(key)
        except (TypeError, ValueError) as e:
            raise DictionaryError(f"Invalid bucket length: {key!r}") from e
        if length < 0:
            raise DictionaryError(f"Invalid bucket length: {key!r}")
        return length

    def lookup(self, length: int) -> Tuple[str, ...]:
        """
        Get every word of the given length.

        Raises:
            DictionaryError: If there are no words of that length
        """
        bucket = self._buckets.get(length)
        if not bucket:
            raise DictionaryError(f"No words of requested length {length} in dictionary")
        return bucket

    def lengths(self) -> List[int]:
        """Lengths that have at least one word, ascending."""
        return sorted(length for length, bucket in self._buckets.items() if bucket)

    def __contains__(self, length: object) -> bool:
        return bool(self._buckets.get(length))  # type: ignore[call-overload]

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def __iter__(self) -> Iterator[str]:
        for length in sorted(self._buckets):
            yield from self._buckets[length]

    def __repr__(self) -> str:
        return f"WordDictionary(lengths={self.lengths()}, words={len(self)})"

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "WordDictionary":
        """
        Load a dictionary from a JSON file.

        Raises:
            DictionaryError: If the file is missing, unreadable or malformed
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise DictionaryError(f"Couldn't read dictionary {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise DictionaryError(f"Couldn't parse dictionary {path}: {e}") from e

        dictionary = cls._from_data(data, str(path))
        logger.debug(f"Loaded {dictionary!r} from {path}")
        return dictionary

    @classmethod
    def _from_data(cls, data: Any, source: str) -> "WordDictionary":
        if not isinstance(data, dict):
            raise DictionaryError(f"Dictionary {source} must be a JSON object of length buckets")
        return cls(data)


@lru_cache(maxsize=None)
def load_default_dictionary() -> WordDictionary:
    """
    Load the dictionary bundled with the package.

    The result is cached for the lifetime of the process.
    """
    resource = resources.files("pgen.data").joinpath(DEFAULT_DICTIONARY_RESOURCE)
    try:
        data = json.loads(resource.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DictionaryError(f"Couldn't load bundled dictionary: {e}") from e

    dictionary = WordDictionary._from_data(data, DEFAULT_DICTIONARY_RESOURCE)
    logger.debug(f"Loaded bundled {dictionary!r}")
    return dictionary
