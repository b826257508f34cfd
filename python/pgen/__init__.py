"""
PGen - memorable password generator.
"""

from .dictionary import WordDictionary, load_default_dictionary
from .exceptions import ConfigurationError, DictionaryError, PGenException
from .generator import GenerationSession, PasswordGenerator, generate_passwords
from .rules import DEFAULT_RULES, Rules, SeparatorMode, Transformation

__all__ = [
    "ConfigurationError",
    "DEFAULT_RULES",
    "DictionaryError",
    "GenerationSession",
    "PGenException",
    "PasswordGenerator",
    "Rules",
    "SeparatorMode",
    "Transformation",
    "WordDictionary",
    "generate_passwords",
    "load_default_dictionary",
]
