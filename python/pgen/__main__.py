"""
CLI interface for PGen memorable password generator.
"""

import json
import sys
from typing import Any, Dict, NoReturn, Optional

import click

from .config import (
    get_config_path,
    load_or_create_config,
    load_rules,
    resolve_config_argument,
    save_rules,
)
from .dictionary import WordDictionary, load_default_dictionary
from .exceptions import ConfigurationError
from .generator import PasswordGenerator, describe
from .rules import DEFAULT_RULES, Rules, Transformation
from .utils.logging_setup import configure_logging


class PGenContext:
    """Context object for sharing command line settings across commands."""

    def __init__(self, overrides: Dict[str, Any], dictionary_path: Optional[str] = None):
        self.overrides = overrides
        self.dictionary_path = dictionary_path

    def load_dictionary(self) -> WordDictionary:
        """Load the dictionary given with --dictionary, or the bundled one."""
        if self.dictionary_path:
            return WordDictionary.from_json(self.dictionary_path)
        return load_default_dictionary()

    def resolve_rules(self, config_file: Optional[str] = None) -> Rules:
        """
        Build the rules for this run.

        Rules come from config_file when given, otherwise from the user
        configuration (created with defaults if missing). Command line
        overrides are applied on top.

        Raises:
            ConfigurationError: If any source holds invalid values
        """
        if config_file:
            rules = load_rules(resolve_config_argument(config_file))
        else:
            rules = load_or_create_config()

        return rules.with_overrides(self.overrides)


def fail(message: str) -> NoReturn:
    """Report an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


TRANSFORM_NAMES = [member.value for member in Transformation]
TRANSFORM_CHOICES = TRANSFORM_NAMES + ["CAPITALIZE"]


@click.group()
@click.version_option(package_name="pgen")
@click.option("--words", "-w", type=click.IntRange(1, 10),
              help=f"Number of words in each password (default: {DEFAULT_RULES.words})")
@click.option("--min-length", "-m", type=click.IntRange(3, 9),
              help=f"Minimum length of each word (default: {DEFAULT_RULES.min_length}, min: 3)")
@click.option("--max-length", "-M", type=click.IntRange(3, 9),
              help=f"Maximum length of each word, exclusive unless equal to the minimum "
                   f"(default: {DEFAULT_RULES.max_length}, max: 9)")
@click.option("--digits-before", "-d", type=click.IntRange(min=0),
              help=f"Number of digits before the words (default: {DEFAULT_RULES.digits_before})")
@click.option("--digits-after", "-D", type=click.IntRange(min=0),
              help=f"Number of digits after the words (default: {DEFAULT_RULES.digits_after})")
@click.option("--transform", "-t", type=click.Choice(TRANSFORM_CHOICES, case_sensitive=False),
              help=f"Transformation mode, one of {', '.join(TRANSFORM_NAMES)} "
                   f"(default: {DEFAULT_RULES.transform.value})")
@click.option("--separator-char", "-s",
              help='Separator characters, or "RANDOM" / "NONE" (default: "RANDOM")')
@click.option("--separator-alphabet", "-S",
              help=f'Characters to pick random separators from '
                   f'(default: "{DEFAULT_RULES.separator_alphabet}")')
@click.option("--no-match-random-char", "-r", is_flag=True,
              help="Pick a new random separator for every gap instead of one per password")
@click.option("--amount", "-a", type=click.IntRange(min=0),
              help=f"Number of passwords to generate (default: {DEFAULT_RULES.amount})")
@click.option("--dictionary", type=click.Path(exists=True, dir_okay=False),
              help="JSON word dictionary to use instead of the bundled one")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False),
              help="Also write all log messages to this file")
@click.pass_context
def cli(ctx: click.Context, words: Optional[int], min_length: Optional[int],
        max_length: Optional[int], digits_before: Optional[int], digits_after: Optional[int],
        transform: Optional[str], separator_char: Optional[str],
        separator_alphabet: Optional[str], no_match_random_char: bool, amount: Optional[int],
        dictionary: Optional[str], debug: bool, log_file: Optional[str]) -> None:
    """PGen - Memorable password generator."""
    try:
        configure_logging(debug=debug, log_file=log_file)
    except OSError as e:
        fail(f"Couldn't open log file {log_file}: {e}")

    overrides: Dict[str, Any] = {
        "words": words,
        "min_length": min_length,
        "max_length": max_length,
        "digits_before": digits_before,
        "digits_after": digits_after,
        "transform": transform,
        "separator_char": separator_char,
        "separator_alphabet": separator_alphabet,
        "amount": amount,
    }
    if no_match_random_char:
        overrides["match_random_char"] = False

    ctx.obj = PGenContext(overrides, dictionary_path=dictionary)


@cli.command()
@click.argument("config_file", required=False, metavar="[CONFIG]")
@click.option("--copy", "-c", is_flag=True, help="Copy the passwords to the clipboard")
@click.pass_obj
def generate(pgen_ctx: PGenContext, config_file: Optional[str], copy: bool) -> None:
    """Generate some new passwords."""
    try:
        rules = pgen_ctx.resolve_rules(config_file)
        generator = PasswordGenerator(dictionary=pgen_ctx.load_dictionary())
        passwords = generator.generate(rules)
    except ConfigurationError as e:
        fail(str(e))

    for password in passwords:
        click.echo(password)

    if copy and passwords:
        try:
            import pyperclip
            pyperclip.copy("\n".join(passwords))
            click.echo(f"🔐 {len(passwords)} password(s) copied to clipboard.", err=True)
        except ImportError:
            click.echo("pyperclip not installed. Install with: pip install pyperclip", err=True)
        except pyperclip.PyperclipException as e:
            click.echo(f"Could not copy to clipboard: {e}", err=True)


@cli.command()
@click.argument("action", type=click.Choice(["show", "path", "reset"]))
@click.pass_obj
def config(pgen_ctx: PGenContext, action: str) -> None:
    """Show, locate or reset the user configuration."""
    path = get_config_path()

    if action == "path":
        click.echo(str(path))
        return

    try:
        if action == "reset":
            save_rules(DEFAULT_RULES, path)
            click.echo(f"✅ Reset configuration at {path}")
            return

        rules = load_or_create_config(path).with_overrides(pgen_ctx.overrides)
    except ConfigurationError as e:
        fail(str(e))

    click.echo(f"Configuration: {path}")
    click.echo(json.dumps(rules.to_dict(), indent=4))
    click.echo(f"Summary: {describe(rules)}")


def main() -> None:
    """Main entry point for the CLI application."""
    cli()


if __name__ == "__main__":
    main()
