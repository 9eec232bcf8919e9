"""
minic - Command-Line Interface
==============================

Runs the minic front end over a source file.

Usage Examples
--------------
Check a program and print its symbols:
    $ minic program.mc

Confirmation only:
    $ minic --no-symbols program.mc

Show the token stream:
    $ minic --tokens program.mc

Use a different localized alias:
    $ minic --alias agar=if --alias warna=else program.mc

Verbose mode (debug logging, error hints):
    $ minic -v program.mc
"""

import logging
from pathlib import Path
from typing import Optional

import click

from minic import __version__
from minic.cli.errors import handle_cli_exception
from minic.frontend import FrontEnd, FrontEndOptions, parse_alias_spec, read_source

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--symbols/--no-symbols",
    default=None,
    help="Print the final symbol table (default: on, or MINIC_DUMP_SYMBOLS)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-a", "--alias",
    "aliases",
    multiple=True,
    metavar="ALIAS=KEYWORD",
    help="Localized keyword alias (can be repeated; replaces the defaults)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="minic")
def main(
    input_file: Path,
    symbols: Optional[bool],
    tokens: bool,
    aliases: tuple[str, ...],
    verbose: bool,
) -> None:
    """
    Check a minic program.

    INPUT_FILE is the source file to lex, parse and evaluate.

    On success, prints a confirmation followed by every declared name
    with its type, final value and declaration line. On failure, prints
    the first error and exits with status 1.

    \b
    Examples:
        minic program.mc               # Check and dump symbols
        minic --no-symbols program.mc  # Confirmation only
        minic --tokens program.mc      # Token stream
        minic -a agar=if program.mc    # Custom keyword alias
    """
    setup_logging(verbose)

    try:
        options = FrontEndOptions.from_env()
        if aliases:
            options.aliases = parse_alias_spec(",".join(aliases))
        if symbols is not None:
            options.dump_symbols = symbols
        logger.debug(f"keyword aliases: {options.aliases}")

        front_end = FrontEnd(options)

        if tokens:
            source = read_source(input_file)
            for token in front_end.tokenize(source, str(input_file)):
                click.echo(f"{token.line:4d}  {token.kind.name:<15} {token.lexeme}")
            return

        result = front_end.run_file(input_file)

        click.echo(result.message)
        if options.dump_symbols:
            for line in result.symbols.dump():
                click.echo(f"  {line}")

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Declared: {len(result.symbols)} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
