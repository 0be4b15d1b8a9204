"""
Command line interface.
"""

import importlib.metadata
import logging
import pathlib
import sys

from . import bytewords, config
from .types import Style

import click

logging.getLogger().setLevel(logging.CRITICAL)

logger = logging.getLogger("bwords")
logger.setLevel(logging.CRITICAL)
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
logger.addHandler(handler)


STYLES: list[str] = list(Style.__args__)


def error(text: str) -> None:
    click.echo("\x1b[31m" + f"ERROR: {text}" + "\x1b[0m", err=True)


def read_input(argument: str | None, raw: bool) -> bytes | str:
    """Returns the command line argument if given, otherwise the contents of stdin."""
    if argument is not None:
        return argument.encode() if raw else argument
    if raw:
        return sys.stdin.buffer.read()
    return sys.stdin.read()


def normalize_phrase(text: str, style: Style) -> str:
    """Joins a phrase wrapped across lines. Whitespace separates standard words and is dropped in other styles."""
    separator = " " if style == "standard" else ""
    return separator.join(text.split())


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
    help=f"Configuration file to use instead of {config.CONFIG_PATH}.",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def bwords(ctx: click.Context, config_path: pathlib.Path | None, verbose: bool) -> None:
    """Bytewords: encode binary data as a checksummed sequence of four-letter words and back.

    The style (standard, uri, or minimal) and strictness of decoding default to the values in the configuration file.
    """
    if verbose:
        logger.setLevel(logging.DEBUG)

    try:
        ctx.obj = config.load(config_path or config.CONFIG_PATH)
    except FileNotFoundError:
        ctx.obj = config.DEFAULT_CONFIG
    except ValueError as e:
        error(f"Configuration file invalid. {e}")
        sys.exit(1)

    logger.debug(f"Configuration: {ctx.obj}")


@bwords.command()
@click.argument("data", required=False)
@click.option("--style", type=click.Choice(STYLES), help="Bytewords style. [default: from configuration]")
@click.option(
    "--input-format",
    type=click.Choice(["hex", "raw"]),
    default="hex",
    show_default=True,
    help="Interpret the input as hex string or as raw bytes.",
)
@click.pass_obj
def encode(cfg: config.Config, data: str | None, style: Style | None, input_format: str) -> None:
    """Encode DATA (or stdin) as bytewords."""
    value = read_input(data, input_format == "raw")
    if isinstance(value, str):
        try:
            value = bytes.fromhex(value)
        except ValueError:
            error("Failed to parse hex string.")
            sys.exit(1)

    click.echo(bytewords.encode(style or cfg.style, value))


@bwords.command()
@click.argument("phrase", nargs=-1)
@click.option("--style", type=click.Choice(STYLES), help="Bytewords style. [default: from configuration]")
@click.option(
    "--strict/--lenient",
    default=None,
    help="Require separators exactly as produced by the encoder. [default: from configuration]",
)
@click.option(
    "--output-format",
    type=click.Choice(["hex", "raw"]),
    default="hex",
    show_default=True,
    help="Print the decoded data as hex string or write the raw bytes.",
)
@click.pass_obj
def decode(
    cfg: config.Config,
    phrase: tuple[str, ...],
    style: Style | None,
    strict: bool | None,
    output_format: str,
) -> None:
    """Decode a bytewords PHRASE (or stdin) and verify its checksum.

    Multiple arguments are joined with spaces, so standard phrases do not need to be quoted. Line breaks and other
    whitespace in the phrase are ignored, apart from separating words in the standard style."""
    text = read_input(" ".join(phrase) if phrase else None, raw=False)
    assert isinstance(text, str)
    style = style or cfg.style

    try:
        data = bytewords.decode(
            style,
            normalize_phrase(text, style),
            strict=cfg.strict if strict is None else strict,
        )
    except bytewords.DecodeError as e:
        error(str(e))
        sys.exit(1)

    if output_format == "hex":
        click.echo(data.hex())
    else:
        stdout = sys.stdout.buffer
        stdout.write(data)
        stdout.flush()


@bwords.command()
@click.argument("words", nargs=-1)
def words(words: tuple[str, ...]) -> None:
    """Show the byte value of the given WORDS (full or minimal form), or the whole word list."""
    if not words:
        for i, word in enumerate(bytewords.WORDLIST):
            click.echo(f"{i:>3}  {i:02x}  {word}  {bytewords.minimal_word_for(i)}")
        return

    failed = False
    for word in words:
        value = bytewords.decode_word(word, 4 if len(word) == 4 else 2)
        if value is None:
            error(f"Word {word!r} not in word list.")
            failed = True
        else:
            click.echo(f"{value:>3}  {value:02x}  {bytewords.word_for(value)}  {bytewords.minimal_word_for(value)}")

    if failed:
        sys.exit(1)


@bwords.command()
def version() -> None:
    """Display version information of this tool."""
    click.echo(f"Bytewords: {importlib.metadata.version('bytewords-codec')}")
    click.echo("Libraries: ")
    for lib in ("click",):
        click.echo(f" - {lib}: {importlib.metadata.version(lib)}")


def main():
    bwords(prog_name=bwords.name)
