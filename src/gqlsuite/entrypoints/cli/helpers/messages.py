"""Terminal message helpers for the GQLSUITE CLI.

Status lines go to stderr so that stdout carries only test results. Emoji
glyphs fall back to ASCII on terminals that cannot encode them.
"""

import click

WARN_GLYPHS = ("⚠️", "[!]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(glyphs: tuple[str, str]) -> str:
    """Pick the emoji of an ``(emoji, fallback)`` pair when stderr can encode it."""
    emoji, fallback = glyphs
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr**.

    Example:
        ``⚠️  Stopping after first failing suite (--fail-fast).``
    """
    click.secho(f"{glyph(WARN_GLYPHS)}  {msg}", fg="yellow", bold=True, err=True)
