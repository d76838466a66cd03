"""
Multiline text helpers used by the block parser.
"""

import re

_ENDING_NEWLINE = re.compile(r"\r?\n\Z")


def get_ending_newline(text: str) -> str:
    """Return the line ending that closes ``text`` ('' if there is none)."""
    found = _ENDING_NEWLINE.search(text)
    return found.group(0) if found else ""


def trim_ending_newline(text: str) -> str:
    """Remove a single line ending from the end of ``text``."""
    ending = get_ending_newline(text)
    return text[:-len(ending)] if ending else text


def trim_indentation(text: str, indentation: int) -> str:
    """
    Remove up to ``indentation`` leading spaces or tabs from every line.

    Lines indented less than ``indentation`` lose only the whitespace they
    have; other characters are never removed.

    Args:
        text: Multiline text
        indentation: Number of leading whitespace characters to remove

    Returns:
        De-indented text with the original line endings
    """
    if indentation <= 0:
        return text

    pattern = re.compile(rf"^[ \t]{{0,{indentation}}}", re.MULTILINE)
    return pattern.sub("", text)


def indent_lines(text: str, indentation: int, first_line: bool = False) -> str:
    """
    Prefix lines of ``text`` with ``indentation`` spaces.

    Blank lines are left alone. The first line is skipped unless
    ``first_line`` is set, since it usually continues an already indented
    position.
    """
    if indentation <= 0:
        return text

    prefix = " " * indentation
    lines = text.split("\n")
    return "\n".join(
        prefix + line if line.strip() and (i > 0 or first_line) else line
        for i, line in enumerate(lines)
    )
