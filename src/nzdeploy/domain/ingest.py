"""Pure domain functions for ingesting pasted environment variables.

Users paste text copied from a ``.env`` file, a cloud provider's secrets
page or a shell export block.  These functions turn that text into an
ordered list of ``EnvVar`` records without any I/O and without ever
raising: a line that does not look like a declaration is skipped.

Per-line rules, applied in order:

- Blank lines are skipped.
- One leading ``#`` is stripped; a commented declaration is still ingested.
- The key is the leading run of characters that are not ``=``, ``:`` or
  whitespace.  The separator is whichever of ``=``, ``:`` or whitespace
  follows it first.  Lines without a separator are skipped.
- A matching pair of outer quotes is removed from the value, then a
  backtick-delimited segment (if any) replaces the value.
"""

import logging
from collections import Counter
from collections.abc import Iterable

from nzdeploy.models import EnvVar

logger = logging.getLogger(__name__)

_SEPARATORS = "=:"
_QUOTES = "\"'"
_BACKTICK = "`"


def parse(raw_text: str) -> list[EnvVar]:
    """Parse pasted text into ``EnvVar`` records, one per declaration line.

    Output order follows input order.  Duplicate keys are kept as separate
    records; ``to_submission_map`` decides which value wins.
    """
    vars: list[EnvVar] = []
    for line in raw_text.split("\n"):
        var = parse_line(line)
        if var is not None:
            vars.append(var)
    logger.debug("Parsed %d variable(s) from %d line(s)", len(vars), raw_text.count("\n") + 1)
    return vars


def parse_line(line: str) -> EnvVar | None:
    """Parse a single line, returning None when it is not a declaration."""
    stripped = line.strip()
    if not stripped:
        return None
    if stripped.startswith("#"):
        stripped = stripped[1:].strip()

    split = _split_declaration(stripped)
    if split is None:
        return None
    key, value = split
    key = key.strip()
    if not key:
        return None
    return EnvVar(key=key, value=_unwrap_value(value.strip()))


def merge(existing: Iterable[EnvVar], parsed: Iterable[EnvVar]) -> list[EnvVar]:
    """Return ``existing`` followed by ``parsed`` as a new list.

    Keys are not deduplicated; a re-pasted key is appended after the
    original and takes effect when the list is folded.
    """
    return [*existing, *parsed]


def to_submission_map(vars: Iterable[EnvVar]) -> dict[str, str]:
    """Fold records into a key→value mapping, later duplicates winning."""
    mapping: dict[str, str] = {}
    for var in vars:
        mapping[var.key] = var.value
    return mapping


def duplicate_keys(vars: Iterable[EnvVar]) -> list[str]:
    """Return keys that occur more than once, in order of first appearance."""
    keys = [var.key for var in vars]
    counts = Counter(keys)
    return [key for key in dict.fromkeys(keys) if counts[key] > 1]


def format_dotenv(vars: Iterable[EnvVar]) -> str:
    """Render records as ``KEY=value`` lines that ``parse`` reads back unchanged.

    Values are written bare unless they are themselves wrapped in quotes;
    those get the other quote character around them so parsing strips only
    the added pair.  Backtick segments are not protected: ``parse`` resolves
    them again.  An empty input produces an empty string.
    """
    return "\n".join(f"{v.key}={_quote_value(v.value)}" for v in vars)


def _quote_value(value: str) -> str:
    if not _is_wrapped(value, _QUOTES):
        return value
    outer = "'" if value[0] == '"' else '"'
    return f"{outer}{value}{outer}"


def _split_declaration(line: str) -> tuple[str, str] | None:
    """Split a trimmed line into ``(key, value)`` in a single left-to-right pass.

    Returns None when the line has no key or no separator after the key.
    Whitespace-separated lines are only accepted when the value is a single
    token or is wholly wrapped in quotes/backticks, so prose such as
    ``not a valid line`` is not mistaken for a declaration.
    """
    n = len(line)
    end = 0
    while end < n and line[end] not in _SEPARATORS and not line[end].isspace():
        end += 1
    if end == 0 or end == n:
        return None

    pos = end
    while pos < n and line[pos].isspace():
        pos += 1
    if pos < n and line[pos] in _SEPARATORS:
        value = line[pos + 1 :].strip()
    else:
        value = line[pos:].strip()
        if any(ch.isspace() for ch in value) and not _is_wrapped(value, _QUOTES + _BACKTICK):
            return None
    return line[:end], value


def _unwrap_value(value: str) -> str:
    """Strip one pair of outer quotes, then resolve backticks."""
    if _is_wrapped(value, _QUOTES):
        value = value[1:-1]

    if _BACKTICK in value:
        opening = value.index(_BACKTICK)
        closing = value.find(_BACKTICK, opening + 1)
        if closing != -1:
            value = value[opening + 1 : closing].strip()
        else:
            value = value.replace(_BACKTICK, "").strip()
    return value


def _is_wrapped(value: str, chars: str) -> bool:
    return len(value) >= 2 and value[0] == value[-1] and value[0] in chars
