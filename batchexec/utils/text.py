"""Pure string helpers used by the batch executive."""

import re
import unicodedata

RE_WHITESPACE = r"\s+"
ELLIPSIS = "..."


def crlf(text: str) -> str:
    """Strip carriage returns, e.g. from DOS CRLF records."""
    return re.sub(r"\n*\r", "", text)


def ascii_fold(text: str) -> str:
    """Transliterate to plain ASCII, dropping anything without a decomposition."""
    normalized = unicodedata.normalize("NFKD", text)
    return normalized.encode("ascii", "ignore").decode("ascii")


def strip_nul(text: str) -> str:
    # UTF-16 output read as bytes leaves NULs between characters
    return text.replace("\x00", "")


def trim(text: str, pattern: str) -> str:
    """Remove one leading and one trailing match of `pattern`."""
    text = re.sub(f"^(?:{pattern})", "", text)
    return re.sub(f"(?:{pattern})$", "", text)


def trim_ws(text: str, pattern: str = RE_WHITESPACE) -> str:
    return trim(text, pattern)


def trunc(text: str, max_len: int = 30) -> str:
    """Truncate to `max_len` characters, ending in an ellipsis when cut."""
    if len(text) <= max_len:
        return text
    return text[: max(0, max_len - len(ELLIPSIS))] + ELLIPSIS


def tokenize(text: str) -> list[str]:
    """Split on any run of whitespace (newlines included)."""
    return text.split()
