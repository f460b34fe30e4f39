"""Text cleaning utilities to prepare OCR output for summarization."""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Patterns and glyph rules
# ---------------------------------------------------------------------------

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_INLINE_SPACES = re.compile(r"[^\S\n]{2,}")
_WORD_CHAR = re.compile(r"\w")

# Glyph -> shortest run treated as OCR noise.
_NOISE_RUNS = {
    "|": 2,  # repeated pipes
    "_": 3,  # underlines
    "~": 2,  # tildes
    "=": 3,  # equals signs
}

# Closing bracket -> opening text of an inline confidence annotation,
# e.g. "[confidence: 0.87]" or "(conf. 0.9)".
_MARKER_OPENERS = {
    "]": "[confidence:",
    ")": "(conf.",
}

_PAGE_FOOTERS = [
    re.compile(r"Page\s+\d+\s*(?:of\s+\d+)?"),
    re.compile(r"\d+\s*/\s*\d+"),
]


def _is_inline_space(ch: str) -> bool:
    return ch != "\n" and ch.isspace()


def _marker_start(out: list[str]) -> int | None:
    """Index where a confidence annotation ending at ``out[-1]`` begins."""
    opener = _MARKER_OPENERS.get(out[-1])
    if opener is None:
        return None

    i = len(out) - 2
    value_end = i
    while i >= 0 and (out[i].isdecimal() or out[i] == "."):
        i -= 1
    if i == value_end:
        return None
    while i >= 0 and _is_inline_space(out[i]):
        i -= 1

    start = i - len(opener) + 1
    if start < 0 or "".join(out[start:i + 1]).lower() != opener:
        return None
    return start


def _strip_noise(text: str) -> str:
    """Delete glyph noise, confidence annotations and hyphen line breaks.

    Single left-to-right scan over an output stack. Every deletion only
    touches the tail, so anything a deletion brings together (a pipe run
    closing around removed tildes, an annotation revealed by removed noise,
    ``word-`` meeting the next line) is caught as the following characters
    arrive. Lines are trimmed on the way so a hyphen break is always the
    literal ``-\\n`` between two word characters.
    """
    out: list[str] = []
    runs: list[int] = []  # length of the identical-character run ending at each index

    def push(ch: str) -> None:
        runs.append(runs[-1] + 1 if out and out[-1] == ch else 1)
        out.append(ch)

    def truncate(start: int) -> None:
        del out[start:]
        del runs[start:]

    def close_noise_run() -> None:
        threshold = _NOISE_RUNS.get(out[-1]) if out else None
        if threshold is not None and runs[-1] >= threshold:
            truncate(len(out) - runs[-1])

    for ch in text:
        if out and out[-1] != ch:
            close_noise_run()

        if ch == "\n":
            while out and _is_inline_space(out[-1]):
                truncate(len(out) - 1)
        elif _is_inline_space(ch) and (not out or out[-1] == "\n"):
            continue

        push(ch)

        if ch in _MARKER_OPENERS:
            start = _marker_start(out)
            if start is not None:
                truncate(start)
        elif (
            len(out) >= 4
            and out[-2] == "\n"
            and out[-3] == "-"
            and _WORD_CHAR.match(ch)
            and _WORD_CHAR.match(out[-4])
        ):
            del out[-3:-1]
            del runs[-3:-1]
            runs[-1] = runs[-2] + 1 if out[-2] == ch else 1

    close_noise_run()
    while out and _is_inline_space(out[-1]):
        truncate(len(out) - 1)
    return "".join(out)


def _is_footer(line: str) -> bool:
    return any(pattern.fullmatch(line) for pattern in _PAGE_FOOTERS)


def clean_text(raw_text: str) -> str:
    """Normalise OCR noise in extracted text.

    Merges hyphen-broken words, strips glyph noise (2+ pipes or tildes,
    3+ underscores or equals signs) and embedded confidence markers, trims
    every line, squeezes inline spacing, blanks page-number footer lines and
    collapses blank-line runs to one empty line. Runs in linear time and is
    idempotent: ``clean_text(clean_text(x)) == clean_text(x)``.
    """
    text = _strip_noise(raw_text or "")
    text = _INLINE_SPACES.sub(" ", text)
    lines = ["" if _is_footer(line) else line for line in text.split("\n")]
    text = _EXCESS_NEWLINES.sub("\n\n", "\n".join(lines))
    return text.strip()


def get_word_count(text: str) -> int:
    """Count whitespace-delimited, non-empty tokens."""
    return len(text.split())
