"""Heuristic parsing of raw call transcripts into speaker turns.

Supported layouts, tried in this order for every unconsumed line:

1. ``[0:42] Speaker: text`` on one line.
2. ``Speaker  0:42`` header line, text on the next non-blank line (tl;dv export).
3. ``0:42 Speaker`` header line, text on the next non-blank line.
4. ``Speaker: text`` on one line.

Anything else is appended to the previous turn, or dropped if there is none.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from app.models.analysis import ParsedTranscript, TranscriptTurn

DEFAULT_ME_SPEAKER = "Me"

_TIMESTAMP = r"\d{1,2}:\d{2}(?::\d{2})?"

BRACKETED_RE = re.compile(rf"^\[({_TIMESTAMP})\]\s*(.+?):\s*(.+)$")
SPEAKER_TIMESTAMP_RE = re.compile(rf"^([^:]+?)\s+({_TIMESTAMP})\s*$")
TIMESTAMP_SPEAKER_RE = re.compile(rf"^({_TIMESTAMP})\s+([^:]+?)\s*$")
SPEAKER_COLON_RE = re.compile(r"^(.+?):\s+(.+)$")

# (turn, number of lines consumed) or None when the handler rejects the match
MatchHandler = Callable[[re.Match, list[str], int], tuple[TranscriptTurn, int] | None]


@dataclass(frozen=True)
class LinePattern:
    """A named line format and the handler that turns a match into a turn."""

    name: str
    regex: re.Pattern
    handler: MatchHandler


def _looks_like_header(line: str) -> bool:
    return bool(SPEAKER_TIMESTAMP_RE.match(line) or TIMESTAMP_SPEAKER_RE.match(line))


def _next_text_line(lines: list[str], index: int) -> tuple[str, int] | None:
    """
    Find the text line belonging to the header at ``index``.

    Blank lines between header and text are skipped. Returns the text and the
    number of lines consumed including the header, or None if the next
    non-blank line is missing or is itself a header.
    """
    for j in range(index + 1, len(lines)):
        candidate = lines[j].strip()
        if not candidate:
            continue
        if _looks_like_header(candidate):
            return None
        return candidate, j - index + 1
    return None


def _bracketed(match: re.Match, lines: list[str], index: int) -> tuple[TranscriptTurn, int]:
    turn = TranscriptTurn(
        speaker=match.group(2).strip(),
        text=match.group(3).strip(),
        timestamp=match.group(1),
    )
    return turn, 1


def _speaker_then_timestamp(
    match: re.Match, lines: list[str], index: int
) -> tuple[TranscriptTurn, int] | None:
    found = _next_text_line(lines, index)
    if found is None:
        return None
    text, consumed = found
    return TranscriptTurn(speaker=match.group(1).strip(), text=text, timestamp=match.group(2)), consumed


def _timestamp_then_speaker(
    match: re.Match, lines: list[str], index: int
) -> tuple[TranscriptTurn, int] | None:
    found = _next_text_line(lines, index)
    if found is None:
        return None
    text, consumed = found
    return TranscriptTurn(speaker=match.group(2).strip(), text=text, timestamp=match.group(1)), consumed


def _speaker_colon(match: re.Match, lines: list[str], index: int) -> tuple[TranscriptTurn, int]:
    return TranscriptTurn(speaker=match.group(1).strip(), text=match.group(2).strip()), 1


LINE_PATTERNS: tuple[LinePattern, ...] = (
    LinePattern("bracketed_timestamp", BRACKETED_RE, _bracketed),
    LinePattern("speaker_timestamp_header", SPEAKER_TIMESTAMP_RE, _speaker_then_timestamp),
    LinePattern("timestamp_speaker_header", TIMESTAMP_SPEAKER_RE, _timestamp_then_speaker),
    LinePattern("speaker_colon", SPEAKER_COLON_RE, _speaker_colon),
)


def _match_line(lines: list[str], index: int) -> tuple[TranscriptTurn, int] | None:
    line = lines[index].strip()
    for pattern in LINE_PATTERNS:
        match = pattern.regex.match(line)
        if not match:
            continue
        parsed = pattern.handler(match, lines, index)
        if parsed is not None:
            return parsed
    return None


def parse_transcript(raw: str) -> list[TranscriptTurn]:
    """
    Parse raw transcript text into ordered turns.

    Never raises: unrecognised lines are appended to the previous turn or
    dropped when no turn exists yet.

    Args:
        raw: Transcript text, possibly empty

    Returns:
        Turns in source order
    """
    lines = raw.strip().split("\n")
    turns: list[TranscriptTurn] = []

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        if not line:
            i += 1
            continue

        parsed = _match_line(lines, i)
        if parsed is not None:
            turn, consumed = parsed
            turns.append(turn)
            i += consumed
            continue

        if turns:
            turns[-1].text += " " + line
        i += 1

    return turns


def unique_speakers(turns: list[TranscriptTurn]) -> list[str]:
    """Distinct speaker labels in first-seen order."""
    return list(dict.fromkeys(turn.speaker for turn in turns))


def identify_me_speaker(turns: list[TranscriptTurn], default: str = DEFAULT_ME_SPEAKER) -> str:
    """
    Pick the speaker label that belongs to the sales rep.

    Transcripts conventionally open with the rep's greeting, so the first
    speaker wins. Without any turns the placeholder ``default`` is returned.
    """
    speakers = unique_speakers(turns)
    if not speakers:
        return default
    return speakers[0]


def build_parsed_transcript(
    raw: str,
    me_speaker_override: str | None = None,
    default_me_speaker: str = DEFAULT_ME_SPEAKER,
) -> ParsedTranscript:
    """
    Parse raw text and label the rep.

    Args:
        raw: Transcript text
        me_speaker_override: Explicit rep label; an empty string counts as unset
        default_me_speaker: Placeholder label when the transcript has no turns

    Returns:
        Parsed transcript
    """
    turns = parse_transcript(raw)
    me_speaker = me_speaker_override or identify_me_speaker(turns, default=default_me_speaker)
    return ParsedTranscript(
        turns=turns,
        speakers=unique_speakers(turns),
        me_speaker=me_speaker,
        turn_count=len(turns),
    )
