# services/transcript_service.py
"""
Turns raw transcript text into ordered, time-bounded segments for
synchronized display next to a video or audio player.

Transcripts arrive with three qualities of timing metadata:

    __RAW__
    00:00:01.500 Hello there            detailed timeline, one line per cue

    [0:05] Hello [1:02:10] World        bracketed markers, coarse per utterance

    Hello there. How are you?           plain text, no timing at all

The most precise signal present wins. Plain text is split into sentences
and spread over the duration when one is known.
"""
import logging
import math
import re
from typing import List, Optional, Tuple

from schemas.transcript import TranscriptFormat, TranscriptSegment
from services.time_format import to_seconds

logger = logging.getLogger(__name__)

RAW_MARKER = "__RAW__"

_TIMELINE_PROBE = re.compile(r"^[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}", re.MULTILINE)
_RAW_TIMELINE_PROBE = re.compile(r"^__RAW__\s*[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}", re.MULTILINE)
_TIMELINE_LINE = re.compile(r"^([0-9]{2}):([0-9]{2}):([0-9]{2})\.([0-9]{3})\s+(.*)$")

_MARKER = re.compile(r"\[[0-9]{1,2}:[0-9]{2}(?::[0-9]{2})?\]")
_MARKER_SPLIT = re.compile(r"(?=\[[0-9]{1,2}:[0-9]{2}(?::[0-9]{2})?\])")
_MARKER_BLOCK = re.compile(r"^\[([0-9]{1,2}:[0-9]{2}(?::[0-9]{2})?)\]\s*(.*)$", re.DOTALL)

_SENTENCE_SPLIT = re.compile(r"(?<=[.?!])\s+")
_RAW_MARKER_CLEAN = re.compile(r"__RAW__\s*", re.IGNORECASE)


def _make_segment(source_key: str, order: int, start_sec: float, text: str) -> TranscriptSegment:
    return TranscriptSegment(
        id=f"{source_key}-{order}",
        sourceKey=source_key,
        order=order,
        startSec=start_sec,
        endSec=None,
        text=text,
    )


def _chain_end_times(segments: List[TranscriptSegment]) -> List[TranscriptSegment]:
    # Each segment ends where the next one starts; the last stays open
    for current, following in zip(segments, segments[1:]):
        current.endSec = following.startSec
    return segments


def _round_half_up(value: float, digits: int = 2) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def split_sentences(text: str) -> List[str]:
    """Collapse whitespace and split after '.', '?' or '!'."""
    collapsed = re.sub(r"\s+", " ", text)
    return [s.strip() for s in _SENTENCE_SPLIT.split(collapsed) if s.strip()]


def has_time_markers(transcript: str) -> bool:
    return bool(_MARKER.search(transcript))


def has_detailed_timeline(transcript: str) -> bool:
    return bool(
        _TIMELINE_PROBE.search(transcript) or _RAW_TIMELINE_PROBE.search(transcript)
    )


def clean_raw_transcript(transcript: str) -> str:
    """
    Display-ready transcript: drops BOM characters, carriage returns and
    any __RAW__ markers.
    """
    cleaned = transcript.replace("\ufeff", "").replace("\r", "")
    cleaned = _RAW_MARKER_CLEAN.sub("", cleaned)
    return cleaned.strip()


def parse_detailed_timeline(source_key: str, transcript: str) -> List[TranscriptSegment]:
    """
    Parse `HH:MM:SS.mmm text` lines. Lines that don't match are skipped.
    Start times are rounded to 2 decimal places.
    """
    timeline_data = transcript.replace(RAW_MARKER, "", 1).replace("\r", "").strip()

    segments: List[TranscriptSegment] = []
    skipped = 0
    for line in timeline_data.split("\n"):
        if not line.strip():
            continue

        match = _TIMELINE_LINE.match(line)
        if not match:
            skipped += 1
            continue

        hours, minutes, seconds, milliseconds, text = match.groups()
        text = text.strip()
        if not text:
            skipped += 1
            continue

        start_sec = (
            int(hours) * 3600
            + int(minutes) * 60
            + int(seconds)
            + int(milliseconds) / 1000
        )
        segments.append(
            _make_segment(source_key, len(segments), _round_half_up(start_sec), text)
        )

    if skipped:
        logger.debug(f"Skipped {skipped} unparseable timeline lines for {source_key}")

    return _chain_end_times(segments)


def parse_with_markers(source_key: str, transcript: str) -> List[TranscriptSegment]:
    """
    Parse text annotated with [M:SS], [MM:SS] or [H:MM:SS] markers.

    Each block runs from its marker to the next one (or the end of the text)
    and may span several lines. Text before the first marker is dropped.
    """
    parts = [
        p.strip()
        for p in _MARKER_SPLIT.split(transcript.replace("\r", ""))
        if p.strip()
    ]

    segments: List[TranscriptSegment] = []
    for part in parts:
        match = _MARKER_BLOCK.match(part)
        if not match:
            continue

        text = match.group(2).strip()
        if not text:
            continue

        segments.append(
            _make_segment(source_key, len(segments), to_seconds(match.group(1)), text)
        )

    return _chain_end_times(segments)


def estimate_by_duration(
    source_key: str,
    transcript: str,
    duration_sec: float,
) -> List[TranscriptSegment]:
    """
    Spread sentences over the duration in proportion to their word counts.
    The last segment ends exactly at duration_sec.
    """
    sentences = split_sentences(transcript)
    if not sentences:
        return []

    word_counts = [len(s.split()) for s in sentences]
    total_words = sum(word_counts) or 1

    segments: List[TranscriptSegment] = []
    word_cum = 0
    for idx, (sentence, words) in enumerate(zip(sentences, word_counts)):
        start_sec = math.floor(word_cum / total_words * duration_sec)
        segments.append(_make_segment(source_key, idx, start_sec, sentence))
        word_cum += words

    _chain_end_times(segments)
    segments[-1].endSec = duration_sec
    return segments


def _untimed_sentences(source_key: str, transcript: str) -> List[TranscriptSegment]:
    # No markers and no duration: keep order, no real timing
    # TODO: space sentences across an assumed default duration instead of pinning them all to 0
    sentences = split_sentences(transcript)
    segments = [_make_segment(source_key, idx, 0, s) for idx, s in enumerate(sentences)]
    for segment in segments[:-1]:
        segment.endSec = 0
    return segments


def detect_format(transcript: str, duration_sec: Optional[float] = None) -> TranscriptFormat:
    if has_detailed_timeline(transcript):
        return TranscriptFormat.TIMELINE
    if has_time_markers(transcript):
        return TranscriptFormat.MARKERS
    if duration_sec and duration_sec > 0 and math.isfinite(duration_sec):
        return TranscriptFormat.ESTIMATED
    return TranscriptFormat.UNTIMED


def parse_transcript_with_format(
    source_key: str,
    transcript: Optional[str],
    duration_sec: Optional[float] = None,
) -> Tuple[TranscriptFormat, List[TranscriptSegment]]:
    """
    Same as parse_transcript, but also reports which path produced the
    segments. An empty result is always reported as EMPTY.
    """
    if not transcript or not transcript.strip():
        return TranscriptFormat.EMPTY, []

    fmt = detect_format(transcript, duration_sec)
    if fmt is TranscriptFormat.TIMELINE:
        segments = parse_detailed_timeline(source_key, transcript)
    elif fmt is TranscriptFormat.MARKERS:
        segments = parse_with_markers(source_key, transcript)
    elif fmt is TranscriptFormat.ESTIMATED:
        segments = estimate_by_duration(source_key, transcript, duration_sec)
    else:
        segments = _untimed_sentences(source_key, transcript)

    if not segments:
        logger.info(f"Transcript for {source_key} produced no segments ({fmt.value})")
        return TranscriptFormat.EMPTY, []

    return fmt, segments


def parse_transcript(
    source_key: str,
    transcript: Optional[str],
    duration_sec: Optional[float] = None,
) -> List[TranscriptSegment]:
    """
    Parse a raw transcript into segments.

    Args:
        source_key: Identifier of the owning video or topic, used for segment ids
        transcript: Raw transcript text
        duration_sec: Media duration, used only when the text carries no timing

    Returns:
        Ordered list of TranscriptSegment; empty when nothing could be parsed
    """
    _, segments = parse_transcript_with_format(source_key, transcript, duration_sec)
    return segments


def find_active_segment(
    segments: List[TranscriptSegment],
    current_sec: float,
) -> Optional[int]:
    """Index of the segment playing at current_sec, or None."""
    for idx, segment in enumerate(segments):
        if current_sec >= segment.startSec and (
            segment.endSec is None or current_sec < segment.endSec
        ):
            return idx
    return None
