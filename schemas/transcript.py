# Models
from enum import Enum
from pydantic import BaseModel
from typing import List, Optional


class TranscriptFormat(str, Enum):
    TIMELINE = "timeline"
    MARKERS = "markers"
    ESTIMATED = "estimated"
    UNTIMED = "untimed"
    EMPTY = "empty"


class TranscriptSegment(BaseModel):
    id: str
    sourceKey: str
    order: int
    startSec: float
    endSec: Optional[float] = None
    text: str


class TranscriptParseRequest(BaseModel):
    sourceKey: str
    transcript: str
    durationSec: Optional[float] = None
    # Playback position, used to report which segment is active
    currentTimeSec: Optional[float] = None


class TranscriptSegmentOut(TranscriptSegment):
    startLabel: str


class TranscriptParseResponse(BaseModel):
    sourceKey: str
    format: TranscriptFormat
    transcript: str
    segments: List[TranscriptSegmentOut]
    activeIndex: Optional[int] = None
