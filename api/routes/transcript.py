import logging
import math
from fastapi import APIRouter, HTTPException

from schemas.transcript import (
    TranscriptParseRequest,
    TranscriptParseResponse,
    TranscriptSegmentOut,
)
from services.time_format import sec_to_hhmmss
from services.transcript_service import (
    clean_raw_transcript,
    find_active_segment,
    parse_transcript_with_format,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/transcript/parse", response_model=TranscriptParseResponse)
def parse_transcript_route(req: TranscriptParseRequest) -> TranscriptParseResponse:
    """
    Split a raw transcript into time-bounded segments.

    Args:
        req: sourceKey, raw transcript text, optional durationSec and
             currentTimeSec (playback position)

    Returns:
        TranscriptParseResponse with the detected format, the cleaned
        transcript, the segments and the index of the active segment
    """
    if req.durationSec is not None and (
        req.durationSec < 0 or not math.isfinite(req.durationSec)
    ):
        raise HTTPException(
            status_code=422,
            detail="durationSec must be a finite, non-negative number",
        )

    try:
        fmt, segments = parse_transcript_with_format(
            req.sourceKey, req.transcript, req.durationSec
        )
        logger.info(f"Parsed transcript {req.sourceKey}: {len(segments)} segments ({fmt.value})")

        active_index = None
        if req.currentTimeSec is not None:
            active_index = find_active_segment(segments, req.currentTimeSec)

        return TranscriptParseResponse(
            sourceKey=req.sourceKey,
            format=fmt,
            transcript=clean_raw_transcript(req.transcript),
            segments=[
                TranscriptSegmentOut(
                    **seg.model_dump(),
                    startLabel=sec_to_hhmmss(seg.startSec),
                )
                for seg in segments
            ],
            activeIndex=active_index,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error parsing transcript: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Transcript parsing service error",
        )
