"""
Human-readable decode report.

The frame dump shows the sampled bits organized by seconds within the frame.
If the decode is correct the first second is a marker and the value of each
second can be read by eye:

    A marker is 80% zeros followed by 20% ones.
    A zero is 20% zeros followed by 80% ones.
    A one is 50% zeros followed by 50% ones.

Note some receivers use an inverted output.

Scores are shown as (total/average-worst): total errors over the field,
average errors per second and the worst single second.
"""

from typing import List, Optional

from ..interfaces.decode_result import DecodedField, DecodeResult
from ..timing.sample_buffer import SampleBuffer
from ..timing.wwvb_constants import FRAME_SECONDS


def format_frame_dump(buffer: SampleBuffer, start_sample: int) -> str:
    """One line per second of the frame starting at start_sample."""
    sps = buffer.samples_per_second
    lines = [
        "   Sec Sample          Samples in Second",
        "   --- ------  " + "-" * sps,
    ]
    for second in range(FRAME_SECONDS):
        first = start_sample + second * sps
        bits = "".join(str(int(b)) for b in buffer.samples[first:first + sps])
        lines.append(f"   {second:03d} ({first:04d}): {bits}")
    return "\n".join(lines)


def _scores(*fields: DecodedField) -> str:
    return ", ".join(
        f"{f.score}/{f.average_score:.2f}-{f.worst_score:02d}" for f in fields
    )


def _value(f: DecodedField, width: Optional[int] = None) -> str:
    return f"{f.value:0{width if width is not None else f.width}d}"


def format_report(result: DecodeResult, frame_dump: Optional[str] = None) -> str:
    """
    Format a decode result for the terminal.

    Args:
        result: Decode result
        frame_dump: Optional output of format_frame_dump to include
    """
    lines: List[str] = []
    sync = result.sync
    frame = result.frame

    fill = f", fill time {result.fill_time_usec} usec" if result.fill_time_usec is not None else ""
    lines.append("")
    lines.append(f"Found frame at sample {sync.start_sample}, score {sync.error}{fill}")

    if frame_dump:
        lines.append(frame_dump)

    hours, minutes, day, year = frame.hours, frame.minutes, frame.day, frame.year
    lyi, lsw, dst = frame.lyi, frame.lsw, frame.dst

    lines.append(
        f"  Time: {_value(hours)}:{_value(minutes)}                  "
        f"({_scores(hours, minutes)})"
    )
    lines.append(
        f"  Day Number: {_value(day)} of year {_value(year)}   "
        f"({_scores(day, year)})"
    )
    lines.append(
        f"  LYI: {_value(lyi)}, LSW: {_value(lsw)}, DST: {_value(dst)}      "
        f"({_scores(lyi, lsw, dst)})"
    )
    lines.append(
        f"  Total decode score {frame.score}/{frame.average_score:.2f}-"
        f"{frame.worst_score:02d} (lower is better)"
    )
    lines.append("")

    if result.month is not None:
        date = f"{result.month:02d}/{result.day:02d}"
    else:
        date = "??/??"
    lines.append(
        f"  Summary: {result.summary_time} UT1 on {date}/20{_value(year, 2)} - "
        f"{frame.worst_score:02d} {result.reliability.value}"
    )
    return "\n".join(lines)
