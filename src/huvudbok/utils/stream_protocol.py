"""Line-prefixed stream frames: ``<TAG>:<JSON>\\n``.

Tags:
    T  text chunk
    D  structured data
    A  active-agent switch
    E  error
"""

import json
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

TEXT = "T"
DATA = "D"
AGENT = "A"
ERROR = "E"

TAGS = (TEXT, DATA, AGENT, ERROR)


@dataclass(frozen=True)
class Frame:
    tag: str
    payload: Any


def encode_frame(tag: str, payload: Any) -> str:
    """Encode one frame as a newline-terminated line.

    Raises:
        ValueError: If the tag is unknown
    """
    if tag not in TAGS:
        raise ValueError(f"Unknown frame tag '{tag}'. Valid tags: {', '.join(TAGS)}")
    return f"{tag}:{json.dumps(payload, ensure_ascii=False, default=str)}\n"


def parse_frame(line: str) -> Frame | None:
    """Parse one line, returning None when it is not a valid frame."""
    line = line.rstrip("\r\n")
    tag, sep, body = line.partition(":")
    if not sep or tag not in TAGS:
        return None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return None
    return Frame(tag=tag, payload=payload)


def parse_frames(lines: Iterable[str]) -> Iterator[Frame]:
    """Parse a stream line by line, dropping malformed lines."""
    for line in lines:
        frame = parse_frame(line)
        if frame is not None:
            yield frame
