"""
Speaker notes markup

Notes may tag fragments with the step that reveals them:

    Intro text [step:1]said on the first click[/step] closing text

Tagged fragments are highlighted once playback reaches their step; untagged
text is always shown plain.
"""

import re
from typing import List, Tuple

from models.domain.playback import NoteSegment

STEP_MARKUP = re.compile(r"\[step:(\d+)\]([\s\S]*?)\[/step\]")


def parse_notes(notes: str) -> List[NoteSegment]:
    segments: List[NoteSegment] = []
    last = 0

    for match in STEP_MARKUP.finditer(notes):
        if match.start() > last:
            segments.append(NoteSegment(text=notes[last:match.start()]))
        segments.append(NoteSegment(text=match.group(2), step=int(match.group(1))))
        last = match.end()

    if last < len(notes):
        segments.append(NoteSegment(text=notes[last:]))

    return segments


def render_notes(notes: str, active_step: int) -> List[Tuple[str, bool]]:
    """(text, highlighted) pairs for the presenter console"""
    return [(s.text, s.is_highlighted(active_step)) for s in parse_notes(notes)]
