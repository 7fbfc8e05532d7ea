"""Bulk Text Parser: turns pasted question text into questions.

Plain text format, one question per block, blocks separated by blank lines::

    1. What is 2+2?
    A. 3
    B. 4 (correct)
    C. 5
    D. 6

The stem may carry an enumerator (``1.``, ``១.``, ``IV)``, ``a.``), options are
labelled ``A``-``D`` or ``ក ខ គ ឃ``, and a line without a label continues the
previous option. Input starting with ``[`` or ``{`` is read as JSON records
instead.
"""

import json
import logging
import re
from typing import List

from .errors import ParseError
from .models import OPTION_COUNT, Question

logger = logging.getLogger(__name__)

FALLBACK_SUBJECT = "General"
CORRECT_MARKERS = ("(correct)", "(ចម្លើយត្រឹមត្រូវ)")

_BLOCK_SPLIT = re.compile(r"\n\s*\n")
_ENUMERATOR = re.compile(r"^(?:[0-9០-៩]+|[IVX]+|[A-Z])[.)]\s+", re.IGNORECASE)
_OPTION = re.compile(r"^([កខគឃA-D])[.)]\s*(.*)$", re.IGNORECASE)


def _strip_marker(content: str):
    """Return ``(content, marked)`` with any correct-answer marker removed."""
    marked = False
    for marker in CORRECT_MARKERS:
        if marker in content:
            content = content.replace(marker, "")
            marked = True
    return content.strip(), marked


def _parse_block(block: str, subject: str):
    lines = [line.strip() for line in block.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        return None

    stem = _ENUMERATOR.sub("", lines[0], count=1)
    options: List[str] = []
    for line in lines[1:]:
        match = _OPTION.match(line)
        if match:
            options.append(match.group(2).strip())
        elif options:
            options[-1] += " " + line
    if not options:
        return None

    correct = 0
    for i, content in enumerate(options):
        options[i], marked = _strip_marker(content)
        if marked:
            correct = i

    options = (options + [""] * OPTION_COUNT)[:OPTION_COUNT]
    if correct >= OPTION_COUNT:
        correct = 0
    return Question(subject=subject, text=stem, options=options,
                    correct_index=correct, is_active=True)


def parse_plain_text(text: str, default_subject: str = "") -> List[Question]:
    """Parse free text into questions. Blocks without options are skipped."""
    subject = default_subject.strip() or FALLBACK_SUBJECT
    questions = []
    skipped = 0
    for block in _BLOCK_SPLIT.split(text.replace("\r\n", "\n").strip()):
        q = _parse_block(block, subject)
        if q is None:
            skipped += 1
            continue
        questions.append(q)
    if skipped:
        logger.debug(f"Skipped {skipped} blocks without options")
    return questions


def parse_json_records(text: str) -> List[Question]:
    """Parse a JSON array (or a single object) of question records."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ParseError("JSON input must be an array of questions.")
    questions = []
    for n, record in enumerate(data, start=1):
        try:
            questions.append(Question.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(f"Question {n} is malformed: {e}") from e
    return questions


def parse_bulk(text: str, default_subject: str = "") -> List[Question]:
    """Parse pasted bulk input, choosing the JSON or plain text path."""
    stripped = text.strip()
    if not stripped:
        return []
    if stripped[0] in "[{":
        return parse_json_records(stripped)
    return parse_plain_text(stripped, default_subject)
