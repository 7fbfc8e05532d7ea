"""Snapshot persistence and the base64 share payload."""

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import DecodeError
from .models import Question
from .seed import SEED_QUESTIONS

logger = logging.getLogger(__name__)


def encode_collection(questions: Sequence[Question]) -> str:
    return json.dumps([q.to_dict() for q in questions], ensure_ascii=False)


def decode_collection(text: str) -> List[Question]:
    """Decode a JSON array of question records."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise DecodeError("Expected a JSON array of questions.")
    try:
        return [Question.from_dict(d) for d in data]
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Malformed question record: {e}") from e


def encode_share_payload(questions: Sequence[Question]) -> str:
    """Base64 of the UTF-8 JSON collection, for passing with ``--data``."""
    return base64.b64encode(encode_collection(questions).encode("utf-8")).decode("ascii")


def decode_share_payload(payload: str) -> List[Question]:
    try:
        raw = base64.b64decode(payload.strip(), validate=True)
        text = raw.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid share payload: {e}") from e
    return decode_collection(text)


class SnapshotRepository:
    """Persists the full collection as a JSON file."""

    def __init__(self, path: str = "quiz_data.json"):
        self.path = Path(path)

    def load(self) -> Optional[List[Question]]:
        """Return the saved collection, or None if missing or unreadable."""
        if not self.path.exists():
            return None
        try:
            return decode_collection(self.path.read_text(encoding="utf-8"))
        except (OSError, DecodeError) as e:
            logger.error(f"Failed to load snapshot {self.path}: {e}")
            return None

    def save(self, questions: Sequence[Question]):
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(encode_collection(questions), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save snapshot {self.path}: {e}")


def load_initial_collection(repository: SnapshotRepository, payload: Optional[str] = None,
                            seed: Sequence[Question] = SEED_QUESTIONS) -> List[Question]:
    """Pick the starting collection: share payload, then snapshot, then seed."""
    if payload:
        try:
            questions = decode_share_payload(payload)
        except DecodeError as e:
            logger.error(f"Error decoding data: {e}")
        else:
            repository.save(questions)
            logger.info(f"Loaded {len(questions)} questions from share payload")
            return questions

    saved = repository.load()
    if saved is not None:
        logger.info(f"Loaded {len(saved)} questions from {repository.path}")
        return saved
    logger.info("No snapshot found, using seed questions")
    return list(seed)
