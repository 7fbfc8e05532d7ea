"""Command line entry point."""

import argparse
import logging
import random

from .audio_cues import build_cue_player
from .auth import PassphraseGate
from .config import load_config
from .persistence import SnapshotRepository, load_initial_collection
from .question_store import QuestionStore
from .quiz_app import QuizApp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Quiz Master: multiple-choice quizzes by subject")
    parser.add_argument("--config", default="config.yaml", help="Config file path")
    parser.add_argument("--data", default=None, help="Base64 share payload to load at startup")
    parser.add_argument("--snapshot", default=None, help="Snapshot file path (overrides config)")
    parser.add_argument("--mute", action="store_true", help="Start with sound cues muted")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def build_app(config: dict, data=None) -> QuizApp:
    storage_cfg = config.get("storage", {})
    quiz_cfg = config.get("quiz", {})

    repository = SnapshotRepository(storage_cfg.get("snapshot_path", "quiz_data.json"))
    questions = load_initial_collection(repository, payload=data)
    store = QuestionStore(questions, on_change=repository.save)

    seed = quiz_cfg.get("seed")
    return QuizApp(
        store=store,
        gate=PassphraseGate(str(config.get("auth", {}).get("passphrase", ""))),
        cue_player=build_cue_player(config.get("audio", {})),
        rng=random.Random(seed) if seed is not None else None,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    config = load_config(args.config)
    if args.snapshot:
        config["storage"]["snapshot_path"] = args.snapshot
    if args.mute:
        config["audio"]["muted"] = True

    app = build_app(config, data=args.data)
    app.run()


if __name__ == "__main__":
    main()
