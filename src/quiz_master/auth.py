"""Passphrase gate for the authoring mode."""

import logging

logger = logging.getLogger(__name__)

DEFAULT_PASSPHRASE = "1234"


class PassphraseGate:
    """Unlocks authoring when the shared passphrase is entered."""

    def __init__(self, passphrase: str = DEFAULT_PASSPHRASE):
        self._passphrase = passphrase
        self._unlocked = False

    @property
    def is_unlocked(self) -> bool:
        return self._unlocked

    def verify(self, attempt: str) -> bool:
        self._unlocked = attempt == self._passphrase
        if not self._unlocked:
            logger.info("Rejected authoring passphrase")
        return self._unlocked

    def lock(self):
        self._unlocked = False
