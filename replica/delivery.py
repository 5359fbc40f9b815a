"""Per-sender serial tracking for at-most-once update delivery."""

import logging
from typing import Hashable, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class DeliveryTracker:
    """
    Remembers which (sender, serial) pairs have been applied this session.

    The set grows for the lifetime of the process and is never persisted.
    After a restart, replayed updates are no longer filtered here and rely
    on the merge engine's id/fingerprint checks.
    """

    def __init__(self):
        self._seen: Set[Tuple[Optional[Hashable], int]] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def check_and_mark(self, serial: Optional[int], sender: Optional[Hashable] = None) -> bool:
        """
        Record a delivery.

        Returns:
            True if the update should be applied, False if this serial was
            already seen from this sender. Updates without a serial are
            always applied.
        """
        if not serial:
            return True

        key = (sender, serial)
        if key in self._seen:
            logger.debug(f"Skipping replayed update serial={serial} sender={sender}")
            return False

        self._seen.add(key)
        return True

    def seen(self, serial: int, sender: Optional[Hashable] = None) -> bool:
        return (sender, serial) in self._seen

    def clear(self) -> None:
        self._seen.clear()
