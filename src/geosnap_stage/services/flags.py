"""Visibility flagging of pictures and comments."""

from __future__ import annotations

import logging

from geosnap_stage.services.content_store import ContentStore
from geosnap_stage.services.targets import TargetRef

logger = logging.getLogger(__name__)


class FlagProjector:
    """Marks targets as flagged so that public reads exclude them.

    Flags only ever go one way here: there is no unflag operation. Flagging
    an already flagged target overwrites the reason. The caller owns the
    transaction; nothing is committed by this class.
    """

    def __init__(self, store: ContentStore) -> None:
        self.store = store

    def flag(self, target: TargetRef, reason: str) -> None:
        """Set the flagged bit and reason on ``target``."""
        self.store.set_flag(target, True, reason)
        logger.info("Flagged %s: %s", target.key, reason)
