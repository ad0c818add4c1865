"""Duplicate detection for imported trades."""

import logging

from tradejournal.database.base import Database
from tradejournal.domain.entities import Fingerprint, TradeRecord


logger = logging.getLogger(__name__)


class DuplicateDetector:
    """Checks built records against trades already in storage."""

    def __init__(self, db: Database):
        self.db = db

    def is_duplicate(self, record: TradeRecord) -> bool:
        fingerprint = Fingerprint.of(record)
        exists = self.db.trade_exists(fingerprint)
        if exists:
            logger.debug(
                "Duplicate trade %s at %s @ %s for account %s",
                fingerprint.symbol,
                fingerprint.entry_time,
                fingerprint.entry_price,
                fingerprint.account_id,
            )
        return exists
