"""Turn transit check-in / check-out rows into trips.

Rows are split into check-ins and check-outs, keeping their order, and the
i-th check-in is paired with the i-th check-out. Pairing is positional: it
does not look at stations or times, so a missing check-out shifts every
following trip. `validate_transit_pairing` catches the count mismatch that
causes this.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from qs_timeline.data_models.day_event import EventLabel, TransitInterval
from qs_timeline.data_models.transit_row import TransitRow, TransitTransaction
from qs_timeline.services.timestamp_service import parse_date, parse_timestamp


logger = logging.getLogger(__name__)


class TransitPairingError(ValueError):
    """Check-in and check-out rows cannot be paired one-to-one."""

    def __init__(self, checkin_count: int, checkout_count: int):
        self.checkin_count = checkin_count
        self.checkout_count = checkout_count
        super().__init__(
            f"Cannot pair transit rows: {checkin_count} check-in(s) vs "
            f"{checkout_count} check-out(s)"
        )


def split_checkins_checkouts(rows: Sequence[TransitRow]) -> Tuple[List[TransitRow], List[TransitRow]]:
    """Partition rows by transaction type, preserving relative order.

    Rows with any other transaction type (e.g. top-ups) are ignored.
    """
    checkins = [r for r in rows if r.type == TransitTransaction.CHECK_IN]
    checkouts = [r for r in rows if r.type == TransitTransaction.CHECK_OUT]
    return checkins, checkouts


def validate_transit_pairing(checkins: Sequence[TransitRow], checkouts: Sequence[TransitRow]) -> None:
    if len(checkins) != len(checkouts):
        raise TransitPairingError(len(checkins), len(checkouts))


def build_interval(checkin: TransitRow, checkout: TransitRow) -> TransitInterval:
    """Build one trip; both timestamps use the check-out row's date."""
    beginning = parse_timestamp(checkout.date, checkin.time)
    end = parse_timestamp(checkout.date, checkout.time)
    return TransitInterval(
        label=EventLabel.TRANSIT,
        description=f"{checkout.origin} - {checkout.destination}",
        date=parse_date(checkout.date),
        beginning=beginning,
        end=end,
        origin=checkout.origin or "",
        destination=checkout.destination,
    )


def pair_transit_rows(rows: Sequence[TransitRow], strict: bool = True) -> List[TransitInterval]:
    """Pair check-ins with check-outs by index into `TransitInterval`s.

    Args:
        rows: Normalised transit rows in log order.
        strict: If True (default), raise `TransitPairingError` when the number
            of check-ins and check-outs differ. If False, pair the first
            min(#check-ins, #check-outs) of each and log a warning.
    """
    checkins, checkouts = split_checkins_checkouts(rows)

    if strict:
        validate_transit_pairing(checkins, checkouts)
    elif len(checkins) != len(checkouts):
        logger.warning(
            "Transit log has %d check-in(s) and %d check-out(s); pairing the first %d by position",
            len(checkins),
            len(checkouts),
            min(len(checkins), len(checkouts)),
        )

    intervals = [build_interval(ci, co) for ci, co in zip(checkins, checkouts)]
    logger.info("Paired %d transit trips from %d rows", len(intervals), len(rows))
    return intervals
