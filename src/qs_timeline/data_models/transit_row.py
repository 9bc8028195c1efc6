"""Normalised public-transit log row.

One row of the OV-chipkaart travel history export after column mapping. A
check-in row and the matching check-out row are later paired into a
`TransitInterval`.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TransitTransaction:
    """Plain-string container for the `Transactie` values."""

    CHECK_IN = "Check-in"
    CHECK_OUT = "Check-uit"


class TransitRow(BaseModel):
    """A single check-in or check-out.

    `date` is kept as the ISO `YYYY-MM-DD` string and `time` as the raw
    `HH:MM` string; they are only parsed when the trip is built so that a
    malformed value fails that trip.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    time: Optional[str] = None
    date: str
    origin: Optional[str] = None
    destination: Optional[str] = None
