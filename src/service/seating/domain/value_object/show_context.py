"""Show Context Value Object"""

import datetime as dt

import attrs

from src.service.seating.domain.enum.show_time import ShowTime


@attrs.define(frozen=True)
class ShowContext:
    """Which performance the seat map belongs to (date + show slot)"""

    date: dt.date
    show: ShowTime = attrs.field(converter=ShowTime)

    @property
    def date_param(self) -> str:
        return self.date.isoformat()
