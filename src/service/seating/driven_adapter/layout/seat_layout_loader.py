"""
Seat Layout Loader

SEAT_LAYOUT_FILE (JSON) → SeatLayoutSchema → SeatMap.
Falls back to the built-in theater layout when no file is configured.
"""

from pathlib import Path
from typing import Any, Optional

import orjson
from pydantic import ValidationError

from src.platform.config.core_setting import settings
from src.platform.constant.path import LAYOUT_DIR
from src.platform.exception.exceptions import LayoutError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.seat_map import SeatMap
from src.service.seating.domain.value_object.row_layout import RowLayout
from src.service.seating.domain.value_object.seat_class import SeatClass
from src.service.seating.driven_adapter.layout.default_layout import DEFAULT_THEATER_LAYOUT
from src.service.seating.driven_adapter.layout.seat_layout_schema import SeatLayoutSchema


def build_seat_map(layout: SeatLayoutSchema) -> SeatMap:
    rows: list[RowLayout] = []
    classes: list[SeatClass] = []
    for section in layout.sections:
        section_rows = [RowLayout(row_id=row.id, slots=row.to_slots()) for row in section.rows]
        rows.extend(section_rows)
        classes.append(
            SeatClass(
                key=section.class_key,
                label=section.class_label,
                rows=tuple(row.row_id for row in section_rows),
                price=section.price,
                base_row=section.base_row,
            )
        )
    return SeatMap(rows=rows, classes=classes)


def parse_seat_layout(raw: Any) -> SeatMap:
    try:
        schema = SeatLayoutSchema.model_validate(raw)
    except ValidationError as e:
        raise LayoutError(
            f'Invalid seat layout: {e.error_count()} error(s): {e.errors()[0]["msg"]}'
        )
    return build_seat_map(schema)


def _resolve(path: Path) -> Path:
    return path if path.is_absolute() else LAYOUT_DIR / path


@Logger.io(truncate_content=True)
def load_seat_map(path: Optional[Path] = None) -> SeatMap:
    layout_path = path or settings.SEAT_LAYOUT_FILE
    if layout_path is None:
        seat_map = parse_seat_layout(DEFAULT_THEATER_LAYOUT)
        Logger.base.info(f'🎭 [LAYOUT] Using default theater layout ({len(seat_map)} seats)')
        return seat_map

    layout_path = _resolve(Path(layout_path))
    try:
        raw = orjson.loads(layout_path.read_bytes())
    except OSError as e:
        raise LayoutError(f'Cannot read seat layout {layout_path}: {e}')
    except orjson.JSONDecodeError as e:
        raise LayoutError(f'Seat layout {layout_path} is not valid JSON: {e}')

    seat_map = parse_seat_layout(raw)
    Logger.base.info(
        f'🎭 [LAYOUT] Loaded {layout_path.name}: {len(seat_map.classes)} classes, '
        f'{len(seat_map)} seats'
    )
    return seat_map
