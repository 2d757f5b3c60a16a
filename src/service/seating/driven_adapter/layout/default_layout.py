"""Built-in theater layout: five classes, 590 seats"""

from typing import Any, Union


def _row(row_id: str, *segments: range) -> dict[str, Any]:
    """Row whose segments are separated by a single aisle gap"""
    seats: list[Union[int, str]] = []
    for index, segment in enumerate(segments):
        if index:
            seats.append('')
        seats.extend(segment)
    return {'id': row_id, 'name': row_id.rsplit('-', 1)[-1], 'seats': seats}


DEFAULT_THEATER_LAYOUT: dict[str, Any] = {
    'id': 'default-theater',
    'name': 'Standard Theater Layout',
    'sections': [
        {
            'classKey': 'BOX',
            'classLabel': 'BOX',
            'price': 150,
            'rows': [
                _row('BOX-A', range(1, 8)),
                _row('BOX-B', range(1, 8)),
                _row('BOX-C', range(1, 9)),
            ],
        },
        {
            'classKey': 'STAR_CLASS',
            'classLabel': 'STAR CLASS',
            'price': 150,
            'rows': [_row(f'SC-{name}', range(1, 19), range(19, 27)) for name in 'ABCD'],
        },
        {
            'classKey': 'CLASSIC',
            'classLabel': 'CLASSIC BALCONY',
            'price': 120,
            'rows': [
                _row('CB-A', range(1, 14), range(14, 27)),
                *(_row(f'CB-{name}', range(1, 13), range(13, 25)) for name in 'BCDEFGH'),
            ],
        },
        {
            'classKey': 'FIRST_CLASS',
            'classLabel': 'FIRST CLASS',
            'price': 70,
            'rows': [_row(f'FC-{name}', range(1, 16), range(16, 31)) for name in 'ABCDEFG'],
        },
        {
            'classKey': 'SECOND_CLASS',
            'classLabel': 'SECOND CLASS',
            'price': 50,
            'rows': [_row(f'SC2-{name}', range(1, 31)) for name in 'AB'],
        },
    ],
}
