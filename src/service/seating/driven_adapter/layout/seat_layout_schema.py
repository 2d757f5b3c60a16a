"""Seat layout file schema (same shape the box-office layout editor exports)"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TheaterRowSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: Optional[str] = None
    # int = seat number, '' (or null) = aisle gap
    seats: List[Union[int, str, None]] = Field(min_length=1)

    @field_validator('seats')
    @classmethod
    def gaps_must_be_blank(cls, v: List[Union[int, str, None]]) -> List[Union[int, str, None]]:
        for slot in v:
            if isinstance(slot, str) and slot.strip():
                raise ValueError(f'Gap slots must be empty strings, got {slot!r}')
            if isinstance(slot, int) and slot <= 0:
                raise ValueError(f'Seat numbers must be positive, got {slot}')
        return v

    def to_slots(self) -> tuple[Optional[int], ...]:
        return tuple(slot if isinstance(slot, int) else None for slot in self.seats)


class TheaterSectionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_key: str = Field(alias='classKey', min_length=1)
    class_label: str = Field(alias='classLabel', min_length=1)
    price: int = Field(default=0, ge=0)
    base_row: Optional[str] = Field(default=None, alias='baseRow')
    rows: List[TheaterRowSchema] = Field(min_length=1)


class SeatLayoutSchema(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'id': 'default-theater',
                'name': 'Standard Theater Layout',
                'sections': [
                    {
                        'classKey': 'STAR_CLASS',
                        'classLabel': 'STAR CLASS',
                        'price': 150,
                        'rows': [{'id': 'SC-A', 'name': 'A', 'seats': [1, 2, 3, '', 4, 5]}],
                    }
                ],
            }
        },
    )

    id: str = 'custom-theater'
    name: str = 'Custom Theater Layout'
    sections: List[TheaterSectionSchema] = Field(min_length=1)
