"""Validation models for data that arrives from outside the process.

Master seed payloads, stored custom themes and stored favorites are all
decoded from JSON that may have been edited by hand or written by an older
build, so their shape is checked strictly before anything trusts it.
"""

from __future__ import annotations

import math
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator

from chromaseed.constants import MASTER_SEED_VERSION, SWATCH_COUNT
from chromaseed.palette.models import HslColor, PaletteColor

Number = Union[StrictInt, StrictFloat]


class HslRecord(BaseModel):
    h: Number
    s: Number
    l: Number


class ColorRecord(BaseModel):
    hsl: HslRecord
    hex: StrictStr

    @field_validator("hex")
    @classmethod
    def _hash_prefixed(cls, value: str) -> str:
        if not value.startswith("#"):
            raise ValueError("hex must start with '#'")
        return value

    def to_color(self) -> PaletteColor:
        return PaletteColor(HslColor(self.hsl.h, self.hsl.s, self.hsl.l), self.hex)

    @classmethod
    def from_color(cls, color: PaletteColor) -> ColorRecord:
        return cls.model_validate(color.to_dict())


class CustomThemeRecord(BaseModel):
    id: StrictStr
    name: StrictStr
    colors: list[Any] = Field(min_length=SWATCH_COUNT)


class MasterSeedPayload(BaseModel):
    """The shareable state behind a ``PLT1.`` master seed."""

    model_config = ConfigDict(populate_by_name=True)

    v: Literal[1]
    seed: Number
    theme_id: StrictStr = Field(alias="themeId")
    selected_theme_id: StrictStr = Field(alias="selectedThemeId")
    locks: list[StrictBool] = Field(min_length=SWATCH_COUNT, max_length=SWATCH_COUNT)
    palette: list[ColorRecord] = Field(min_length=SWATCH_COUNT, max_length=SWATCH_COUNT)

    @field_validator("v", mode="before")
    @classmethod
    def _known_version(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value != MASTER_SEED_VERSION:
            raise ValueError(f"unsupported master seed version: {value!r}")
        return MASTER_SEED_VERSION

    @field_validator("seed")
    @classmethod
    def _positive_finite(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("seed must be a finite number > 0")
        return value

    @property
    def colors(self) -> list[PaletteColor]:
        return [record.to_color() for record in self.palette]

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
