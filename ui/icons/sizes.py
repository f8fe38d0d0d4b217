from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class IconSize:
    pixels: int
    usage: str

    @property
    def label(self) -> str:
        return f"{self.pixels}x{self.pixels}"


APP_ICON_SIZES: Tuple[IconSize, ...] = (
    IconSize(1024, "App Store"),
    IconSize(180, "iPhone @3x home screen"),
    IconSize(167, "iPad Pro 12.9\""),
    IconSize(152, "iPad Pro 11\""),
    IconSize(120, "iPhone @2x home screen"),
    IconSize(87, "iPhone @3x settings"),
    IconSize(80, "iPad spotlight"),
    IconSize(76, "iPad home screen"),
    IconSize(60, "iPhone @3x notifications"),
    IconSize(58, "iPhone @2x settings"),
    IconSize(40, "iPhone @2x notifications"),
    IconSize(29, "Settings @1x"),
    IconSize(20, "Notifications @1x"),
)

# Rows shown on the generator page; 200 gets a row of its own.
GENERATOR_ROWS: Tuple[Tuple[int, ...], ...] = (
    (60, 80, 100),
    (120, 140, 160),
    (200,),
)

GENERATOR_SIZES: Tuple[int, ...] = tuple(size for row in GENERATOR_ROWS for size in row)
