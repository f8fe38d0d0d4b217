"""Stateless style modifiers for the flat design system.

Each function maps tokens, the active palette and an enabled flag to a
:class:`Chrome` value; :func:`to_qss` turns that into a stylesheet block.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .tokens import DesignTokens

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .theme import ThemePalette


@dataclass(frozen=True)
class Chrome:
    background: str
    border: str
    text: str
    radius: int
    padding_v: int
    padding_h: int
    font_size: int
    font_weight: int = 400
    border_width: int = 1
    scale: float = 1.0
    opacity: float = 1.0


def primary_button(tokens: DesignTokens, palette: "ThemePalette", enabled: bool = True) -> Chrome:
    fill = tokens.primary_blue if enabled else palette.border
    return Chrome(
        background=fill,
        border=fill,
        text=tokens.on_primary,
        radius=tokens.radius_m,
        padding_v=tokens.padding_m,
        padding_h=tokens.padding_m,
        font_size=tokens.button_size,
        font_weight=600,
        scale=1.0 if enabled else tokens.disabled_scale,
        opacity=1.0 if enabled else tokens.disabled_opacity,
    )


def secondary_button(tokens: DesignTokens, palette: "ThemePalette", enabled: bool = True) -> Chrome:
    return Chrome(
        background=palette.background,
        border=tokens.primary_blue if enabled else palette.border,
        text=tokens.primary_blue if enabled else palette.secondary_text,
        radius=tokens.radius_m,
        padding_v=tokens.padding_m,
        padding_h=tokens.padding_m,
        font_size=tokens.button_size,
        font_weight=500,
        scale=1.0 if enabled else tokens.disabled_scale,
        opacity=1.0 if enabled else tokens.disabled_opacity,
    )


def card(tokens: DesignTokens, palette: "ThemePalette") -> Chrome:
    return Chrome(
        background=palette.card_background,
        border=palette.border,
        text=palette.text,
        radius=tokens.radius_l,
        padding_v=tokens.padding_m,
        padding_h=tokens.padding_m,
        font_size=tokens.body_size,
    )


def list_row(tokens: DesignTokens, palette: "ThemePalette") -> Chrome:
    return Chrome(
        background=palette.secondary_background,
        border=palette.border,
        text=palette.text,
        radius=0,
        padding_v=tokens.padding_m,
        padding_h=tokens.padding_m,
        font_size=tokens.button_size,
        font_weight=500,
    )


def toggle_row(tokens: DesignTokens, palette: "ThemePalette") -> Chrome:
    return list_row(tokens, palette)


def text_field(tokens: DesignTokens, palette: "ThemePalette", focused: bool = False) -> Chrome:
    return Chrome(
        background=palette.background,
        border=tokens.primary_blue if focused else palette.border,
        text=palette.text,
        radius=tokens.radius_m,
        padding_v=tokens.padding_m,
        padding_h=tokens.padding_m,
        font_size=tokens.button_size,
    )


def to_qss(selector: str, chrome: Chrome) -> str:
    # Qt widgets cannot be scaled from a stylesheet; shrink the padding instead.
    padding_v = round(chrome.padding_v * chrome.scale)
    padding_h = round(chrome.padding_h * chrome.scale)
    return (
        f"{selector} {{\n"
        f"    background-color: {chrome.background};\n"
        f"    color: {chrome.text};\n"
        f"    border: {chrome.border_width}px solid {chrome.border};\n"
        f"    border-radius: {chrome.radius}px;\n"
        f"    padding: {padding_v}px {padding_h}px;\n"
        f"    font-size: {chrome.font_size}px;\n"
        f"    font-weight: {chrome.font_weight};\n"
        f"}}\n"
    )
