from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DesignTokens:
    """Flat design system constants shared by every rendered component.

    Build one instance at startup and hand it to the theme manager and the
    pages; nothing mutates it afterwards.
    """

    # Colors
    primary_blue: str = "#007AFF"
    secondary_blue: str = "#5AC8FA"
    accent_green: str = "#34C759"
    accent_red: str = "#FF3B30"
    accent_orange: str = "#FF9500"
    brand_orange: str = "#FF6633"
    on_primary: str = "#FFFFFF"
    border_light: str = "#E5E5EA"
    border_dark: str = "#38383A"

    # Spacing
    padding_xs: int = 4
    padding_s: int = 8
    padding_m: int = 16
    padding_l: int = 24
    padding_xl: int = 32

    # Corner radius
    radius_s: int = 4
    radius_m: int = 8
    radius_l: int = 12
    radius_xl: int = 16

    # Shadows (minimal)
    shadow_opacity: float = 0.05
    shadow_radius: int = 2
    shadow_offset_x: int = 0
    shadow_offset_y: int = 1

    # Typography
    font_family: str = "'SF Pro Text', 'Segoe UI', 'Roboto', sans-serif"
    body_size: int = 15
    button_size: int = 17
    title_size: int = 22

    # Disabled state
    disabled_scale: float = 0.98
    disabled_opacity: float = 0.6
