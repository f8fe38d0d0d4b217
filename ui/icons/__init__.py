"""App icon preview and export helpers."""

from .icon_view import AppIconView, export_icon_set, render_icon
from .pages import AppIconSizesPage, IconGeneratorPage
from .sizes import APP_ICON_SIZES, GENERATOR_SIZES, IconSize

__all__ = [
    "AppIconView",
    "export_icon_set",
    "render_icon",
    "AppIconSizesPage",
    "IconGeneratorPage",
    "APP_ICON_SIZES",
    "GENERATOR_SIZES",
    "IconSize",
]
