"""Shared UI helpers: float sliders and the light/dark colour palettes.

Palettes are plain data so they can be tested without a QApplication;
``panel_stylesheet`` and ``button_stylesheet`` turn them into Qt style
sheets.
"""

from dataclasses import dataclass

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QSlider


# ---------------------------------------------------------------------------
# Slider helpers
# ---------------------------------------------------------------------------

def make_slider(minimum, maximum, value, resolution=100):
    """Create an integer QSlider that maps to float values.

    The slider range is [minimum*resolution, maximum*resolution].
    """
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setMinimum(round(minimum * resolution))
    slider.setMaximum(round(maximum * resolution))
    slider.setValue(round(value * resolution))
    slider.resolution = resolution
    return slider


def slider_value(slider):
    """Read the float value from a slider created by make_slider."""
    return slider.value() / slider.resolution


def set_slider_value(slider, value):
    slider.setValue(round(value * slider.resolution))


# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ThemePalette:
    """Colours for one theme, as ``#rrggbb`` strings."""

    name: str
    background: str
    panel_background: str
    text: str
    border: str
    circle: str
    button: str
    button_hover: str


LIGHT = ThemePalette(
    name="light",
    background="#f5f5f5",
    panel_background="#ffffff",
    text="#333333",
    border="#cccccc",
    circle="#000000",
    button="#e0e0e0",
    button_hover="#d0d0d0",
)

DARK = ThemePalette(
    name="dark",
    background="#1e1e1e",
    panel_background="#2d2d2d",
    text="#e0e0e0",
    border="#404040",
    circle="#888888",
    button="#404040",
    button_hover="#505050",
)

# Accent colours shared by both themes: (normal, hover)
ACCENTS = {
    "primary": ("#3498db", "#2980b9"),
    "success": ("#2ecc71", "#27ae60"),
    "danger": ("#e74c3c", "#c0392b"),
    "warning": ("#f39c12", "#e67e22"),
}

# Status label colour per animation state value
STATUS_COLORS = {
    "running": "#2ecc71",
    "paused": "#f39c12",
    "stopped": "#e74c3c",
}


def toggle_theme(palette: ThemePalette) -> ThemePalette:
    return DARK if palette is LIGHT else LIGHT


def panel_stylesheet(palette: ThemePalette) -> str:
    """Style sheet for the control panel and its labels."""
    return (
        f"QWidget {{ background-color: {palette.panel_background};"
        f" color: {palette.text}; font-size: 13px; }}"
        f" QGroupBox {{ border: 1px solid {palette.border};"
        f" border-radius: 4px; margin-top: 14px; font-weight: bold; }}"
        f" QGroupBox::title {{ subcontrol-origin: margin; left: 8px; }}"
        f" QLineEdit {{ border: 1px solid {palette.border}; padding: 2px; }}"
    )


def button_stylesheet(kind: str, palette: ThemePalette) -> str:
    """Style sheet for a push button of the given accent ``kind``.

    Unknown kinds fall back to the palette's neutral button colours.
    """
    if kind in ACCENTS:
        normal, hover = ACCENTS[kind]
        text = "white"
    else:
        normal, hover = palette.button, palette.button_hover
        text = palette.text
    return (
        f"QPushButton {{ background-color: {normal}; color: {text};"
        f" padding: 6px 14px; border: none; border-radius: 4px; }}"
        f" QPushButton:hover {{ background-color: {hover}; }}"
    )
