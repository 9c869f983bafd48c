"""Preset times-table patterns and pattern identification.

The catalog is a fixed, read-only tuple built at import time. Its order
matters: ``identify`` returns the first match and the number keys map to
the first ten entries.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Absolute distance below which a TTN counts as a preset
IDENTIFY_TOLERANCE = 0.01

CUSTOM_PATTERN = "Custom Pattern"


@dataclass(frozen=True)
class PresetPattern:
    """A named (TTN, point count) pair for a recognisable curve."""

    name: str
    ttn: float
    point_count: int
    description: str


PRESETS: tuple[PresetPattern, ...] = (
    PresetPattern("Cardioid", 2.0, 360,
                  "Heart-shaped curve formed by times table 2"),
    PresetPattern("Nephroid", 3.0, 360,
                  "Kidney-shaped curve formed by times table 3"),
    PresetPattern("Epicycloid 4", 4.0, 360,
                  "3-cusped epicycloid pattern"),
    PresetPattern("Epicycloid 5", 5.0, 360,
                  "4-cusped epicycloid pattern"),
    PresetPattern("Pattern 29", 29.0, 360,
                  "Beautiful dense star pattern"),
    PresetPattern("Pattern 34", 34.0, 360,
                  "Complex star pattern with intricate details"),
    PresetPattern("Pattern 51", 51.0, 360,
                  "Dense circular pattern with beautiful symmetry"),
    PresetPattern("Pattern 79", 79.0, 360,
                  "Nearly complete with subtle gaps"),
    PresetPattern("Pattern 99", 99.0, 360,
                  "Nearly complete circle with subtle variations"),
    # Irrational multipliers
    PresetPattern("π (Pi)", math.pi, 360,
                  "Irrational pattern using π ≈ 3.14159..."),
    PresetPattern("√2", math.sqrt(2), 360,
                  "Irrational pattern using √2 ≈ 1.41421..."),
    PresetPattern("φ (Phi)", (1 + math.sqrt(5)) / 2, 360,
                  "Golden ratio φ ≈ 1.61803..."),
    PresetPattern("e (Euler)", math.e, 360,
                  "Euler's number e ≈ 2.71828..."),
    PresetPattern("√3", math.sqrt(3), 360,
                  "Irrational pattern using √3 ≈ 1.73205..."),
)


def all_presets() -> tuple[PresetPattern, ...]:
    return PRESETS


def identify(ttn: float, tolerance: float = IDENTIFY_TOLERANCE) -> str:
    """Name of the first preset within ``tolerance`` of ``ttn``.

    Returns ``CUSTOM_PATTERN`` when nothing matches.
    """
    for preset in PRESETS:
        if abs(preset.ttn - ttn) < tolerance:
            return preset.name
    return CUSTOM_PATTERN


def preset_for_digit(digit: int) -> PresetPattern | None:
    """Preset bound to a number key: 1-9 select presets 1-9, 0 selects 10."""
    if not 0 <= digit <= 9:
        return None
    index = 9 if digit == 0 else digit - 1
    if index >= len(PRESETS):
        return None
    return PRESETS[index]


def format_formula(ttn: float, point_count: int) -> str:
    """Human-readable mapping, e.g. ``n × 2.0 mod 360``."""
    return f"n × {ttn:.1f} mod {point_count:.0f}"
