"""Times-table control panel: playback, speed, jump-to, appearance, presets.

The panel only builds widgets and exposes accessors. TimesTableView
connects the buttons and reads values back.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QValidator
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout, QHBoxLayout,
    QLabel, QPushButton, QGroupBox, QCheckBox, QLineEdit,
)

from animation import (
    DEFAULT_COLOR, DEFAULT_DELAY, DEFAULT_POINT_COUNT, DEFAULT_STEP_SIZE,
    DEFAULT_TTN,
)
from patterns import all_presets
from text_input import is_acceptable_edit
from ui_common import (
    LIGHT, STATUS_COLORS, button_stylesheet, make_slider, panel_stylesheet,
    set_slider_value, slider_value,
)

STEP_RANGE = (0.01, 5.0)
DELAY_RANGE = (0.0, 2.0)


class DecimalValidator(QValidator):
    """Rejects any edit that is not empty or a complete decimal."""

    def validate(self, text, pos):
        if text == "":
            return QValidator.State.Intermediate, text, pos
        if is_acceptable_edit(text):
            return QValidator.State.Acceptable, text, pos
        return QValidator.State.Invalid, text, pos


def format_ttn_text(ttn):
    """Text placed in the jump field; whole numbers lose the decimals."""
    if float(ttn).is_integer():
        return f"{ttn:.0f}"
    return f"{ttn:.5f}".rstrip("0")


class TimesTableControls(QWidget):
    """Buttons, sliders and fields driving the visualization."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._buttons = []
        self._init_ui()
        self.apply_theme(LIGHT)

    # -- helpers --

    def _make_button(self, text, kind="default"):
        btn = QPushButton(text)
        btn.kind = kind
        self._buttons.append(btn)
        return btn

    def _add_slider_row(self, layout, row, label_text, slider, fmt):
        label = QLabel(label_text)
        value_label = QLabel()
        value_label.setMinimumWidth(55)
        value_label.setAlignment(
            Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        )
        layout.addWidget(label, row, 0)
        layout.addWidget(slider, row, 1)
        layout.addWidget(value_label, row, 2)

        def _update(_val, vl=value_label, sl=slider):
            vl.setText(fmt.format(slider_value(sl)))

        slider.valueChanged.connect(_update)
        _update(slider.value())

    # -- UI construction --

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- Status ---
        self.status_label = QLabel()
        self.set_status("stopped")
        main_layout.addWidget(self.status_label)

        # --- Times Table Number ---
        ttn_group = QGroupBox("Times Table Number")
        ttn_layout = QVBoxLayout()
        ttn_group.setLayout(ttn_layout)

        value_row = QHBoxLayout()
        self.ttn_value_label = QLabel()
        self.ttn_value_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        self.pattern_label = QLabel()
        self.pattern_label.setStyleSheet("font-style: italic;")
        value_row.addWidget(self.ttn_value_label)
        value_row.addWidget(self.pattern_label)
        value_row.addStretch()
        ttn_layout.addLayout(value_row)

        self.formula_label = QLabel()
        self.formula_label.setStyleSheet("font-family: monospace;")
        ttn_layout.addWidget(self.formula_label)

        main_layout.addWidget(ttn_group)

        # --- Playback ---
        pb_group = QGroupBox("Playback")
        pb_layout = QGridLayout()
        pb_group.setLayout(pb_layout)

        self.play_btn = self._make_button("▶ Play", "success")
        self.pause_btn = self._make_button("⏸ Pause", "warning")
        self.stop_btn = self._make_button("⏹ Stop", "danger")
        self.reset_btn = self._make_button("↻ Reset")
        pb_layout.addWidget(self.play_btn, 0, 0)
        pb_layout.addWidget(self.pause_btn, 0, 1)
        pb_layout.addWidget(self.stop_btn, 1, 0)
        pb_layout.addWidget(self.reset_btn, 1, 1)

        main_layout.addWidget(pb_group)

        # --- Animation Speed ---
        speed_group = QGroupBox("Animation Speed")
        speed_layout = QGridLayout()
        speed_group.setLayout(speed_layout)

        self.step_slider = make_slider(*STEP_RANGE, DEFAULT_STEP_SIZE)
        self.delay_slider = make_slider(*DELAY_RANGE, DEFAULT_DELAY)
        self._add_slider_row(speed_layout, 0, "Increment", self.step_slider, "{:.2f}")
        self._add_slider_row(speed_layout, 1, "Delay", self.delay_slider, "{:.2f}s")

        main_layout.addWidget(speed_group)

        # --- Jump To ---
        jump_group = QGroupBox("Jump To")
        jump_layout = QGridLayout()
        jump_group.setLayout(jump_layout)

        self.ttn_edit = QLineEdit(format_ttn_text(DEFAULT_TTN))
        self.ttn_edit.setValidator(DecimalValidator(self.ttn_edit))
        self.points_edit = QLineEdit(str(DEFAULT_POINT_COUNT))
        self.points_edit.setValidator(DecimalValidator(self.points_edit))
        self.jump_btn = self._make_button("Jump", "primary")

        jump_layout.addWidget(QLabel("TTN:"), 0, 0)
        jump_layout.addWidget(self.ttn_edit, 0, 1)
        jump_layout.addWidget(QLabel("Points:"), 1, 0)
        jump_layout.addWidget(self.points_edit, 1, 1)
        jump_layout.addWidget(self.jump_btn, 2, 0, 1, 2)

        main_layout.addWidget(jump_group)

        # --- Appearance ---
        look_group = QGroupBox("Appearance")
        look_layout = QVBoxLayout()
        look_group.setLayout(look_layout)

        self.color_btn = self._make_button("Line Color")
        self.color_swatch = QLabel()
        self.color_swatch.setFixedSize(40, 20)
        color_row = QHBoxLayout()
        color_row.addWidget(self.color_btn)
        color_row.addWidget(self.color_swatch)
        color_row.addStretch()
        look_layout.addLayout(color_row)
        self.set_color_swatch(DEFAULT_COLOR)

        self.circle_checkbox = QCheckBox("Show Circle")
        self.circle_checkbox.setChecked(True)
        look_layout.addWidget(self.circle_checkbox)

        self.theme_btn = self._make_button("\U0001f319 Dark Mode")
        look_layout.addWidget(self.theme_btn)

        main_layout.addWidget(look_group)

        # --- Preset Patterns ---
        preset_group = QGroupBox("Preset Patterns")
        preset_layout = QGridLayout()
        preset_group.setLayout(preset_layout)

        self.preset_buttons = []
        for i, preset in enumerate(all_presets()):
            btn = self._make_button(preset.name)
            btn.setToolTip(preset.description)
            btn.preset = preset
            preset_layout.addWidget(btn, i // 2, i % 2)
            self.preset_buttons.append(btn)

        main_layout.addWidget(preset_group)

        # --- Actions ---
        self.save_btn = self._make_button("\U0001f4be Save Image", "primary")
        main_layout.addWidget(self.save_btn)
        main_layout.addStretch()

    # -- Public accessors --

    def get_step_size(self):
        return slider_value(self.step_slider)

    def get_delay(self):
        return slider_value(self.delay_slider)

    def get_ttn_text(self):
        return self.ttn_edit.text()

    def get_points_text(self):
        return self.points_edit.text()

    def set_ttn_text(self, ttn):
        self.ttn_edit.setText(format_ttn_text(ttn))

    def set_points_text(self, point_count):
        self.points_edit.setText(str(point_count))

    def set_color_swatch(self, rgb):
        self.color_swatch.setStyleSheet(
            f"background-color: {QColor(*rgb).name()}; border: 1px solid #888;"
        )

    def set_status(self, state_value):
        color = STATUS_COLORS[state_value]
        self.status_label.setText(f"● {state_value.capitalize()}")
        self.status_label.setStyleSheet(
            f"color: {color}; font-size: 14px; font-weight: bold;"
        )

    def show_frame(self, frame):
        self.ttn_value_label.setText(f"{frame.ttn:.1f}")
        self.pattern_label.setText(frame.pattern_name)
        self.formula_label.setText(frame.formula)

    def restore_defaults(self):
        """Put sliders, fields and toggles back to their start-up values."""
        self.set_ttn_text(DEFAULT_TTN)
        self.set_points_text(DEFAULT_POINT_COUNT)
        set_slider_value(self.step_slider, DEFAULT_STEP_SIZE)
        set_slider_value(self.delay_slider, DEFAULT_DELAY)
        self.set_color_swatch(DEFAULT_COLOR)
        self.circle_checkbox.setChecked(True)

    def apply_theme(self, palette):
        self.setStyleSheet(panel_stylesheet(palette))
        for btn in self._buttons:
            btn.setStyleSheet(button_stylesheet(btn.kind, palette))
        self.theme_btn.setText(
            "\U0001f319 Dark Mode" if palette is LIGHT else "☀ Light Mode"
        )
