"""Times-table view: wires the AnimationController to canvas and controls.

The QTimer fires at FPS and forwards each timeout to
``AnimationController.tick``; the controller decides whether the delay
has elapsed. All commands go through the controller and the returned
RenderFrame is pushed to the canvas and labels.
"""

import logging

from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QWidget, QHBoxLayout, QSplitter, QScrollArea, QColorDialog, QMessageBox,
)

from animation import (
    AnimationController, DEFAULT_COLOR, DEFAULT_POINT_COUNT, DEFAULT_RADIUS,
    DEFAULT_TTN,
)
from geometry import InvalidInputError
from patterns import preset_for_digit
from text_input import parse_decimal, parse_point_count
from timestable.canvas import TimesTableCanvas
from timestable.controls import TimesTableControls
from ui_common import LIGHT, toggle_theme

logger = logging.getLogger(__name__)

# TTN change per arrow key press
FINE_NUDGE = 0.1
COARSE_NUDGE = 1.0


class TimesTableView(QWidget):
    """Complete visualization: canvas + controls + animation wiring."""

    FPS = 60

    # Emitted after every redraw with the frame that was drawn
    frame_changed = pyqtSignal(object)
    # Emitted with the AnimationState value after playback commands
    state_changed = pyqtSignal(str)
    # Emitted when the user asks to save the canvas
    save_requested = pyqtSignal()

    def __init__(self, ttn=DEFAULT_TTN, point_count=DEFAULT_POINT_COUNT, parent=None):
        super().__init__(parent)

        self.controller = AnimationController(
            radius=DEFAULT_RADIUS,
            point_count=point_count,
            ttn=ttn,
        )
        self.theme = LIGHT

        self.canvas = TimesTableCanvas(DEFAULT_RADIUS)
        self.controls = TimesTableControls()
        self.controls.set_ttn_text(ttn)
        self.controls.set_points_text(self.controller.point_count)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        scroll.setWidget(self.controls)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(scroll)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(splitter)

        # Timer
        self.timer = QTimer()
        self.timer.setInterval(int(1000 / self.FPS))
        self.timer.timeout.connect(self._on_timer)

        # Wire signals
        c = self.controls
        c.play_btn.clicked.connect(self.play)
        c.pause_btn.clicked.connect(self.pause)
        c.stop_btn.clicked.connect(self.stop)
        c.reset_btn.clicked.connect(self.reset)
        c.jump_btn.clicked.connect(self._on_jump)
        c.ttn_edit.returnPressed.connect(self._on_jump)
        c.points_edit.returnPressed.connect(self._on_jump)
        c.step_slider.valueChanged.connect(self._on_speed_changed)
        c.delay_slider.valueChanged.connect(self._on_speed_changed)
        c.color_btn.clicked.connect(self._on_pick_color)
        c.circle_checkbox.toggled.connect(self.canvas.set_show_circle)
        c.theme_btn.clicked.connect(self.toggle_theme)
        c.save_btn.clicked.connect(self.save_requested.emit)
        for btn in c.preset_buttons:
            btn.clicked.connect(lambda _checked, p=btn.preset: self.select_preset(p))

        self._on_speed_changed()
        self._show(self.controller.recompute())

    # -- Rendering --

    def _show(self, frame, fade=True):
        self.canvas.set_frame(frame, fade)
        self.controls.show_frame(frame)
        self.frame_changed.emit(frame)

    def _update_status(self):
        state = self.controller.state.value
        self.controls.set_status(state)
        self.state_changed.emit(state)

    def _on_timer(self):
        try:
            frame = self.controller.tick()
        except InvalidInputError as exc:
            # TTN grew past what the point count can represent
            logger.warning("Animation halted: %s", exc)
            self.pause()
            return
        if frame is not None:
            self._show(frame, fade=False)

    # -- Playback commands --

    def play(self):
        self.controller.start()
        self.timer.start()
        self._update_status()

    def pause(self):
        self.controller.pause()
        self.timer.stop()
        self._update_status()

    def toggle_play(self):
        if self.controller.is_running:
            self.pause()
        else:
            self.play()

    def stop(self):
        self.controller.stop()
        self.timer.stop()
        self._update_status()

    def reset(self):
        """Stop and restore every control to its start-up value."""
        self.timer.stop()
        self.controls.restore_defaults()
        self.controller.set_color(DEFAULT_COLOR)
        self.controller.set_point_count(DEFAULT_POINT_COUNT)
        self._on_speed_changed()
        self._show(self.controller.reset(DEFAULT_TTN))
        self._update_status()
        logger.info("Visualization reset")

    # -- Jump / presets / nudges --

    def _on_jump(self):
        previous_count = self.controller.point_count
        try:
            ttn = parse_decimal(self.controls.get_ttn_text())
            point_count = parse_point_count(self.controls.get_points_text())
            self.controller.set_point_count(point_count)
            frame = self.controller.jump_to(ttn)
        except InvalidInputError as exc:
            self.controller.set_point_count(previous_count)
            logger.warning("Jump rejected: %s", exc)
            QMessageBox.warning(
                self, "Invalid input",
                "Invalid number format for Times Table Number or Points",
            )
            return
        self._show(frame)

    def select_preset(self, preset):
        try:
            frame = self.controller.select_preset(preset)
        except InvalidInputError as exc:
            logger.warning("Preset %s rejected: %s", preset.name, exc)
            return
        self.controls.set_ttn_text(preset.ttn)
        self.controls.set_points_text(preset.point_count)
        self._show(frame)

    def nudge(self, delta):
        try:
            frame = self.controller.nudge(delta)
        except InvalidInputError as exc:
            logger.warning("Nudge rejected: %s", exc)
            return
        self.controls.set_ttn_text(frame.ttn)
        self._show(frame)

    # -- Settings --

    def _on_speed_changed(self, _val=None):
        self.controller.set_step_size(self.controls.get_step_size())
        self.controller.set_delay(self.controls.get_delay())

    def _on_pick_color(self):
        initial = QColor(*self.controller.color)
        color = QColorDialog.getColor(initial, self, "Line Color")
        if not color.isValid():
            return
        rgb = (color.red(), color.green(), color.blue())
        self.controller.set_color(rgb)
        self.controls.set_color_swatch(rgb)
        if not self.controller.is_running:
            self._show(self.controller.recompute())

    def toggle_circle(self):
        box = self.controls.circle_checkbox
        box.setChecked(not box.isChecked())

    def toggle_theme(self):
        self.theme = toggle_theme(self.theme)
        self.canvas.set_theme(self.theme)
        self.controls.apply_theme(self.theme)
        logger.debug("Theme switched to %s", self.theme.name)

    # -- Keyboard --

    def handle_key(self, key, text=""):
        """Run the shortcut bound to ``key``. Returns True when handled."""
        actions = {
            Qt.Key.Key_Space.value: self.toggle_play,
            Qt.Key.Key_R.value: self.reset,
            Qt.Key.Key_S.value: self.save_requested.emit,
            Qt.Key.Key_H.value: self.toggle_circle,
            Qt.Key.Key_D.value: self.toggle_theme,
            Qt.Key.Key_Up.value: lambda: self.nudge(FINE_NUDGE),
            Qt.Key.Key_Down.value: lambda: self.nudge(-FINE_NUDGE),
            Qt.Key.Key_Right.value: lambda: self.nudge(COARSE_NUDGE),
            Qt.Key.Key_Left.value: lambda: self.nudge(-COARSE_NUDGE),
        }
        action = actions.get(getattr(key, "value", key))
        if action is not None:
            action()
            return True

        if text.isdigit() and len(text) == 1:
            preset = preset_for_digit(int(text))
            if preset is not None:
                self.select_preset(preset)
                return True
        return False

    def keyPressEvent(self, event):
        if self.handle_key(event.key(), event.text()):
            event.accept()
        else:
            super().keyPressEvent(event)
