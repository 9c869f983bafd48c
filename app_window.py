"""App window: hosts the times-table view, status bar and image export."""

import logging

from PyQt6.QtWidgets import (
    QMainWindow, QStatusBar, QLabel, QFileDialog, QMessageBox,
)

from animation import DEFAULT_POINT_COUNT, DEFAULT_TTN
from timestable.view import TimesTableView

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_NAME = "timestable_visualization.png"


class AppWindow(QMainWindow):
    """Top-level window for the modulo times-table visualization."""

    def __init__(self, ttn=DEFAULT_TTN, point_count=DEFAULT_POINT_COUNT):
        super().__init__()
        self.setWindowTitle("Modulo Times Table Visualization")
        self.resize(1400, 900)

        self.view = TimesTableView(ttn=ttn, point_count=point_count)
        self.setCentralWidget(self.view)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        self._state_label = QLabel()
        self._ttn_label = QLabel()
        self._pattern_label = QLabel()
        self._status_bar.addWidget(self._state_label)
        self._status_bar.addWidget(self._ttn_label)
        self._status_bar.addWidget(self._pattern_label)

        self.view.frame_changed.connect(self._on_frame_changed)
        self.view.state_changed.connect(self._on_state_changed)
        self.view.save_requested.connect(self.save_image)

        self._on_frame_changed(self.view.controller.recompute())
        self._on_state_changed(self.view.controller.state.value)
        self.view.canvas.setFocus()

    def _on_frame_changed(self, frame):
        self._ttn_label.setText(f"  TTN = {frame.ttn:.4f}  ")
        self._pattern_label.setText(f"  {frame.pattern_name}  ({frame.formula})  ")

    def _on_state_changed(self, state):
        self._state_label.setText(f"  {state.capitalize()}  ")

    def keyPressEvent(self, event):
        if self.view.handle_key(event.key(), event.text()):
            event.accept()
        else:
            super().keyPressEvent(event)

    def save_image(self):
        """Ask for a path and write the canvas as a PNG."""
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Visualization", DEFAULT_IMAGE_NAME, "PNG Image (*.png)",
        )
        if not path:
            return
        if not path.lower().endswith(".png"):
            path += ".png"

        pixmap = self.view.canvas.grab()
        if pixmap.save(path, "PNG"):
            logger.info("Saved visualization to %s", path)
            QMessageBox.information(
                self, "Success", f"Image saved successfully to: {path}",
            )
        else:
            logger.error("Failed to save visualization to %s", path)
            QMessageBox.critical(self, "Error", f"Failed to save image: {path}")
