"""Times-table canvas: QPainter rendering of the chord set.

Chords arrive in circle coordinates centred on the origin and are drawn
with screen y growing downward, so point indices advance clockwise.
"""

from PyQt6.QtCore import Qt, QLineF, QPointF, QVariantAnimation
from PyQt6.QtGui import QPainter, QPen, QColor
from PyQt6.QtWidgets import QWidget

from geometry import chord_segments
from ui_common import LIGHT


class TimesTableCanvas(QWidget):
    """Custom widget that draws the latest RenderFrame."""

    # Fraction of the shorter widget side used by the circle's radius
    FILL_FRACTION = 0.45
    LINE_WIDTH = 1.0
    CIRCLE_WIDTH = 2.0
    # Chords of a newly set frame fade in from transparent over this many ms
    FADE_MS = 200

    def __init__(self, radius, parent=None):
        super().__init__(parent)
        self.radius = radius
        self.frame = None
        self.palette_colors = LIGHT
        self.show_circle = True
        self.setMinimumSize(400, 400)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self.chord_alpha = 255
        self._fade = QVariantAnimation(self)
        self._fade.setStartValue(0)
        self._fade.setEndValue(255)
        self._fade.setDuration(self.FADE_MS)
        self._fade.valueChanged.connect(self._on_fade_step)

    def set_frame(self, frame, fade=True):
        """Show ``frame``. With ``fade`` the chords ramp up to full opacity."""
        self.frame = frame
        self._fade.stop()
        if fade:
            self.chord_alpha = 0
            self._fade.start()
        else:
            self.chord_alpha = 255
        self.update()

    def _on_fade_step(self, value):
        self.chord_alpha = int(value)
        self.update()

    def set_theme(self, palette):
        self.palette_colors = palette
        self.update()

    def set_show_circle(self, show):
        self.show_circle = show
        self.update()

    def _transform(self):
        """Return (cx, cy, scale) mapping circle coords to pixels."""
        w, h = self.width(), self.height()
        scale = min(w, h) * self.FILL_FRACTION / max(self.radius, 1e-9)
        return w / 2, h / 2, scale

    def _chord_lines(self, cx, cy, scale):
        segs = chord_segments(self.frame.chords)
        segs[:, [0, 2]] = cx + segs[:, [0, 2]] * scale
        segs[:, [1, 3]] = cy + segs[:, [1, 3]] * scale
        # Fixed points of the mapping have nothing to draw
        keep = (segs[:, 0] != segs[:, 2]) | (segs[:, 1] != segs[:, 3])
        return [QLineF(*row) for row in segs[keep]]

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(self.palette_colors.background))

        cx, cy, scale = self._transform()

        if self.frame is not None and self.frame.chords:
            color = QColor(*self.frame.chords[0].color)
            color.setAlpha(self.chord_alpha)
            pen = QPen(color)
            pen.setWidthF(self.LINE_WIDTH)
            painter.setPen(pen)
            painter.drawLines(self._chord_lines(cx, cy, scale))

        if self.show_circle:
            circle_pen = QPen(QColor(self.palette_colors.circle))
            circle_pen.setWidthF(self.CIRCLE_WIDTH)
            painter.setPen(circle_pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            r_px = self.radius * scale
            painter.drawEllipse(QPointF(cx, cy), r_px, r_px)

        painter.end()
