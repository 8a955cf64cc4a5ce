from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen

from ..board import Mark

X_COLOR = QColor("#8acaff")
O_COLOR = QColor("#ff8a8a")
WIN_FILL_COLOR = QColor(255, 215, 0, 70)


class BoardWidget(QWidget):
    """
    custom widget to draw and click on an N x N board
    """
    cell_clicked = Signal(int, int)  # emits row, col on click

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session          # reference to game state
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_session(self, session):
        # new game replaces the whole session
        self.session = session
        self.update()

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        # square board centered in the widget
        w, h = self.width(), self.height()
        side = min(w, h)
        return side, (w - side) / 2, (h - side) / 2

    def paintEvent(self, event):
        """
        draw grid, X/O marks, and highlight the winning run
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            side, offset_x, offset_y = self._geometry()
            painter.fillRect(self.rect(), QColor("#333"))
            size = self.session.board_size
            cell_size = side / size
            # winning cells underneath everything else
            for r, c in self.session.result.cells:
                painter.fillRect(QRectF(offset_x + c*cell_size, offset_y + r*cell_size,
                                        cell_size, cell_size), WIN_FILL_COLOR)
            # grid lines
            painter.setPen(QPen(QColor("#555"), 2))
            for i in range(1, size):
                x = offset_x + i*cell_size
                painter.drawLine(int(x), int(offset_y), int(x), int(offset_y+side))
                y = offset_y + i*cell_size
                painter.drawLine(int(offset_x), int(y), int(offset_x+side), int(y))
            # marks, thinner lines on bigger boards
            width = max(2, int(12 / size) + 1)
            for r in range(size):
                for c in range(size):
                    mark = self.session.board[r, c]
                    if mark is Mark.EMPTY:
                        continue
                    cx = offset_x + c*cell_size + cell_size/2
                    cy = offset_y + r*cell_size + cell_size/2
                    rad = cell_size/2 * 0.7
                    if mark is Mark.X:
                        painter.setPen(QPen(X_COLOR, width))
                        # two crossing lines
                        painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                        painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                    else:
                        painter.setPen(QPen(O_COLOR, width))
                        painter.drawEllipse(QPointF(cx, cy), rad, rad)
        finally:
            painter.end()

    def cell_at(self, x, y):
        """
        map widget coords to (row, col), or None outside the grid
        """
        side, ox, oy = self._geometry()
        if not (ox <= x < ox+side and oy <= y < oy+side):
            return None
        size = self.session.board_size
        cell = side / size
        if cell <= 0:
            return None
        col = int((x-ox)//cell); row = int((y-oy)//cell)
        # clamp to valid range
        return max(0, min(row, size-1)), max(0, min(col, size-1))

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self._accept_clicks or not self.session.active:
            return
        pos = event.position()
        cell = self.cell_at(pos.x(), pos.y())
        if cell is not None:
            self.cell_clicked.emit(*cell)  # notify main window
