from PyQt6.QtCore import QSettings, QRect
from PyQt6.QtGui import QColor


class Defaults:
    ORGANIZATION = 'figure-editor'
    APPLICATION = 'Figure Editor'
    FIGURE_COLOR = QColor(0, 0, 0)
    PICKER_COLOR = QColor(255, 0, 0)
    # Qt: 120 единиц angleDelta на один щелчок колеса
    WHEEL_STEP = 120


class WindowSettings:
    """Положение и размер главного окна между запусками."""

    KEYS = ('left', 'top', 'width', 'height')

    def __init__(self, qsettings: QSettings | None = None):
        self._qs = qsettings if qsettings is not None else QSettings(Defaults.ORGANIZATION,
                                                                      Defaults.APPLICATION)

    def load(self, screen: QRect) -> QRect:
        # по умолчанию — половина экрана в левом верхнем углу
        fallback = {
            'left': 0,
            'top': 0,
            'width': screen.width() // 2,
            'height': screen.height() // 2,
        }
        values = {}
        for key in self.KEYS:
            raw = self._qs.value(f"window/{key}", fallback[key])
            try:
                values[key] = int(raw)
            except (TypeError, ValueError):
                values[key] = fallback[key]
        return QRect(values['left'], values['top'], values['width'], values['height'])

    def save(self, rect: QRect):
        self._qs.setValue("window/left", rect.x())
        self._qs.setValue("window/top", rect.y())
        self._qs.setValue("window/width", rect.width())
        self._qs.setValue("window/height", rect.height())
        self._qs.sync()
