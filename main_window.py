import logging
from PyQt6.QtGui import QAction, QGuiApplication
from PyQt6.QtCore import QRect
from PyQt6.QtWidgets import QMainWindow, QFileDialog, QMessageBox
from settings import WindowSettings
from storage import FigureStorage
from canvas_widget import Canvas
import factory

logger = logging.getLogger(__name__)

KIND_TITLES = {
    "circle": "Круг",
    "rectangle": "Прямоугольник",
    "triangle": "Треугольник",
}


class Main(QMainWindow):
    def __init__(self, window_settings: WindowSettings | None = None):
        super().__init__()
        self.setWindowTitle("Редактор фигур")

        # ---- Инициализация компонентов приложения ----
        self.window_settings = window_settings if window_settings else WindowSettings()
        self.storage = FigureStorage()
        self.canvas = Canvas(self.storage, parent=self)
        self.setCentralWidget(self.canvas)

        self._create_figures_menu()
        self._create_options_menu()
        self._create_info_menu()
        self._restore_geometry()

        # == старт отрисовки ==
        self.show()
        self.canvas.setFocus()

    # ---- Меню ----
    def _create_figures_menu(self):
        menu = self.menuBar().addMenu("Фигуры")
        for name in factory.list_kinds():
            action = QAction(KIND_TITLES.get(name, name), self)
            action.triggered.connect(lambda checked, n=name: self.canvas.choose_kind(factory.kind_of(n)))
            menu.addAction(action)

    def _create_options_menu(self):
        menu = self.menuBar().addMenu("Опции")
        save_action = QAction("Сохранить", self)
        save_action.triggered.connect(self._on_save)
        menu.addAction(save_action)
        load_action = QAction("Загрузить", self)
        load_action.triggered.connect(self._on_load)
        menu.addAction(load_action)

    def _create_info_menu(self):
        menu = self.menuBar().addMenu("Инфо")
        info_action = QAction("О программе", self)
        info_action.triggered.connect(lambda: QMessageBox.about(
            self, "О программе",
            "Редактор фигур\nПрограмма для рисования и редактирования геометрических фигур."))
        menu.addAction(info_action)
        help_action = QAction("Инструкция", self)
        help_action.triggered.connect(lambda: QMessageBox.information(
            self, "Инструкция",
            "Чтобы создать фигуру, выберите её в меню «Фигуры» и протяните мышью.\n"
            "Shift — правильная фигура.\n"
            "Клик по фигуре выделяет её, перетаскивание — перемещает.\n"
            "Колесо над выделенной фигурой — масштаб, правая кнопка — цвет."))
        menu.addAction(help_action)

    # --- диалоги сохранения/загрузки ---
    def _on_save(self):
        path, _ = QFileDialog.getSaveFileName(self, "Сохранить", filter="Figures (*.jsonl);;All Files (*)")
        if not path:
            return
        try:
            factory.save(self.storage.serialize(), path)
        except OSError as e:
            logger.exception("save to %s failed", path)
            QMessageBox.critical(self, "Ошибка", f"Не удалось сохранить: {e}")

    def _on_load(self):
        path, _ = QFileDialog.getOpenFileName(self, "Загрузить", filter="Figures (*.jsonl);;All Files (*)")
        if not path:
            return
        try:
            records = factory.load(path)
        except factory.DecodeError as e:
            logger.warning("load from %s failed: %s", path, e)
            QMessageBox.critical(self, "Ошибка", f"Файл повреждён: {e}")
            return
        except OSError as e:
            logger.exception("load from %s failed", path)
            QMessageBox.critical(self, "Ошибка", f"Не удалось загрузить: {e}")
            return
        # старое содержимое меняется только после успешного чтения всего файла
        self.canvas.reset()
        self.storage.replace(FigureStorage.deserialize(records))

    # --- положение окна ---
    def _restore_geometry(self):
        screen = QGuiApplication.primaryScreen()
        screen_rect = screen.availableGeometry() if screen else QRect(0, 0, 800, 600)
        self.setGeometry(self.window_settings.load(screen_rect))

    def closeEvent(self, event):
        self.window_settings.save(self.geometry())
        super().closeEvent(event)
