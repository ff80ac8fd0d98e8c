from __future__ import annotations
from typing import Iterable, Iterator
import logging
from PyQt6.QtCore import QObject, pyqtSignal
from figures import Figure, FigureRecord

logger = logging.getLogger(__name__)


class FigureStorage(QObject):
    """
    Упорядоченный список фигур: порядок создания = порядок отрисовки = приоритет hit-test.
    Снаружи на фигуры ссылаются по handle — индексу в списке.
    """
    canvas_updated = pyqtSignal()

    def __init__(self, figures: Iterable[Figure] | None = None):
        super().__init__()
        self.__figures: list[Figure] = list(figures) if figures else []

    def append(self, figure: Figure) -> int:
        self.__figures.append(figure)
        handle = len(self.__figures) - 1
        logger.debug("append %r as #%d", figure, handle)
        self.canvas_updated.emit()
        return handle

    def get(self, handle: int) -> Figure:
        return self.__figures[handle]

    def all(self) -> Iterator[Figure]:
        # генератор: каждый вызов начинает обход заново
        yield from self.__figures

    def __iter__(self):
        return self.all()

    def __len__(self):
        return len(self.__figures)

    def hit_test(self, x: int, y: int) -> int | None:
        # первая созданная фигура побеждает, даже если поверх нарисована другая
        for handle, fig in enumerate(self.__figures):
            if fig.contains(x, y):
                return handle
        return None

    def replace(self, figures: Iterable[Figure]):
        self.__figures = list(figures)
        logger.debug("storage replaced, %d figures", len(self.__figures))
        self.canvas_updated.emit()

    def serialize(self) -> list[FigureRecord]:
        return [fig.to_record() for fig in self.__figures]

    @staticmethod
    def deserialize(records: Iterable[FigureRecord]) -> list[Figure]:
        return [Figure.from_record(r) for r in records]
