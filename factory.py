"""
Создание фигур по имени вида и сохранение/загрузка списка фигур.

Формат файла — JSON Lines: одна запись на строку, конец файла = конец списка.
"""
import json
import logging
from pathlib import Path
from figures import Figure, FigureRecord, ShapeKind

logger = logging.getLogger(__name__)

_registry: dict[str, ShapeKind] = {kind.value: kind for kind in ShapeKind}


class DecodeError(ValueError):
    """Повреждённая или обрезанная запись — файл не загружается целиком."""

    def __init__(self, line: int, message: str):
        super().__init__(f"line {line}: {message}")
        self.line = line
        self.message = message


def kind_of(name: str) -> ShapeKind:
    kind = _registry.get(name)
    if kind is None:
        raise ValueError(f"Unknown figure kind: {name}")
    return kind


def create(kind: ShapeKind | str, x: int, y: int) -> Figure:
    if not isinstance(kind, ShapeKind):
        kind = kind_of(kind)
    return Figure(kind, x, y)


def list_kinds() -> list[str]:
    return list(_registry.keys())


def to_json_lines(records: list[FigureRecord]) -> str:
    return "".join(json.dumps(r.to_dict(), ensure_ascii=False) + "\n" for r in records)


def from_json_lines(text: str) -> list[FigureRecord]:
    records = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise DecodeError(lineno, f"invalid JSON ({e.msg})") from e
        try:
            records.append(FigureRecord.from_dict(data))
        except ValueError as e:
            raise DecodeError(lineno, str(e)) from e
    return records


def save(records: list[FigureRecord], path: str) -> None:
    data = to_json_lines(records)

    tmp = Path(str(path) + ".tmp")
    if tmp.parent and not tmp.parent.exists():
        tmp.parent.mkdir(parents=True, exist_ok=True)
    tmp.write_text(data, encoding="utf-8")
    tmp.replace(Path(path))
    logger.info("saved %d figures to %s", len(records), path)


def load(path: str) -> list[FigureRecord]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(1, "file is not UTF-8 text") from e
    records = from_json_lines(text)
    logger.info("loaded %d figures from %s", len(records), path)
    return records
