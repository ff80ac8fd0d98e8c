"""
Pytest configuration and shared fixtures for figure editor tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from PyQt6.QtCore import QCoreApplication

from figures import Figure, ShapeKind
from storage import FigureStorage
from controller import InteractionController


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """One QCoreApplication for QObject signals and QSettings."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


# ============== Temporary Directory Fixtures ==============

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="figure_editor_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


# ============== Model Fixtures ==============

def make_figure(kind: ShapeKind, x: int, y: int, w: int, h: int) -> Figure:
    """Create a figure by dragging from (x, y) to (x + w, y + h)."""
    fig = Figure(kind, x, y)
    fig.resize(x + w, y + h, False)
    return fig


@pytest.fixture
def empty_storage() -> FigureStorage:
    return FigureStorage()


@pytest.fixture
def overlapping_storage() -> FigureStorage:
    """A at (10,10,40,30) created first, B at (30,20,40,30) created second."""
    storage = FigureStorage()
    storage.append(make_figure(ShapeKind.RECTANGLE, 10, 10, 40, 30))
    storage.append(make_figure(ShapeKind.RECTANGLE, 30, 20, 40, 30))
    return storage


@pytest.fixture
def controller(empty_storage) -> InteractionController:
    return InteractionController(empty_storage)


@pytest.fixture(name="make_figure")
def make_figure_fixture():
    return make_figure
