from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from tests._fixtures.proyectos import PROYECTO_A, PROYECTO_B, escribir_archivos


@pytest.fixture(autouse=True)
def home_aislado(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """La configuración de usuario nunca toca el HOME real."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def construir_proyecto(tmp_path: Path) -> Callable[[str, Dict[str, Any]], Path]:
    def _construir(nombre: str, archivos: Dict[str, Any]) -> Path:
        raiz = tmp_path / nombre
        raiz.mkdir()
        return escribir_archivos(raiz, archivos)

    return _construir


@pytest.fixture
def proyectos(construir_proyecto) -> tuple[Path, Path]:
    """(A, B) con un conflicto de nombre en Header."""
    return construir_proyecto("A", PROYECTO_A), construir_proyecto("B", PROYECTO_B)
