"""Constructores de proyectos frontend de prueba."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Dict, Optional

from proymigra.config import CATEGORIAS


def escribir_archivos(raiz: Path, archivos: Dict[str, Any]) -> Path:
    """dict -> JSON, bytes -> binario, str -> texto con dedent."""
    for ruta, contenido in archivos.items():
        destino = raiz / ruta
        destino.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contenido, (dict, list)):
            destino.write_text(json.dumps(contenido, indent=2), encoding="utf-8")
        elif isinstance(contenido, bytes):
            destino.write_bytes(contenido)
        else:
            destino.write_text(textwrap.dedent(contenido).lstrip("\n"), encoding="utf-8")
    return raiz


def analisis_vacio(raiz: str = "/proyecto", framework: Optional[str] = "react",
                   aliases: Optional[Dict[str, list]] = None, **extra) -> Dict[str, Any]:
    analisis = {
        "root_path": raiz,
        "framework": framework,
        "files": [],
        "categorized_files": {c: [] for c in CATEGORIAS},
        "component_map": {},
        "dependency_graph": {},
        "architectural_patterns": {},
        "semantic_context": {},
        "style_info": {},
        "aliases": aliases or {},
        "package_json": {},
        "aesthetic_profile": "auto",
    }
    analisis.update(extra)
    return analisis


PROYECTO_A = {
    "package.json": {"name": "app-a", "dependencies": {"react": "^18.2.0", "react-dom": "^18.2.0"}},
    "tsconfig.json": {"compilerOptions": {"baseUrl": ".", "paths": {"@/*": ["src/*"]}}},
    "src/components/Header.jsx": """
        export default function Header() {
          return <header className="a">A</header>;
        }
        """,
    "src/styles/main.css": """
        .app { color: #333; font-family: "Inter", sans-serif; font-size: 16px; }
        """,
}

PROYECTO_B = {
    "package.json": {
        "name": "app-b",
        "dependencies": {"react": "^18.2.0", "react-redux": "^9.0.0", "clsx": "^2.0.0"},
    },
    "src/components/Header.jsx": """
        export default function Header() {
          return <header className="b">B</header>;
        }
        """,
    "src/components/Layout.jsx": """
        import React from 'react';
        import Header from './Header';

        export default function Layout({ children }) {
          return (
            <main>
              <Header />
              {children}
            </main>
          );
        }
        """,
    "src/pages/Home.jsx": """
        import { useSelector } from 'react-redux';
        import Layout from '../components/Layout';

        export default function Home() {
          const user = useSelector((s) => s.user);
          return <Layout>{user}</Layout>;
        }
        """,
    "src/utils/format.js": """
        export const formatear = (n) => n.toFixed(2);
        """,
    "src/styles/theme.css": """
        .theme { color: #333; background-color: #ff0000; }
        """,
    "src/assets/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00",
}
