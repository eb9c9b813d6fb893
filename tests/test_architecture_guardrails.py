from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _line_count(path: Path) -> int:
    return len(path.read_text(encoding="utf-8", errors="ignore").splitlines())


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        # Keep architecture checks focused on source/test code, not packaged artifacts.
        if "dist" in path.parts or "build" in path.parts:
            continue
        yield path


def _imported_modules(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    names: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0:
            names.append(node.module or "")
    return names


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in _python_files(ROOT):
        lines = _line_count(path)
        if lines > 600:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 600-line limit: {offenders}"


def test_core_layer_does_not_import_infra_layer():
    violations: list[tuple[str, str]] = []
    for path in _python_files(ROOT / "core"):
        for name in _imported_modules(path):
            if name == "infra" or name.startswith("infra."):
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Core layer imports infra layer: {violations}"


def test_scheduling_and_dependency_rules_stay_persistence_free():
    violations: list[tuple[str, str]] = []
    for package in ("scheduling", "dependency"):
        for path in _python_files(ROOT / "core" / "services" / package):
            for name in _imported_modules(path):
                if name.split(".")[0] in {"sqlalchemy", "matplotlib", "openpyxl"}:
                    violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Pure rule modules import a backend: {violations}"


def test_task_service_is_mixin_composed():
    service_path = ROOT / "core" / "services" / "task" / "service.py"
    text = service_path.read_text(encoding="utf-8", errors="ignore")

    assert "from core.services.task.lifecycle import" in text
    assert "from core.services.task.dependency import" in text
    assert "def add_dependency" not in text
    assert "def create_task" not in text
