from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        if "dist" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            yield node.module or ""


def _violations(root: Path, forbidden: tuple[str, ...]) -> list[tuple[str, str]]:
    found = []
    for path in _python_files(root):
        for name in _imported_modules(path):
            if any(name == prefix or name.startswith(prefix + ".") for prefix in forbidden):
                found.append((str(path.relative_to(ROOT)), name))
    return found


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in _python_files(ROOT):
        lines = len(path.read_text(encoding="utf-8", errors="ignore").splitlines())
        if lines > 1200:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 1200-line limit: {offenders}"


def test_core_layer_does_not_import_ui_or_infra():
    violations = _violations(ROOT / "core", ("ui", "infra"))
    assert not violations, f"Core layer imports outer layers: {violations}"


def test_scheduling_and_timeline_stay_qt_free():
    for package in ("scheduling", "timeline", "interaction", "baseline"):
        violations = _violations(ROOT / "core" / "services" / package, ("PySide6",))
        assert not violations, f"{package} imports Qt: {violations}"


def test_infra_does_not_import_ui():
    violations = _violations(ROOT / "infra", ("ui",))
    assert not violations, f"Infra layer imports UI layer: {violations}"
