"""Tests to verify hexagonal architecture structure.

Import rules:
- domain/ imports nothing from the other appeal_tracker packages
- application/ never imports bootstrap/
- infrastructure/ never imports bootstrap/
"""

import ast
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).parent.parent.parent / "appeal_tracker"


def _imported_modules(py_file: Path) -> list[tuple[int, str]]:
    tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    modules: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            modules.append((node.lineno, node.module))
        elif isinstance(node, ast.Import):
            modules.extend((node.lineno, alias.name) for alias in node.names)
    return modules


def _violations(layer: str, forbidden: tuple[str, ...]) -> list[str]:
    found = []
    for py_file in (PACKAGE_ROOT / layer).rglob("*.py"):
        for lineno, module in _imported_modules(py_file):
            if module.startswith(forbidden):
                found.append(f"{py_file.relative_to(PACKAGE_ROOT)}:{lineno}: {module}")
    return found


@pytest.mark.parametrize(
    "layer", ["domain", "application", "infrastructure", "config", "bootstrap"]
)
def test_layer_packages_exist(layer: str) -> None:
    assert (PACKAGE_ROOT / layer / "__init__.py").is_file(), f"Missing {layer}/__init__.py"


def test_domain_is_pure() -> None:
    forbidden = tuple(
        f"appeal_tracker.{layer}"
        for layer in ("application", "infrastructure", "config", "bootstrap")
    )
    assert _violations("domain", forbidden) == []


def test_domain_has_no_third_party_imports() -> None:
    assert _violations("domain", ("structlog", "pydantic")) == []


@pytest.mark.parametrize("layer", ["application", "infrastructure"])
def test_inner_layers_do_not_import_bootstrap(layer: str) -> None:
    assert _violations(layer, ("appeal_tracker.bootstrap",)) == []
