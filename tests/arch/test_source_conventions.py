# tests/arch/test_source_conventions.py
from __future__ import annotations

import ast
import importlib
import inspect
import re
from collections.abc import Iterable
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_ROOT = PROJECT_ROOT / "src" / "salesledger_api"
TESTS_ROOT = PROJECT_ROOT / "tests"

GOOGLE_STYLE_RE = re.compile(r"\b(Args|Returns|Raises):", re.MULTILINE)

DOMAIN_FORBIDDEN_PREFIXES = (
    "fastapi",
    "sqlalchemy",
    "httpx",
    "starlette",
    "pydantic",
    "prometheus_client",
    "logging",
    "salesledger_api.adapters",
    "salesledger_api.application",
    "salesledger_api.infrastructure",
)


def _py_files(root: Path) -> Iterable[Path]:
    return sorted(p for p in root.rglob("*.py") if p.name != "__init__.py")


def _module_name(path: Path) -> str:
    return "salesledger_api." + ".".join(path.relative_to(SRC_ROOT).with_suffix("").parts)


def _imported_modules(path: Path) -> Iterable[str]:
    for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"))):
        if isinstance(node, ast.Import):
            yield from (alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            yield node.module


def test_domain_has_no_framework_or_logging_imports() -> None:
    violations = [
        f"{_module_name(path)} imports {name}"
        for path in _py_files(SRC_ROOT / "domain")
        for name in _imported_modules(path)
        if name.startswith(DOMAIN_FORBIDDEN_PREFIXES)
    ]
    if violations:
        raise AssertionError("Forbidden imports in domain:\n" + "\n".join(violations))


def test_routers_do_not_import_domain_entities() -> None:
    violations = [
        _module_name(path)
        for path in _py_files(SRC_ROOT / "adapters" / "routers")
        for name in _imported_modules(path)
        if name.startswith("salesledger_api.domain.entities")
    ]
    if violations:
        raise AssertionError(
            "Routers must expose HTTP schemas, not domain entities:\n" + "\n".join(violations)
        )


def test_use_cases_have_execute_tests_and_docstrings() -> None:
    violations: list[str] = []

    for path in _py_files(SRC_ROOT / "application" / "use_cases"):
        module_name = _module_name(path)
        module = importlib.import_module(module_name)

        expected_test = TESTS_ROOT / "unit" / "application" / "use_cases" / f"test_{path.stem}.py"
        if not expected_test.exists():
            violations.append(f"{module_name}: expected unit test file at {expected_test}")

        for name, obj in inspect.getmembers(module, inspect.isclass):
            if obj.__module__ != module.__name__ or not name.endswith("UseCase"):
                continue
            if not GOOGLE_STYLE_RE.search(inspect.getdoc(obj) or ""):
                violations.append(f"{module_name}.{name} is missing Args/Returns/Raises")
            if not callable(getattr(obj, "execute", None)):
                violations.append(f"{module_name}.{name} must define execute(...)")

    if violations:
        raise AssertionError("Use case convention violations:\n" + "\n".join(sorted(violations)))


def _calls_stdlib_get_logger(path: Path) -> bool:
    for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"))):
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Attribute)
            and node.func.attr == "getLogger"
            and isinstance(node.func.value, ast.Name)
            and node.func.value.id == "logging"
        ):
            return True
    return False


def test_adapters_and_infrastructure_use_json_logger() -> None:
    logger_module = SRC_ROOT / "infrastructure" / "logging" / "logger.py"
    violations = [
        _module_name(path)
        for layer in ("adapters", "infrastructure")
        for path in _py_files(SRC_ROOT / layer)
        if path != logger_module and _calls_stdlib_get_logger(path)
    ]
    if violations:
        raise AssertionError(
            "Use get_json_logger instead of logging.getLogger:\n" + "\n".join(violations)
        )


def test_module_logger_is_separated_from_imports() -> None:
    violations: list[str] = []
    for path in _py_files(SRC_ROOT):
        body = ast.parse(path.read_text(encoding="utf-8")).body
        for prev, node in zip(body, body[1:], strict=False):
            if not isinstance(prev, (ast.Import, ast.ImportFrom)):
                continue
            if not isinstance(node, ast.Assign):
                continue
            names = {t.id for t in node.targets if isinstance(t, ast.Name)}
            if names & {"logger", "_LOGGER"} and node.lineno - (prev.end_lineno or prev.lineno) < 2:
                violations.append(f"{_module_name(path)}:{node.lineno}")
    if violations:
        raise AssertionError(
            "Leave a blank line between imports and the module logger:\n" + "\n".join(violations)
        )
