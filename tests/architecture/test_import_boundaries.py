"""
Import-boundary enforcement.

1. Domain purity       -- fiscal_kernel/domain/** may not import the ORM,
                          the database layer, models, selectors or services.
2. Domain no-impure    -- fiscal_kernel/domain/** may not read the wall
                          clock or the environment (clock.py excepted).
3. Kernel direction    -- fiscal_kernel/** may not import fiscal_config or
                          the CLI.
4. Config centralisation -- only fiscal_config/__init__.py may import the
                          loader; callers use the package surface.

All scanning is done via AST -- these tests are read-only.
"""

import ast
import glob
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _python_files(root: str) -> list[str]:
    """Return all .py files under *root*, sorted for deterministic order."""
    return sorted(glob.glob(f"{ROOT / root}/**/*.py", recursive=True))


def _extract_imports(filepath: str) -> list[tuple[int, str]]:
    """Return (line_number, module_string) for every import in *filepath*."""
    tree = ast.parse(Path(filepath).read_text(), filename=filepath)

    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


def _matches_any(module: str, prefixes: tuple[str, ...]) -> bool:
    """True if *module* equals or is a child of any prefix."""
    for prefix in prefixes:
        if module == prefix or module.startswith(f"{prefix}."):
            return True
    return False


def _extract_attribute_calls(filepath: str) -> list[tuple[int, str]]:
    """Return (line_number, 'receiver.attr') for two-level attribute references."""
    tree = ast.parse(Path(filepath).read_text(), filename=filepath)

    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Attribute) and isinstance(node.value, ast.Name):
            results.append((node.lineno, f"{node.value.id}.{node.attr}"))
    return results


def _violations(files: list[str], forbidden: tuple[str, ...]) -> list[str]:
    found = []
    for filepath in files:
        for lineno, module in _extract_imports(filepath):
            if _matches_any(module, forbidden):
                found.append(f"{Path(filepath).relative_to(ROOT)}:{lineno} imports {module}")
    return found


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestDomainPurity:

    FORBIDDEN = (
        "sqlalchemy",
        "fiscal_kernel.db",
        "fiscal_kernel.models",
        "fiscal_kernel.selectors",
        "fiscal_kernel.services",
        "fiscal_config",
        "yaml",
    )

    IMPURE_CALLS = {
        "datetime.now",
        "datetime.utcnow",
        "date.today",
        "time.time",
        "os.environ",
        "os.getenv",
    }

    def test_domain_files_exist(self):
        assert _python_files("fiscal_kernel/domain")

    def test_domain_imports_nothing_impure(self):
        assert _violations(_python_files("fiscal_kernel/domain"), self.FORBIDDEN) == []

    def test_domain_does_not_read_clock_or_environment(self):
        found = []
        for filepath in _python_files("fiscal_kernel/domain"):
            if Path(filepath).name == "clock.py":
                continue
            for lineno, call in _extract_attribute_calls(filepath):
                if call in self.IMPURE_CALLS:
                    found.append(f"{Path(filepath).relative_to(ROOT)}:{lineno} uses {call}")
        assert found == []


class TestKernelDirection:

    def test_kernel_does_not_import_config_or_cli(self):
        files = _python_files("fiscal_kernel")
        assert _violations(files, ("fiscal_config", "scripts")) == []

    def test_config_does_not_import_services_or_cli(self):
        files = _python_files("fiscal_config")
        forbidden = ("fiscal_kernel.services", "fiscal_kernel.db", "sqlalchemy", "scripts")
        assert _violations(files, forbidden) == []


class TestConfigCentralisation:

    def test_loader_only_imported_by_package_init(self):
        files = [
            f
            for root in ("fiscal_kernel", "fiscal_config", "scripts")
            for f in _python_files(root)
            if Path(f) != ROOT / "fiscal_config" / "__init__.py"
        ]
        assert _violations(files, ("fiscal_config.loader",)) == []
