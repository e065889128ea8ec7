"""Tests for package and import path retargeting."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from webcore_installer.exceptions import RewriteError
from webcore_installer.retarget import (
    retarget_packages,
    retarget_source,
    stage_retarget,
)

OLD_MODULE = "github.com/semanggilab/webcorego-template-mod"
NEW_MODULE = "github.com/acme/orders-mod-widgets"


class TestRetargetSource:
    """Test the per-file rewrite rules."""

    def test_package_line_only(self) -> None:
        """Test a lone package declaration is rewritten exactly."""
        assert retarget_source("package dummy", "dummy", "widgets", "", "") == "package widgets"

    def test_package_rule_is_anchored(self) -> None:
        """Test the package rule never fires inside an import path."""
        source = 'package main\n\nimport "x/dummy/y"\n'
        assert retarget_source(source, "dummy", "widgets", "", "") == source

    def test_package_rule_requires_exact_name(self) -> None:
        """Test packages that only start with the old name are kept."""
        source = "package dummyutil\n"
        assert retarget_source(source, "dummy", "widgets", "", "") == source

    def test_import_paths_replaced(self) -> None:
        """Test every occurrence of the old import path is replaced."""
        source = (
            "package handler\n\n"
            f'import "{OLD_MODULE}/service"\n'
            f'import "{OLD_MODULE}/model"\n'
        )
        result = retarget_source(source, "dummy", "widgets", OLD_MODULE, NEW_MODULE)
        assert result == (
            "package handler\n\n"
            f'import "{NEW_MODULE}/service"\n'
            f'import "{NEW_MODULE}/model"\n'
        )

    def test_import_rule_touches_quoted_paths_only_when_matching(self) -> None:
        """Test a quoted path containing the package name needs the import rule."""
        source = 'package dummy\n\nimport "x/dummy/y"\n'
        result = retarget_source(source, "dummy", "widgets", "x/dummy", "x/widgets")
        assert result == 'package widgets\n\nimport "x/widgets/y"\n'

    def test_module_name_constant(self) -> None:
        """Test the ModuleName constant follows the package in module files."""
        source = 'package dummy\n\nconst (\n\tModuleName = "dummy"\n)\n'
        result = retarget_source(source, "dummy", "app", "", "", is_module_file=True)
        assert result == 'package app\n\nconst (\n\tModuleName    = "app"\n)\n'

    def test_module_name_constant_ignored_elsewhere(self) -> None:
        """Test other files keep a ModuleName constant as is."""
        source = 'package dummy\n\nconst (\n\tModuleName = "dummy"\n)\n'
        result = retarget_source(source, "dummy", "app", "", "")
        assert '\tModuleName = "dummy"' in result


class TestRetargetPackages:
    """Test walking a module tree."""

    @pytest.fixture
    def module_dir(self) -> Path:
        """Create a small module tree."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir) / "dummy"
            (root / "handler").mkdir(parents=True)
            (root / "module.go").write_text(
                'package dummy\n\nconst (\n\tModuleName    = "dummy"\n)\n',
                encoding="utf-8",
            )
            (root / "handler" / "handler.go").write_text(
                f'package handler\n\nimport "{OLD_MODULE}/service"\n',
                encoding="utf-8",
            )
            (root / "README.md").write_text(f"package dummy\n{OLD_MODULE}\n", encoding="utf-8")
            yield root

    def test_rewrites_go_files(self, module_dir: Path) -> None:
        """Test package and import rewrites across the tree."""
        changed = retarget_packages(module_dir, "dummy", "widgets", OLD_MODULE, NEW_MODULE)

        assert sorted(p.name for p in changed) == ["handler.go", "module.go"]
        module_go = (module_dir / "module.go").read_text(encoding="utf-8")
        assert module_go.startswith("package widgets\n")
        assert '\tModuleName    = "widgets"' in module_go
        handler_go = (module_dir / "handler" / "handler.go").read_text(encoding="utf-8")
        assert f'import "{NEW_MODULE}/service"' in handler_go

    def test_non_source_files_untouched(self, module_dir: Path) -> None:
        """Test files without the Go suffix are skipped."""
        retarget_packages(module_dir, "dummy", "widgets", OLD_MODULE, NEW_MODULE)
        readme = (module_dir / "README.md").read_text(encoding="utf-8")
        assert readme == f"package dummy\n{OLD_MODULE}\n"

    def test_missing_root_raises(self) -> None:
        """Test a missing module directory raises RewriteError."""
        with pytest.raises(RewriteError, match="Module directory not found"):
            retarget_packages(Path("/nonexistent/dummy"), "dummy", "app", "", "")

    def test_staging_does_not_write(self, module_dir: Path) -> None:
        """Test staged edits leave files untouched until committed."""
        edits = stage_retarget(module_dir, "dummy", "widgets", OLD_MODULE, NEW_MODULE)

        assert len(edits) == 2
        assert all(edit.changed for edit in edits)
        module_go = (module_dir / "module.go").read_text(encoding="utf-8")
        assert module_go.startswith("package dummy\n")

    def test_failed_write_restores_tree(self, module_dir: Path) -> None:
        """Test a write failure rolls back files already rewritten."""
        originals = {
            path: path.read_text(encoding="utf-8") for path in module_dir.rglob("*.go")
        }

        from webcore_installer import retarget

        real_write = retarget.atomic_write_text
        calls = {"count": 0}

        def flaky_write(path: Path, content: str) -> None:
            calls["count"] += 1
            if calls["count"] == 2:
                raise RewriteError(f"Failed to write {path}: disk full")
            real_write(path, content)

        with patch.object(retarget, "atomic_write_text", side_effect=flaky_write):
            with pytest.raises(RewriteError, match="1 file\\(s\\) restored"):
                retarget_packages(module_dir, "dummy", "widgets", OLD_MODULE, NEW_MODULE)

        for path, content in originals.items():
            assert path.read_text(encoding="utf-8") == content

    def test_failed_restore_is_reported(self, module_dir: Path) -> None:
        """Test files that cannot be restored are listed instead of hiding the failure."""
        from webcore_installer import retarget

        real_write = retarget.atomic_write_text
        calls = {"count": 0}

        def failing_write(path: Path, content: str) -> None:
            calls["count"] += 1
            if calls["count"] >= 2:
                raise RewriteError(f"Failed to write {path}: read-only file system")
            real_write(path, content)

        with patch.object(retarget, "atomic_write_text", side_effect=failing_write):
            with pytest.raises(RewriteError, match="1 could not be restored") as exc_info:
                retarget_packages(module_dir, "dummy", "widgets", OLD_MODULE, NEW_MODULE)

        unrestored = exc_info.value.details["unrestored"]
        assert len(unrestored) == 1
        assert "read-only file system" in next(iter(unrestored.values()))
        assert isinstance(exc_info.value.__cause__, RewriteError)
