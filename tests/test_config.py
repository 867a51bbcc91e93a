"""Unit tests for ProjectContext (scaffoldkit.config).

Tests cover:
- Defaults and validation
- Derived values (verbose, project_root)
- with_project copies
- Dependency accumulation
- from_env
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from scaffoldkit.config import EnvironmentMode, ProjectContext, TemplateMode


class TestProjectContextDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        ctx = ProjectContext()
        assert ctx.active_project_name is None
        assert ctx.environment_mode is EnvironmentMode.NORMAL
        assert ctx.use_yarn is None
        assert ctx.dependencies == []
        assert ctx.dev_dependencies == []
        assert ctx.template_mode is TemplateMode.CLI
        assert ctx.template_dir is None

    @pytest.mark.unit
    def test_mode_from_string(self):
        ctx = ProjectContext(environment_mode="verbose")
        assert ctx.verbose is True

    @pytest.mark.unit
    def test_invalid_mode_rejected(self):
        with pytest.raises(ValidationError):
            ProjectContext(environment_mode="loud")

    @pytest.mark.unit
    def test_project_root(self):
        assert ProjectContext().project_root == Path(".")
        assert ProjectContext(active_project_name="app").project_root == Path("app")


class TestWithProject:
    @pytest.mark.unit
    def test_returns_copy(self):
        base = ProjectContext(environment_mode=EnvironmentMode.VERBOSE)
        scoped = base.with_project("app")

        assert scoped.active_project_name == "app"
        assert scoped.verbose is True
        assert base.active_project_name is None

    @pytest.mark.unit
    def test_empty_name_clears(self):
        assert ProjectContext(active_project_name="app").with_project("").active_project_name is None

    @pytest.mark.unit
    def test_dependency_lists_not_shared(self):
        base = ProjectContext()
        scoped = base.with_project("app")
        scoped.add_dependencies("react")
        assert base.dependencies == []


class TestAddDependencies:
    @pytest.mark.unit
    def test_string_is_split(self):
        ctx = ProjectContext()
        ctx.add_dependencies("react express")
        assert ctx.dependencies == ["react", "express"]

    @pytest.mark.unit
    def test_appends_in_order(self):
        ctx = ProjectContext()
        ctx.add_dependencies("react express")
        ctx.add_dependencies("vue")
        assert ctx.dependencies == ["react", "express", "vue"]

    @pytest.mark.unit
    def test_dev_dependencies(self):
        ctx = ProjectContext()
        ctx.add_dependencies(["jest", "enzyme"], dev=True)
        assert ctx.dev_dependencies == ["jest", "enzyme"]
        assert ctx.dependencies == []

    @pytest.mark.unit
    def test_duplicates_skipped(self):
        ctx = ProjectContext()
        ctx.add_dependencies("react react")
        ctx.add_dependencies(["react", ""])
        assert ctx.dependencies == ["react"]


class TestFromEnv:
    @pytest.mark.unit
    def test_empty_env(self):
        with patch.dict("os.environ", {}, clear=True):
            ctx = ProjectContext.from_env()
        assert ctx == ProjectContext()

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["development", "DEV", "verbose"])
    def test_verbose_values(self, value):
        with patch.dict("os.environ", {"SCAFFOLDKIT_ENV": value}, clear=True):
            assert ProjectContext.from_env().verbose is True

    @pytest.mark.unit
    def test_production_is_normal(self):
        with patch.dict("os.environ", {"SCAFFOLDKIT_ENV": "production"}, clear=True):
            assert ProjectContext.from_env().verbose is False

    @pytest.mark.unit
    def test_all_variables(self, tmp_path: Path):
        env = {
            "SCAFFOLDKIT_PROJECT": "my-app",
            "SCAFFOLDKIT_TEMPLATE_DIR": str(tmp_path),
            "SCAFFOLDKIT_TEMPLATE_MODE": "project",
        }
        with patch.dict("os.environ", env, clear=True):
            ctx = ProjectContext.from_env()

        assert ctx.active_project_name == "my-app"
        assert ctx.template_dir == tmp_path
        assert ctx.template_mode is TemplateMode.PROJECT

    @pytest.mark.unit
    def test_unknown_template_mode_falls_back_to_cli(self, capsys):
        with patch.dict("os.environ", {"SCAFFOLDKIT_TEMPLATE_MODE": "bogus"}, clear=True):
            ctx = ProjectContext.from_env()

        assert ctx.template_mode is TemplateMode.CLI
        assert "Unknown SCAFFOLDKIT_TEMPLATE_MODE 'bogus'" in capsys.readouterr().out

    @pytest.mark.unit
    def test_template_mode_case_insensitive(self):
        with patch.dict("os.environ", {"SCAFFOLDKIT_TEMPLATE_MODE": " Project "}, clear=True):
            assert ProjectContext.from_env().template_mode is TemplateMode.PROJECT
