"""
CLI tests (typer CliRunner)
"""

import json

import pytest
from typer.testing import CliRunner

from podsync.cli import app
from podsync.graph.store import ProjectStore

runner = CliRunner()


@pytest.fixture
def document(tmp_path, make_sources):
    make_sources("A", "B")

    def _write(**sandbox_state):
        payload = {
            "manifest_path": "Podfile",
            "user_build_configurations": {"Debug": "debug", "Release": "release"},
            "sandbox": {"root": "Pods", **sandbox_state},
            "aggregates": [
                {
                    "name": "App",
                    "label": "Pods-App",
                    "platform": {"family": "ios", "deployment_target": "8.0"},
                    "pods": [
                        {"label": "Pods-A", "package_name": "A", "dependencies": ["B"]},
                        {"label": "Pods-B", "package_name": "B"},
                    ],
                }
            ],
        }
        path = tmp_path / "installation.json"
        path.write_text(json.dumps(payload))
        return path

    return _write


class TestReconcileCommand:
    def test_reconcile_writes_project(self, tmp_path, document):
        result = runner.invoke(app, ["reconcile", str(document())])

        assert result.exit_code == 0, result.output
        assert "Reconciled" in result.output
        graph = ProjectStore(tmp_path / "Pods" / "Pods.project.json").open()
        assert {t.label for t in graph.targets.values()} == {"Pods-App", "Pods-A", "Pods-B"}

    def test_second_reconcile_reports_no_changes(self, document):
        path = document()
        runner.invoke(app, ["reconcile", str(path)])

        result = runner.invoke(app, ["reconcile", str(path)])

        assert result.exit_code == 0, result.output
        assert "No changes" in result.output

    def test_dry_run(self, tmp_path, document):
        result = runner.invoke(app, ["reconcile", str(document()), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "dry run" in result.output
        assert not (tmp_path / "Pods" / "Pods.project.json").exists()

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "installation.json"
        path.write_text(json.dumps({"aggregates": []}))

        result = runner.invoke(app, ["reconcile", str(path)])

        assert result.exit_code == 1


class TestPlanCommand:
    def test_plan_fresh_project(self, document):
        result = runner.invoke(app, ["plan", str(document())])

        assert result.exit_code == 0, result.output
        assert "new_project: True" in result.output
        assert "packages_to_install: A, B" in result.output
        assert "targets_to_install: Pods-App" in result.output

    def test_plan_after_change(self, document):
        runner.invoke(app, ["reconcile", str(document())])

        result = runner.invoke(app, ["plan", str(document(changed=["B"]))])

        assert result.exit_code == 0, result.output
        assert "packages_to_remove: B" in result.output
        assert "packages_to_install: B" in result.output
        assert "targets_to_install: -" in result.output
