"""
Tests for the JSON project store
"""

import pytest

from podsync.common.exceptions import ProjectIOError
from podsync.domain.platform import Platform
from podsync.graph.store import ProjectStore


class TestProjectStore:
    def test_new_project(self, tmp_path):
        store = ProjectStore(tmp_path / "Pods.project.json")

        assert not store.exists()
        graph = store.new()
        assert graph.path == str(tmp_path / "Pods.project.json")
        assert set(graph.build_configurations) == {"Debug", "Release"}

    def test_save_and_open(self, tmp_path):
        """Test: 저장 후 다시 열면 타겟/엣지/링크 유지"""
        store = ProjectStore(tmp_path / "Pods.project.json")
        graph = store.new()
        graph.set_manifest("Podfile")
        graph.add_package_group("A", str(tmp_path / "A"))
        app = graph.new_target("Pods", Platform.of("ios", "8.0"))
        lib = graph.new_target("Pods-A", Platform.of("ios", "8.0"), product_group="A")
        graph.add_dependency(app.id, lib.id)
        graph.link_product(app.id, lib.product_id)

        store.save(graph)
        reopened = store.open()

        assert store.exists()
        assert reopened.manifest_path == "Podfile"
        assert reopened.target(app.id).dependencies == [lib.id]
        assert reopened.target(app.id).link_phase == [lib.product_id]
        assert reopened.package_groups["A"].products == [lib.product_id]
        assert not list(tmp_path.glob("*.tmp"))

    def test_open_invalid_project(self, tmp_path):
        path = tmp_path / "Pods.project.json"
        path.write_text("{not json")

        with pytest.raises(ProjectIOError):
            ProjectStore(path).open()

    def test_save_failure_is_wrapped(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = ProjectStore(blocker / "Pods.project.json")

        with pytest.raises(ProjectIOError):
            store.save(store.new())
