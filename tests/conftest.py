"""
Global test configuration and fixtures
"""

from pathlib import Path

import pytest

from podsync.domain.sandbox import Sandbox, SandboxState
from tests.fakes import RecordingFileInstaller, RecordingSupportGenerator


@pytest.fixture
def sandbox(tmp_path) -> Sandbox:
    """빈 상태의 샌드박스"""
    root = tmp_path / "Pods"
    root.mkdir()
    return Sandbox(root=root, state=SandboxState())


@pytest.fixture
def file_installer() -> RecordingFileInstaller:
    return RecordingFileInstaller()


@pytest.fixture
def support_generator() -> RecordingSupportGenerator:
    return RecordingSupportGenerator()


@pytest.fixture
def make_sources(tmp_path):
    """패키지 소스 디렉토리 생성: make_sources("A", "B")"""

    def _make(*names: str, root: Path | None = None) -> Path:
        base = root or tmp_path / "Pods"
        for name in names:
            classes = base / name / "Classes"
            classes.mkdir(parents=True, exist_ok=True)
            (classes / f"{name}.m").write_text(f"// {name}\n")
            (classes / f"{name}.h").write_text(f"// {name}\n")
        return base

    return _make


# Pytest hooks
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (real project files)")


def pytest_collection_modifyitems(config, items):
    """경로 기반 자동 마커 추가"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
