"""
Tests for platforms and target specs
"""

import pytest

from podsync.common.exceptions import BindingError
from podsync.domain.platform import Platform, PlatformFamily, Version
from podsync.domain.specs import TargetKind, all_pod_specs
from tests.fakes import make_aggregate, make_pod


class TestVersion:
    def test_numeric_ordering(self):
        """Test: "10.0"은 "9.0"보다 크다 (문자열 비교 아님)"""
        assert Version.parse("10.0") > Version.parse("9.0")
        assert min(Version.parse(v) for v in ["9.0", "8.0", "10.0"]) == Version.parse("8.0")

    def test_trailing_zeros_are_equal(self):
        assert Version.parse("8") == Version.parse("8.0.0")
        assert str(Version.parse("8.0")) == "8.0"

    def test_minor_components_compare_numerically(self):
        assert Version.parse("10.10") > Version.parse("10.9")
        assert Version.parse(" 7.1 ").text == "7.1"
        assert len({Version.parse("8"), Version.parse("8.0")}) == 1

    def test_invalid_version(self):
        with pytest.raises(ValueError):
            Version.parse("latest")


class TestPlatform:
    @pytest.mark.parametrize(
        "family,version,expected",
        [
            ("ios", "4.0", True),
            ("ios", "4.3", False),
            ("ios", "8.0", False),
            ("osx", "10.6", False),
            ("ios", None, False),
        ],
    )
    def test_requires_legacy_archs(self, family, version, expected):
        assert Platform.of(family, version).requires_legacy_archs("4.3") is expected

    def test_family_settings(self):
        assert PlatformFamily.IOS.deployment_target_setting == "IPHONEOS_DEPLOYMENT_TARGET"
        assert PlatformFamily.OSX.deployment_target_setting == "MACOSX_DEPLOYMENT_TARGET"
        assert str(Platform.of("osx", "10.8")) == "osx 10.8"


class TestTargetSpecBinding:
    def test_bind_once(self):
        pod = make_pod("A")
        assert not pod.is_bound

        pod.bind("T1")

        assert pod.is_bound
        assert pod.target_id == "T1"

    def test_second_bind_raises(self):
        """Test: 바인딩은 한 번만 가능"""
        pod = make_pod("A")
        pod.bind("T1")

        with pytest.raises(BindingError):
            pod.bind("T2")
        assert pod.target_id == "T1"

    def test_unbind_allows_fresh_binding(self):
        pod = make_pod("A")
        pod.bind("T1")
        pod.unbind()
        pod.bind("T2")
        assert pod.target_id == "T2"

    def test_kinds(self):
        assert make_pod("A").kind == TargetKind.POD
        assert make_aggregate("App").kind == TargetKind.AGGREGATE


class TestAggregateSpec:
    def test_pod_for_package(self):
        a, b = make_pod("A", "B"), make_pod("B")
        aggregate = make_aggregate("App", [a, b])

        assert aggregate.pod_for_package("B") is b
        assert aggregate.pod_for_package("C") is None

    def test_all_pod_specs_deduplicates_shared_pods(self):
        shared = make_pod("Shared")
        first = make_aggregate("App", [shared, make_pod("A")])
        second = make_aggregate("Tests", [shared])

        pods = all_pod_specs([first, second])

        assert [p.label for p in pods] == ["Pods-Shared", "Pods-A"]
