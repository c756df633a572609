"""
Tests for project build configuration setup
"""

from podsync.config.groups import ProjectConfig
from podsync.domain.platform import PlatformFamily, Version
from podsync.generator.build_configurations import minimum_deployment_targets, setup_build_configurations
from podsync.graph.models import ConfigurationType, ProjectGraph
from tests.fakes import make_aggregate


class TestMinimumDeploymentTargets:
    def test_minimum_per_family(self):
        """Test: [9.0, 8.0, 10.0] → 8.0"""
        aggregates = [make_aggregate(name, version=v) for name, v in [("A", "9.0"), ("B", "8.0"), ("C", "10.0")]]

        minimums = minimum_deployment_targets(aggregates)

        assert minimums == {PlatformFamily.IOS: Version.parse("8.0")}


class TestSetupBuildConfigurations:
    def test_overrides_only_targeted_families(self):
        graph = ProjectGraph.new("Pods.project.json")
        aggregates = [make_aggregate("App", version="9.0"), make_aggregate("Ext", version="8.0")]

        setup_build_configurations(
            graph, aggregates, {"Beta": ConfigurationType.RELEASE}, ProjectConfig()
        )

        assert set(graph.build_configurations) == {"Debug", "Release", "Beta"}
        for configuration in graph.build_configurations.values():
            settings = configuration.build_settings
            assert settings["IPHONEOS_DEPLOYMENT_TARGET"] == "8.0"
            assert "MACOSX_DEPLOYMENT_TARGET" not in settings
            assert settings["STRIP_INSTALLED_PRODUCT"] == "NO"

    def test_both_families(self):
        graph = ProjectGraph.new("Pods.project.json")
        aggregates = [make_aggregate("App", version="7.0"), make_aggregate("Mac", family="osx", version="10.9")]

        setup_build_configurations(graph, aggregates, {}, ProjectConfig())

        settings = graph.build_settings("Debug")
        assert settings["IPHONEOS_DEPLOYMENT_TARGET"] == "7.0"
        assert settings["MACOSX_DEPLOYMENT_TARGET"] == "10.9"

    def test_strip_setting_from_config(self):
        graph = ProjectGraph.new("Pods.project.json")

        setup_build_configurations(graph, [], {}, ProjectConfig(strip_installed_product=True))

        assert graph.build_settings("Release")["STRIP_INSTALLED_PRODUCT"] == "YES"
