"""
Project build configurations

Registers the user build configurations on the project and applies the
project-wide deployment target overrides.
"""

from podsync.config.groups import ProjectConfig
from podsync.domain.platform import PlatformFamily, Version
from podsync.domain.specs import AggregateSpec
from podsync.graph.models import ConfigurationType, ProjectGraph

STRIP_INSTALLED_PRODUCT = "STRIP_INSTALLED_PRODUCT"


def minimum_deployment_targets(aggregates: list[AggregateSpec]) -> dict[PlatformFamily, Version]:
    """Lowest deployment target per platform family; families without aggregates are absent."""
    minimums: dict[PlatformFamily, Version] = {}
    for aggregate in aggregates:
        platform = aggregate.platform
        if platform.deployment_target is None:
            continue
        current = minimums.get(platform.family)
        if current is None or platform.deployment_target < current:
            minimums[platform.family] = platform.deployment_target
    return minimums


def setup_build_configurations(
    graph: ProjectGraph,
    aggregates: list[AggregateSpec],
    user_build_configurations: dict[str, ConfigurationType],
    config: ProjectConfig,
) -> None:
    for name, type in user_build_configurations.items():
        graph.add_build_configuration(name, type)

    deployment_targets = minimum_deployment_targets(aggregates)
    strip = "YES" if config.strip_installed_product else "NO"
    for configuration in graph.build_configurations.values():
        settings = configuration.build_settings
        for family, version in deployment_targets.items():
            settings[family.deployment_target_setting] = str(version)
        settings[STRIP_INSTALLED_PRODUCT] = strip
