"""
Target Builders

Creates the build target of a spec in the project graph.

Base steps (TargetBuilder.build):
1. New static target keyed by (label, platform family, deployment target)
2. Legacy ARCHS on the built-in configurations when the platform needs them
3. One configuration per user build configuration
4. Bind the spec to the new target

Kind-specific steps run after the base steps (`_extend`), and again through
`refresh` when an already bound target is reused.
"""

from podsync.common.observability import get_logger
from podsync.config.groups import ProjectConfig
from podsync.domain.specs import PodSpec, TargetKind, TargetSpec
from podsync.generator.context import ReconcileContext
from podsync.graph.models import BUILTIN_CONFIGURATIONS, BuildTarget, ConfigurationType

logger = get_logger(__name__)

# Extensions that get compiled (added to the source phase)
COMPILABLE_EXTENSIONS = frozenset({".c", ".cc", ".cpp", ".cxx", ".m", ".mm", ".s", ".swift"})

_BUILTIN_BY_TYPE = {type: name for name, type in BUILTIN_CONFIGURATIONS}


class TargetBuilder:
    """Base builder shared by aggregate and pod targets."""

    def __init__(self, config: ProjectConfig):
        self.config = config

    def build(self, spec: TargetSpec, ctx: ReconcileContext) -> BuildTarget:
        graph = ctx.require_graph()
        target = graph.new_target(spec.label, spec.platform, product_group=self._product_group(spec))

        if spec.platform.requires_legacy_archs(self.config.legacy_archs_below):
            for name, _type in BUILTIN_CONFIGURATIONS:
                target.build_settings(name)["ARCHS"] = self.config.legacy_archs

        for name, type in ctx.user_build_configurations.items():
            base = target.build_settings(_BUILTIN_BY_TYPE[ConfigurationType(type)])
            target.add_build_configuration(name, type, base)

        spec.bind(target.id)
        self._extend(spec, target, ctx)

        logger.info("target_created", label=spec.label, kind=spec.kind.value, platform=str(spec.platform))
        return target

    def refresh(self, spec: TargetSpec, target: BuildTarget, ctx: ReconcileContext) -> None:
        """Re-run the kind-specific steps on a target the spec is already bound to."""
        self._extend(spec, target, ctx)
        logger.debug("target_refreshed", label=spec.label, kind=spec.kind.value)

    def _product_group(self, spec: TargetSpec) -> str | None:
        return None

    def _extend(self, spec: TargetSpec, target: BuildTarget, ctx: ReconcileContext) -> None:
        pass


class AggregateTargetBuilder(TargetBuilder):
    """Aggregate targets: products of the pod targets are linked in the link stage."""

    pass


class PodTargetBuilder(TargetBuilder):
    """Pod targets: product lives in the package group, sources go to the source phase."""

    def _product_group(self, spec: PodSpec) -> str | None:
        return spec.package_name

    def _extend(self, spec: PodSpec, target: BuildTarget, ctx: ReconcileContext) -> None:
        group = ctx.require_graph().package_group(spec.package_name)
        if group is None:
            return
        target.source_phase = [
            path for path in group.files if any(path.endswith(ext) for ext in COMPILABLE_EXTENSIONS)
        ]


def default_builders(config: ProjectConfig) -> dict[TargetKind, TargetBuilder]:
    return {
        TargetKind.AGGREGATE: AggregateTargetBuilder(config),
        TargetKind.POD: PodTargetBuilder(config),
    }
