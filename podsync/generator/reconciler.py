"""
Pods Project Reconciler

Converges the Pods project to the desired target specs.

Pipeline Stages:
    1. Prepare: open or create the project, match targets by label, build configurations
    2. Sync packages: remove deleted/changed packages, then install missing ones
    3. Sync aggregates: install missing aggregate targets, regenerate their support files
    4. Wire dependencies: aggregate -> pod and pod -> sibling pod edges
    5. Sync links: link pod products into their aggregate targets
    6. Persist (optional): serialize and save the project

Known limitations:
    - Aggregate targets that are no longer desired are not removed, nor are their support files
    - Link phases are never pruned; products of removed pods stay listed
"""

from podsync.common.exceptions import UnboundTargetError, UnresolvedDependencyError
from podsync.common.observability import add_context, clear_context, get_logger
from podsync.config.groups import ProjectConfig
from podsync.domain.sandbox import Sandbox
from podsync.domain.specs import AggregateSpec, TargetKind, TargetSpec
from podsync.generator.build_configurations import setup_build_configurations
from podsync.generator.collaborators import FileReferencesInstaller, SupportFilesGenerator
from podsync.generator.context import ReconcileContext
from podsync.generator.pipeline import ReconcileResult, ReconcileStage, stage_execution
from podsync.generator.planning import packages_to_install, packages_to_remove, targets_to_install
from podsync.generator.ports import FileReferenceInstallerPort, SupportFileGeneratorPort
from podsync.generator.target_builder import TargetBuilder, default_builders
from podsync.graph.models import ConfigurationType, ProjectGraph
from podsync.graph.store import ProjectStore

logger = get_logger(__name__)


class Reconciler:
    """
    Orchestrates one reconciliation run.

    Usage:
        reconciler = Reconciler(
            sandbox=sandbox,
            aggregates=aggregates,
            user_build_configurations={"Debug": "debug", "Release": "release"},
        )

        # Reconcile and save
        result = reconciler.run()

        # Dry run: inspect reconciler.graph without writing
        result = reconciler.run(persist=False)
    """

    def __init__(
        self,
        sandbox: Sandbox,
        aggregates: list[AggregateSpec],
        user_build_configurations: dict[str, ConfigurationType | str] | None = None,
        manifest_path: str | None = None,
        config: ProjectConfig | None = None,
        store: ProjectStore | None = None,
        file_installer: FileReferenceInstallerPort | None = None,
        support_generator: SupportFileGeneratorPort | None = None,
        builders: dict[TargetKind, TargetBuilder] | None = None,
    ):
        config = config or ProjectConfig()
        self.context = ReconcileContext(
            sandbox=sandbox,
            aggregates=aggregates,
            user_build_configurations={
                name: ConfigurationType(type) for name, type in (user_build_configurations or {}).items()
            },
            config=config,
            manifest_path=manifest_path,
        )
        self.store = store or ProjectStore(sandbox.project_path)
        self.file_installer = file_installer or FileReferencesInstaller()
        self.support_generator = support_generator or SupportFilesGenerator()
        self.builders = builders or default_builders(config)

    @property
    def graph(self) -> ProjectGraph | None:
        return self.context.graph

    @property
    def steps(self):
        """Reconciliation stages in execution order (persist excluded)."""
        return [
            self.prepare_project,
            self.sync_pod_targets,
            self.sync_aggregate_targets,
            self.sync_target_dependencies,
            self.sync_aggregate_targets_libraries,
        ]

    def run(self, persist: bool = True) -> ReconcileResult:
        """
        Run all stages, then write the project unless `persist` is False.

        The run is not transactional: on failure the in-memory graph keeps the
        changes made so far, and the project file is not written.
        """
        result = ReconcileResult()
        add_context(project=str(self.store.path))
        try:
            for step in self.steps:
                step(self.context, result)
            if persist:
                self.write_project(self.context, result)
        finally:
            clear_context("project")

        logger.info("reconcile_completed", **result.summary())
        return result

    # ============================================================
    # Stage 1: Prepare
    # ============================================================

    @stage_execution(ReconcileStage.PREPARE)
    def prepare_project(self, ctx: ReconcileContext, result: ReconcileResult) -> None:
        if self.should_create_new_project():
            logger.info("project_initializing", path=str(self.store.path))
            graph = self.store.new()
            ctx.new_project = True
        else:
            logger.info("project_opening", path=str(self.store.path))
            graph = self.store.open()
            ctx.new_project = False

        self._release_stale_bindings(ctx, graph)
        if not ctx.new_project:
            self.detect_native_targets(ctx, graph)

        graph.set_manifest(ctx.manifest_path)
        setup_build_configurations(graph, ctx.aggregates, ctx.user_build_configurations, ctx.config)

        ctx.graph = graph
        ctx.sandbox.project = graph
        result.new_project = ctx.new_project

    def should_create_new_project(self) -> bool:
        return self._is_incompatible() or not self.store.exists()

    def _is_incompatible(self) -> bool:
        # Compatibility rule between an existing project and this generator is undefined.
        return False

    def detect_native_targets(self, ctx: ReconcileContext, graph: ProjectGraph) -> None:
        """Bind every spec whose label matches an existing target. Unmatched specs stay unbound."""
        targets_by_label = {target.label: target for target in graph.targets.values()}
        matched = 0
        for spec in ctx.all_specs:
            target = targets_by_label.get(spec.label)
            if target is None or spec.target_id == target.id:
                continue
            spec.bind(target.id)
            matched += 1
        logger.info("targets_matched", matched=matched, existing=len(targets_by_label))

    def _release_stale_bindings(self, ctx: ReconcileContext, graph: ProjectGraph) -> None:
        for spec in ctx.all_specs:
            if spec.target_id is not None and spec.target_id not in graph.targets:
                logger.debug("binding_released", label=spec.label, target_id=spec.target_id)
                spec.unbind()

    # ============================================================
    # Stage 2: Packages
    # ============================================================

    @stage_execution(ReconcileStage.SYNC_PACKAGES)
    def sync_pod_targets(self, ctx: ReconcileContext, result: ReconcileResult) -> None:
        state = ctx.sandbox.state

        result.packages_removed = packages_to_remove(state, ctx.new_project)
        for name in result.packages_removed:
            self.remove_pod(ctx, result, name)

        result.packages_installed = packages_to_install(ctx.pod_specs, state, ctx.new_project)
        for name in result.packages_installed:
            self.add_pod(ctx, result, name)

    def add_pod(self, ctx: ReconcileContext, result: ReconcileResult, name: str) -> None:
        graph = ctx.require_graph()
        pod_specs = ctx.pods_for_package(name)
        if not pod_specs:
            logger.warning("pod_without_targets", package=name)
            return

        logger.info("pod_installing", package=name, targets=len(pod_specs))
        sandbox = ctx.sandbox
        graph.add_package_group(name, str(sandbox.source_path(name)), sandbox.is_local(name))
        self.file_installer.install_file_references(sandbox, pod_specs)

        for pod_spec in pod_specs:
            if pod_spec.is_bound:
                logger.debug("pod_target_reused", label=pod_spec.label)
                self.builders[TargetKind.POD].refresh(pod_spec, graph.target(pod_spec.target_id), ctx)
            else:
                self.builders[TargetKind.POD].build(pod_spec, ctx)
                result.targets_created += 1
            self.support_generator.generate_support_files(pod_spec, graph)

    def remove_pod(self, ctx: ReconcileContext, result: ReconcileResult, name: str) -> None:
        """Delete the package group, its targets, their products and every edge to them."""
        graph = ctx.require_graph()
        if graph.package_group(name) is None:
            logger.info("pod_group_missing", package=name)
            return

        logger.info("pod_removing", package=name)
        for target in graph.targets_in_package_group(name):
            graph.remove_target(target.id)
            result.targets_removed += 1
            for spec in ctx.all_specs:
                if spec.target_id == target.id:
                    spec.unbind()

        graph.remove_package_group(name)

    # ============================================================
    # Stage 3: Aggregates
    # ============================================================

    @stage_execution(ReconcileStage.SYNC_AGGREGATES)
    def sync_aggregate_targets(self, ctx: ReconcileContext, result: ReconcileResult) -> None:
        graph = ctx.require_graph()

        selected = targets_to_install(ctx.aggregates, ctx.new_project)
        result.targets_installed = [aggregate.label for aggregate in selected]
        for aggregate in selected:
            logger.info("aggregate_installing", label=aggregate.label)
            self.builders[TargetKind.AGGREGATE].build(aggregate, ctx)
            result.targets_created += 1

        # Support files are regenerated for installed and reused aggregates alike
        for aggregate in ctx.aggregates:
            if not aggregate.is_empty:
                self.support_generator.generate_support_files(aggregate, graph)

    # ============================================================
    # Stage 4: Dependencies
    # ============================================================

    @stage_execution(ReconcileStage.WIRE_DEPENDENCIES)
    def sync_target_dependencies(self, ctx: ReconcileContext, result: ReconcileResult) -> None:
        graph = ctx.require_graph()

        for aggregate in ctx.aggregates:
            if not aggregate.pod_targets:
                continue
            aggregate_id = _require_bound(aggregate)
            for pod_spec in aggregate.pod_targets:
                if graph.add_dependency(aggregate_id, _require_bound(pod_spec, aggregate)):
                    result.edges_added += 1

        for aggregate in ctx.aggregates:
            for pod_spec in aggregate.pod_targets:
                for dependency_name in pod_spec.dependencies:
                    sibling = aggregate.pod_for_package(dependency_name)
                    if sibling is None:
                        raise UnresolvedDependencyError(
                            f"{pod_spec.label} depends on {dependency_name}, "
                            f"which is not a pod target of {aggregate.label}",
                            details={"pod": pod_spec.label, "dependency": dependency_name},
                        )
                    if graph.add_dependency(_require_bound(pod_spec, aggregate), _require_bound(sibling, pod_spec)):
                        result.edges_added += 1

    # ============================================================
    # Stage 5: Linking
    # ============================================================

    @stage_execution(ReconcileStage.SYNC_LINKS)
    def sync_aggregate_targets_libraries(self, ctx: ReconcileContext, result: ReconcileResult) -> None:
        graph = ctx.require_graph()
        for aggregate in ctx.aggregates:
            if not aggregate.pod_targets:
                continue
            aggregate_id = _require_bound(aggregate)
            for pod_spec in aggregate.pod_targets:
                product_id = graph.target(_require_bound(pod_spec, aggregate)).product_id
                if graph.link_product(aggregate_id, product_id):
                    result.links_added += 1

    # ============================================================
    # Stage 6: Persist
    # ============================================================

    @stage_execution(ReconcileStage.PERSIST)
    def write_project(self, ctx: ReconcileContext, result: ReconcileResult) -> None:
        self.store.save(ctx.require_graph())
        result.persisted = True


def _require_bound(spec: TargetSpec, referrer: TargetSpec | None = None) -> str:
    """Bound target id of a spec that must have been installed by now."""
    if spec.target_id is None:
        details = {"label": spec.label}
        if referrer is not None:
            details["referrer"] = referrer.label
        raise UnboundTargetError(f"{spec.label} has no build target", details=details)
    return spec.target_id
