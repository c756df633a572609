"""
Project Graph Models

In-memory model of the Pods project.

Every object lives in an id-indexed arena on ProjectGraph:
- targets: BuildTarget by id
- products: ProductReference by id
- package_groups: PackageGroup by package name
- support_groups: SupportFilesGroup by target name

Targets reference each other (dependencies) and products (product_id,
link_phase) only by id.
"""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from podsync.common.exceptions import DuplicateTargetError, GraphError, UnknownTargetError
from podsync.domain.platform import Platform, PlatformFamily


def new_object_id() -> str:
    """24 hex digit object id, the shape project files use for object references."""
    return uuid4().hex[:24].upper()


class ConfigurationType(str, Enum):
    """Build configuration type"""

    DEBUG = "debug"
    RELEASE = "release"


BUILTIN_CONFIGURATIONS: tuple[tuple[str, ConfigurationType], ...] = (
    ("Debug", ConfigurationType.DEBUG),
    ("Release", ConfigurationType.RELEASE),
)


class BuildConfiguration(BaseModel):
    name: str
    type: ConfigurationType
    build_settings: dict[str, str] = Field(default_factory=dict)


class Configurable(BaseModel):
    """Owner of a named build configuration list (project or target)."""

    build_configurations: dict[str, BuildConfiguration] = Field(default_factory=dict)

    def add_build_configuration(
        self,
        name: str,
        type: ConfigurationType | str,
        build_settings: dict[str, str] | None = None,
    ) -> BuildConfiguration:
        """
        Register a build configuration. Existing configurations are reused.

        Args:
            name: Configuration name (e.g. "Debug", "Beta")
            type: debug or release
            build_settings: Initial settings for a new configuration

        Returns:
            The new or existing configuration
        """
        existing = self.build_configurations.get(name)
        if existing is not None:
            return existing
        configuration = BuildConfiguration(
            name=name,
            type=ConfigurationType(type),
            build_settings=dict(build_settings or {}),
        )
        self.build_configurations[name] = configuration
        return configuration

    def build_settings(self, name: str) -> dict[str, str]:
        return self.build_configurations[name].build_settings


class ProductReference(BaseModel):
    """Build product. `group` is the owning package group, None for the Products group."""

    id: str
    path: str
    group: str | None = None


class PackageGroup(BaseModel):
    """File references of one package and the products of its pod targets."""

    name: str
    path: str
    local: bool = False
    files: list[str] = Field(default_factory=list)
    products: list[str] = Field(default_factory=list)


class SupportFilesGroup(BaseModel):
    name: str
    files: list[str] = Field(default_factory=list)


class BuildTarget(Configurable):
    """
    Static library target.

    Attributes:
        id: Arena id
        label: Unique build identifier
        product_id: Id of the product reference
        dependencies: Target ids this target depends on (ordered, no duplicates)
        link_phase: Product ids linked into this target (ordered, no duplicates)
        source_phase: Source files compiled by this target
    """

    id: str
    label: str
    platform_family: PlatformFamily
    deployment_target: str | None = None
    product_id: str
    dependencies: list[str] = Field(default_factory=list)
    link_phase: list[str] = Field(default_factory=list)
    source_phase: list[str] = Field(default_factory=list)

    @property
    def platform(self) -> Platform:
        return Platform.of(self.platform_family, self.deployment_target)

    @property
    def configurations(self) -> set[tuple[str, ConfigurationType]]:
        return {(c.name, c.type) for c in self.build_configurations.values()}


class ProjectGraph(Configurable):
    """
    Pods project.

    Usage:
        graph = ProjectGraph.new("Pods/Pods.project.json")
        target = graph.new_target("Pods-AFNetworking", Platform.of("ios", "8.0"))
        graph.add_dependency(aggregate.id, target.id)
    """

    path: str
    manifest_path: str | None = None
    targets: dict[str, BuildTarget] = Field(default_factory=dict)
    products: dict[str, ProductReference] = Field(default_factory=dict)
    package_groups: dict[str, PackageGroup] = Field(default_factory=dict)
    support_groups: dict[str, SupportFilesGroup] = Field(default_factory=dict)

    @classmethod
    def new(cls, path: str) -> "ProjectGraph":
        """Empty project with the built-in Debug/Release configurations."""
        graph = cls(path=path)
        for name, type in BUILTIN_CONFIGURATIONS:
            graph.add_build_configuration(name, type)
        return graph

    def set_manifest(self, manifest_path: str | None) -> None:
        self.manifest_path = manifest_path

    # ============================================================
    # Targets
    # ============================================================

    def target(self, target_id: str) -> BuildTarget:
        try:
            return self.targets[target_id]
        except KeyError:
            raise UnknownTargetError(f"Unknown target id {target_id}") from None

    def target_by_label(self, label: str) -> BuildTarget | None:
        return next((t for t in self.targets.values() if t.label == label), None)

    def new_target(self, label: str, platform: Platform, product_group: str | None = None) -> BuildTarget:
        """
        Create a static library target with its product and the built-in configurations.

        Args:
            label: Target label, unique within the project
            platform: Target platform
            product_group: Package group owning the product (None = Products group)

        Raises:
            DuplicateTargetError: a target with this label exists
            GraphError: the product group does not exist
        """
        if self.target_by_label(label) is not None:
            raise DuplicateTargetError(f"Target {label} already exists")
        if product_group is not None and product_group not in self.package_groups:
            raise GraphError(f"No package group {product_group} for target {label}")

        product = ProductReference(id=new_object_id(), path=f"lib{label}.a", group=product_group)
        self.products[product.id] = product
        if product_group is not None:
            self.package_groups[product_group].products.append(product.id)

        deployment_target = str(platform.deployment_target) if platform.deployment_target else None
        target = BuildTarget(
            id=new_object_id(),
            label=label,
            platform_family=platform.family,
            deployment_target=deployment_target,
            product_id=product.id,
        )

        common = {
            "PRODUCT_NAME": "$(TARGET_NAME)",
            "SDKROOT": platform.family.sdk_root,
            "SKIP_INSTALL": "YES",
        }
        if deployment_target:
            common[platform.family.deployment_target_setting] = deployment_target
        for name, type in BUILTIN_CONFIGURATIONS:
            target.add_build_configuration(name, type, common)

        self.targets[target.id] = target
        return target

    def remove_target(self, target_id: str) -> None:
        """Delete a target, its product and every dependency edge referencing it."""
        target = self.target(target_id)
        for referrer in self.referrers(target_id):
            referrer.dependencies.remove(target_id)

        product = self.products.pop(target.product_id, None)
        if product is not None and product.group in self.package_groups:
            group_products = self.package_groups[product.group].products
            if product.id in group_products:
                group_products.remove(product.id)

        del self.targets[target_id]

    def referrers(self, target_id: str) -> list[BuildTarget]:
        """Targets with a dependency edge to `target_id`."""
        return [t for t in self.targets.values() if target_id in t.dependencies]

    # ============================================================
    # Edges & Linking
    # ============================================================

    def add_dependency(self, from_id: str, to_id: str) -> bool:
        """Add a dependency edge. Returns False if the edge already existed."""
        source = self.target(from_id)
        self.target(to_id)
        if to_id in source.dependencies:
            return False
        source.dependencies.append(to_id)
        return True

    def link_product(self, target_id: str, product_id: str) -> bool:
        """Add a product to a target's link phase. Returns False if already linked."""
        target = self.target(target_id)
        if product_id in target.link_phase:
            return False
        target.link_phase.append(product_id)
        return True

    @property
    def edge_count(self) -> int:
        return sum(len(t.dependencies) for t in self.targets.values())

    # ============================================================
    # Groups
    # ============================================================

    def add_package_group(self, name: str, path: str, local: bool = False) -> PackageGroup:
        """Create the group of a package, or reuse it pointing at the new location."""
        group = self.package_groups.get(name)
        if group is None:
            group = PackageGroup(name=name, path=path, local=local)
            self.package_groups[name] = group
        else:
            group.path = path
            group.local = local
        return group

    def package_group(self, name: str) -> PackageGroup | None:
        return self.package_groups.get(name)

    def targets_in_package_group(self, name: str) -> list[BuildTarget]:
        """Targets whose product lives under the package group."""
        return [t for t in self.targets.values() if self.products.get(t.product_id, _NO_PRODUCT).group == name]

    def remove_package_group(self, name: str) -> None:
        self.package_groups.pop(name, None)

    def support_files_group(self, name: str) -> SupportFilesGroup:
        group = self.support_groups.get(name)
        if group is None:
            group = SupportFilesGroup(name=name)
            self.support_groups[name] = group
        return group

    # ============================================================
    # Serialization
    # ============================================================

    def prepare_for_serialization(self) -> None:
        """Sort group contents and objects so that equal graphs serialize identically."""
        for group in self.package_groups.values():
            group.files.sort()
        for support in self.support_groups.values():
            support.files.sort()
        self.targets = dict(sorted(self.targets.items(), key=lambda item: item[1].label))
        self.package_groups = dict(sorted(self.package_groups.items()))
        self.support_groups = dict(sorted(self.support_groups.items()))
        self.products = dict(sorted(self.products.items(), key=lambda item: item[1].path))


_NO_PRODUCT = ProductReference(id="", path="")
