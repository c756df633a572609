"""
설정 그룹 정의.

Settings를 논리적 그룹으로 분리하여 관리합니다.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ProjectConfig(BaseModel):
    """Pods project generation settings."""

    project_file_name: str = Field(default="Pods.project.json", description="Project file name inside the sandbox")
    strip_installed_product: bool = Field(default=False, description="STRIP_INSTALLED_PRODUCT value")
    legacy_archs: str = Field(default="armv6 armv7", description="ARCHS for legacy iOS deployment targets")
    legacy_archs_below: str = Field(
        default="4.3", description="iOS deployment targets below this version need legacy ARCHS"
    )


class ObservabilityConfig(BaseModel):
    """Logging settings."""

    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["console", "json"] = Field(default="console", description="Log renderer")
