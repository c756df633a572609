from functools import cached_property
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from podsync.config.groups import ObservabilityConfig, ProjectConfig


class Settings(BaseSettings):
    """
    Podsync Settings

    Environment variables should use PODSYNC_ prefix.
    Example: PODSYNC_LOG_LEVEL, PODSYNC_PROJECT_FILE_NAME

    그룹화된 설정 접근:
        settings.project        # ProjectConfig
        settings.observability  # ObservabilityConfig
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PODSYNC_",
        extra="ignore",  # 알 수 없는 환경 변수 무시
    )

    # ========================================================================
    # Grouped Config Accessors
    # ========================================================================

    @cached_property
    def project(self) -> ProjectConfig:
        """프로젝트 생성 설정 그룹."""
        return ProjectConfig(
            project_file_name=self.project_file_name,
            strip_installed_product=self.strip_installed_product,
            legacy_archs=self.legacy_archs,
            legacy_archs_below=self.legacy_archs_below,
        )

    @cached_property
    def observability(self) -> ObservabilityConfig:
        """로깅 설정 그룹."""
        return ObservabilityConfig(log_level=self.log_level, log_format=self.log_format)

    # ========================================================================
    # Flat fields (env-backed)
    # ========================================================================

    project_file_name: str = "Pods.project.json"
    strip_installed_product: bool = False
    legacy_archs: str = "armv6 armv7"
    legacy_archs_below: str = "4.3"

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

