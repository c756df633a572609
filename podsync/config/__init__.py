from podsync.config.groups import ObservabilityConfig, ProjectConfig
from podsync.config.settings import Settings

__all__ = ["ObservabilityConfig", "ProjectConfig", "Settings"]
