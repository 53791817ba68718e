"""
Runtime settings for rule generation and scanning.
Environment variables (``SONAR_BALLERINA_<FIELD>``) override defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

ENV_PREFIX = "SONAR_BALLERINA_"


def _default_cache_path() -> str:
    return str(Path.home() / ".sonar-ballerina" / "rule-cache.json")


@dataclass
class Settings:
    """Rule generation configuration"""

    # Ballerina Central
    REGISTRY_URL: str = "https://api.central.ballerina.io/2.0/registry/tools/scan/"
    RULE_INFO_PATH: str = "resources/rule-info.json"
    USER_AGENT: str = "sonar-ballerina-rules/0.2.0"
    HTTP_TIMEOUT: float = 5.0  # seconds, per network operation

    # Rule cache
    CACHE_PATH: str = field(default_factory=_default_cache_path)

    # Scanner
    SCAN_COMMAND: str = "bal scan --platform-triggered --platforms=sonarqube"
    ISSUES_FILE_NAME: str = "ballerina-static-code-analysis-results.json"

    def __post_init__(self):
        """Load from environment variables"""
        for key in self.__dataclass_fields__:
            env_value = os.getenv(ENV_PREFIX + key)
            if env_value is None:
                continue
            field_type = self.__dataclass_fields__[key].type
            if field_type in (bool, "bool"):
                setattr(self, key, env_value.lower() in ("true", "1", "yes"))
            elif field_type in (int, "int"):
                setattr(self, key, int(env_value))
            elif field_type in (float, "float"):
                setattr(self, key, float(env_value))
            else:
                setattr(self, key, env_value)

    @property
    def cache_path(self) -> Path:
        return Path(self.CACHE_PATH).expanduser()


# Global settings instance
settings = Settings()
