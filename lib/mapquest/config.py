"""
Configuration loading for the MapQuest client.

Reads a ``[mapquest]`` section from a TOML file. String values may contain
``${ENV_VAR}`` placeholders, substituted from the environment:

    [mapquest]
    api-key = "${MAPQUEST_API_KEY}"
    host = "open.mapquestapi.com"
    request-timeout = 10
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import tomli

from .constants import API_HOST, DEFAULT_TIMEOUT
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace an environment variable placeholder with its value.

    Unset variables keep the original placeholder.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ``${VAR_NAME}`` placeholders in strings, dicts and lists."""
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class MapQuestConfig:
    """MapQuest client settings"""

    apiKey: str
    host: str = API_HOST
    requestTimeout: int = DEFAULT_TIMEOUT

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "MapQuestConfig":
        """Create config from a ``[mapquest]`` section dict, dood!

        Raises:
            ConfigurationError: If the api key is missing, still a placeholder,
                or a value has the wrong type
        """
        apiKey = data.get("api-key", "")
        if not isinstance(apiKey, str) or not apiKey.strip() or apiKey.startswith("${"):
            raise ConfigurationError("MapQuest api-key is not set in configuration")

        host = data.get("host", API_HOST)
        if not isinstance(host, str) or not host:
            raise ConfigurationError(f"Invalid MapQuest host: {host!r}")

        timeout = data.get("request-timeout", DEFAULT_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ConfigurationError(f"Invalid MapQuest request-timeout: {timeout!r}")

        return cls(apiKey=apiKey.strip(), host=host, requestTimeout=timeout)


def loadConfig(configPath: str, section: str = "mapquest") -> MapQuestConfig:
    """Load MapQuest settings from a TOML file.

    Args:
        configPath: Path to the TOML file
        section: Table holding the MapQuest settings (default: "mapquest")

    Raises:
        ConfigurationError: If the file or section is missing, or the TOML is invalid
    """
    configFile = Path(configPath)
    if not configFile.exists():
        raise ConfigurationError(f"Configuration file {configPath} not found")

    try:
        with open(configFile, "rb") as f:
            config = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse configuration {configPath}: {e}") from e

    sectionData = config.get(section)
    if not isinstance(sectionData, dict):
        raise ConfigurationError(f"Section [{section}] not found in {configPath}")

    result = MapQuestConfig.fromDict(substituteEnvVars(sectionData))
    logger.info(f"MapQuest configuration loaded from {configPath}")
    return result
