"""YAML loader for manager configuration files."""

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from courier.config.manager import ManagerConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when a configuration file cannot be loaded or validated."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: Error details with ``loc``, ``msg`` and ``type`` keys.
            file_path: Path to the file that failed.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


def load_manager_config(file_path: Path) -> ManagerConfig:
    """Load a ManagerConfig from a YAML file.

    Example file::

        inject_default_headers: true
        additional_headers:
          X-Client: reports
        authentication:
          kind: token
          token_type: Bearer
          value: abc123

    Args:
        file_path: Path to the YAML file.

    Returns:
        Validated configuration.

    Raises:
        ConfigValidationError: If the file is missing, is not valid YAML, or
            does not match the ManagerConfig schema.
    """
    log = logger.bind(component="config", file_path=str(file_path))

    try:
        content = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        log.error("config_file_not_found", error=str(e))
        errors = [{"loc": "file", "msg": str(e), "type": "file_not_found"}]
        raise ConfigValidationError(errors, str(file_path)) from e

    try:
        parsed = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        log.error("config_yaml_parse_error", error=str(e))
        errors = [{"loc": "yaml", "msg": str(e), "type": "yaml_parse_error"}]
        raise ConfigValidationError(errors, str(file_path)) from e

    try:
        config = ManagerConfig.model_validate(parsed)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(loc) for loc in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        log.error(
            "config_validation_failed",
            validation_error_count=len(errors),
            errors=errors,
        )
        raise ConfigValidationError(errors, str(file_path)) from e

    log.info("config_loaded", header_count=len(config.additional_headers))
    return config
