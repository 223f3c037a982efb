"""Scoring configuration loader."""

import hashlib
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from trendscore.config.schemas import ScoringConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class ScoringConfigLoader:
    """Loads and validates a scoring configuration file.

    The resulting ``ScoringConfig`` is frozen; reloading produces a new
    instance rather than mutating the previous one.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Unique identifier for the current run.
        """
        self._run_id = run_id
        self._file_checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []

    @property
    def file_checksum(self) -> str | None:
        """SHA-256 of the last file read, if any."""
        return self._file_checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    def _load_yaml_file(self, file_path: Path) -> dict[str, object]:
        """Load a YAML file and record its checksum.

        Args:
            file_path: Path to the YAML file.

        Returns:
            Parsed content.

        Raises:
            FileNotFoundError: If file does not exist.
            yaml.YAMLError: If YAML parsing fails.
        """
        content_bytes = file_path.read_bytes()
        self._file_checksum = hashlib.sha256(content_bytes).hexdigest()
        parsed: dict[str, object] = yaml.safe_load(content_bytes.decode("utf-8")) or {}
        return parsed

    def load(self, config_path: Path) -> ScoringConfig:
        """Load and validate a scoring configuration file.

        Args:
            config_path: Path to scoring.yaml.

        Returns:
            Validated ScoringConfig.

        Raises:
            ConfigValidationError: If the file is missing, unparseable, or invalid.
        """
        self._validation_errors = []
        log = logger.bind(
            run_id=self._run_id,
            component="config",
            file_path=str(config_path),
        )

        try:
            data = self._load_yaml_file(config_path)
            config = ScoringConfig.model_validate(data)
        except ValidationError as e:
            for err in e.errors():
                self._validation_errors.append(
                    {
                        "loc": ".".join(str(loc) for loc in err["loc"]),
                        "msg": err["msg"],
                        "type": err["type"],
                    }
                )
            log.error(
                "config_validation_failed",
                validation_error_count=len(self._validation_errors),
                errors=self._validation_errors,
            )
            raise ConfigValidationError(
                self._validation_errors, str(config_path)
            ) from e
        except FileNotFoundError as e:
            self._validation_errors.append(
                {"loc": "file", "msg": str(e), "type": "file_not_found"}
            )
            log.error("config_file_not_found", error=str(e))
            raise ConfigValidationError(
                self._validation_errors, str(config_path)
            ) from e
        except yaml.YAMLError as e:
            self._validation_errors.append(
                {"loc": "file", "msg": str(e), "type": "yaml_parse_error"}
            )
            log.error("config_yaml_parse_failed", error=str(e))
            raise ConfigValidationError(
                self._validation_errors, str(config_path)
            ) from e

        log.info(
            "config_file_loaded",
            file_sha256=self._file_checksum,
            version=config.version,
        )
        return config


def load_scoring_config(
    config_path: Path | None, run_id: str = "pure"
) -> ScoringConfig:
    """Load a scoring config, falling back to defaults when no path is given.

    Args:
        config_path: Optional path to scoring.yaml.
        run_id: Run identifier for logging.

    Returns:
        ScoringConfig instance.
    """
    if config_path is None:
        return ScoringConfig()
    return ScoringConfigLoader(run_id).load(config_path)
