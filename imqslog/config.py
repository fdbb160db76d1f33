"""
Configuration System - logging configuration for imqslog

Loads settings from a YAML file, environment variables and explicit
overrides, then builds the process-wide Logger from them.

Example configuration file (imqslog.yml):
    logging:
      level: info
      file: /var/log/imqs/${SERVICE}.log   # or stdout / stderr
      stdout: false                        # mirror file logs to stdout
      max_size: 30MB
      max_backups: 3
      reporter:
        token: ${ROLLBAR_TOKEN}
        repository_root: /src/service
        code_version: 1.4.2
        environment: production
"""

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from beartype.typing import Any, Dict, Optional, Tuple

import yaml
from humanfriendly import InvalidSize, parse_size
from serde import SerdeError, deserialize, field, from_dict

from imqslog.constants import DEFAULT_MAX_BACKUPS, FAULT_MAPPING, MEGABYTE, STDOUT
from imqslog.levels import parse_level


@deserialize
@dataclass
class ReporterSettings:
    """Remote reporter section of the configuration"""

    token: Optional[str] = None
    repository_root: str = ""
    code_version: str = ""
    environment: str = "production"


@deserialize
@dataclass
class LogSettings:
    """Typed view of a loaded configuration"""

    level: str = "info"
    file: str = STDOUT
    stdout: bool = False
    max_size: str = "30MB"
    max_backups: int = DEFAULT_MAX_BACKUPS
    reporter: ReporterSettings = field(default_factory=ReporterSettings)

    @property
    def max_size_bytes(self) -> int:
        return parse_size(self.max_size, binary=True)


class LoggingConfig:
    """
    Centralized logging configuration for imqslog.

    Precedence: overrides > environment > file > defaults
    """

    DEFAULT_CONFIG = {
        "level": "info",
        "file": STDOUT,
        "stdout": False,
        "max_size": "30MB",
        "max_backups": DEFAULT_MAX_BACKUPS,
        "reporter": {},
    }

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from the file and the environment.

        A missing file is not an error. An unreadable one is reported on
        stderr and ignored.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Configuration dictionary
        """
        config = cls.DEFAULT_CONFIG.copy()
        config["reporter"] = {}

        if config_path and Path(config_path).exists():
            file_config = cls._load_from_file(config_path)
            if file_config and isinstance(file_config.get("logging"), dict):
                file_section = dict(file_config["logging"])
                reporter = file_section.pop("reporter", None)
                config.update(file_section)
                if isinstance(reporter, dict):
                    config["reporter"].update(reporter)

        config = cls._apply_env_overrides(config)
        return cls._substitute_env_vars(config)

    @classmethod
    def _load_from_file(cls, config_path: str) -> Optional[Dict[str, Any]]:
        try:
            with open(config_path) as f:
                content = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            sys.stderr.write(FAULT_MAPPING["yaml_file_parse_issue"].format(file_path=config_path) + "\n")
            sys.stderr.write(f"Error details:\n{e}\n")
            return None
        return content if isinstance(content, dict) else None

    @classmethod
    def _apply_env_overrides(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides.

        Environment variables:
            IMQSLOG_LEVEL: Log level (trace, debug, info, warn, error)
            IMQSLOG_FILE: stdout, stderr or a log file path
            IMQSLOG_STDOUT: Mirror file logs to stdout (true, false, yes, no, 1, 0)
            IMQSLOG_MAX_SIZE: Size at which the log file is rotated, e.g. 30MB
            IMQSLOG_MAX_BACKUPS: Number of rotated files to keep
            IMQSLOG_REPORTER_TOKEN: Access token for the remote reporter
            IMQSLOG_REPORTER_ENVIRONMENT: Environment name sent to the remote reporter
        """
        env_mappings = {
            "IMQSLOG_LEVEL": "level",
            "IMQSLOG_FILE": "file",
            "IMQSLOG_MAX_SIZE": "max_size",
        }
        for env_var, config_key in env_mappings.items():
            if env_var in os.environ:
                config[config_key] = os.environ[env_var]

        if "IMQSLOG_STDOUT" in os.environ:
            config["stdout"] = os.environ["IMQSLOG_STDOUT"].lower() in ("true", "yes", "1", "on")

        if "IMQSLOG_MAX_BACKUPS" in os.environ:
            try:
                config["max_backups"] = int(os.environ["IMQSLOG_MAX_BACKUPS"])
            except ValueError:
                config["max_backups"] = os.environ["IMQSLOG_MAX_BACKUPS"]

        reporter_mappings = {
            "IMQSLOG_REPORTER_TOKEN": "token",
            "IMQSLOG_REPORTER_ENVIRONMENT": "environment",
        }
        for env_var, reporter_key in reporter_mappings.items():
            if env_var in os.environ:
                config["reporter"][reporter_key] = os.environ[env_var]

        return config

    @classmethod
    def _substitute_env_vars(cls, config: Any) -> Any:
        """
        Recursively substitute ${VAR_NAME} references with environment values.

        Unknown variables are left as they are.
        """
        if isinstance(config, str):

            def replace_env(match):
                return os.environ.get(match.group(1), match.group(0))

            return re.sub(r"\$\{([^}]+)\}", replace_env, config)
        elif isinstance(config, dict):
            return {k: cls._substitute_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [cls._substitute_env_vars(item) for item in config]
        else:
            return config

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> Tuple[bool, str]:
        """
        Validate a configuration dictionary.

        Returns:
            Tuple of (is_valid, error_message)
        """
        _, error = parse_level(str(config.get("level", "")))
        if error:
            return False, error

        max_size = config.get("max_size", cls.DEFAULT_CONFIG["max_size"])
        try:
            parse_size(str(max_size), binary=True)
        except InvalidSize as e:
            return False, FAULT_MAPPING["invalid_max_size"].format(value=max_size, reason=e)

        max_backups = config.get("max_backups", DEFAULT_MAX_BACKUPS)
        if isinstance(max_backups, bool) or not isinstance(max_backups, int) or max_backups < 0:
            return False, FAULT_MAPPING["invalid_max_backups"].format(value=max_backups)

        return True, ""

    @classmethod
    def to_settings(cls, config: Dict[str, Any]) -> LogSettings:
        """Convert a loaded configuration dictionary into LogSettings"""
        data = dict(config)
        data["max_size"] = str(data.get("max_size", cls.DEFAULT_CONFIG["max_size"]))
        data["file"] = str(data.get("file", STDOUT))
        try:
            return from_dict(LogSettings, data)
        except SerdeError as e:
            raise ValueError(FAULT_MAPPING["config_type_issue"].format(error=e)) from e

    @classmethod
    def logger_arguments(cls, config_path: Optional[str] = None, **overrides) -> Dict[str, Any]:
        """
        Resolve configuration into the keyword arguments of Logger.

        Overrides that are None are ignored, so unset CLI flags do not
        mask file or environment values.

        Raises:
            ValueError: the configuration is invalid
        """
        from imqslog.reporter import RemoteReporter

        config = cls.load(config_path)
        config.update({key: value for key, value in overrides.items() if value is not None})

        is_valid, error = cls.validate(config)
        if not is_valid:
            raise ValueError(error)
        settings = cls.to_settings(config)

        level, _ = parse_level(settings.level)
        reporter = None
        if settings.reporter.token:
            reporter = RemoteReporter(
                settings.reporter.token,
                settings.reporter.repository_root,
                settings.reporter.code_version,
                settings.reporter.environment,
            )

        return dict(
            filename=settings.file,
            log_to_stdout=settings.stdout,
            level=level,
            reporter=reporter,
            max_size_mb=settings.max_size_bytes / MEGABYTE,
            max_backups=settings.max_backups,
        )

    @classmethod
    def create_logger(cls, config_path: Optional[str] = None, **overrides):
        """
        Build a new Logger from configuration. The caller owns and closes it.

        Example:
            with LoggingConfig.create_logger("imqslog.yml", file="stderr") as log:
                log.info("ready")
        """
        from imqslog.logger import Logger

        return Logger(**cls.logger_arguments(config_path, **overrides))

    @classmethod
    def setup_logging(cls, config_path: Optional[str] = None, **overrides):
        """
        Configure the process-wide logger.

        Only the first call builds a logger; later calls return the same one.

        Args:
            config_path: Path to configuration file
            **overrides: Configuration overrides (e.g., level="debug", file="stderr")

        Returns:
            The process-wide Logger

        Raises:
            ValueError: the configuration is invalid

        Example:
            log = LoggingConfig.setup_logging("imqslog.yml", level="debug")
        """
        from imqslog.logger import LoggerFactory

        if LoggerFactory.is_configured():
            return LoggerFactory.get_logger()
        return LoggerFactory.configure(**cls.logger_arguments(config_path, **overrides))
