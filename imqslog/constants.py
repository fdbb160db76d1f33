import imqslog

# Reserved destination names. Anything else is treated as a file path.
STDOUT = "stdout"
STDERR = "stderr"
TESTING = ".testing."

# ISO 8601 with microsecond precision, e.g. 2024-03-11T14:22:05.123456+02:00
TIMESTAMP_PRECISION = "microseconds"

# Rotation parameters of the file sink
DEFAULT_MAX_SIZE_MB = 30
DEFAULT_MAX_BACKUPS = 3
MEGABYTE = 1024 * 1024

# Presence of this file means we are running inside a container
CONTAINER_MARKER = "/.dockerenv"

ROLLBAR_ITEM_URL = "https://api.rollbar.com/api/1/item/"
DEFAULT_REPORTER_TIMEOUT = 5  # seconds

FAULT_MAPPING = dict(
    invalid_level="Invalid log level '{level}'",
    sink_write_failed="Unable to write to log file {filename}: {error}. This error will not be shown again.",
    missing_capture="A capture callable is required when logging to '{testing}'.",
    negative_prefix="strip_prefix_len must be a non-negative integer, got {value}.",
    logger_not_configured="No process-wide logger has been configured. Call LoggerFactory.configure() first.",
    invalid_max_size="Invalid max_size '{value}'. {reason}",
    invalid_max_backups="Invalid max_backups '{value}'. Must be a non-negative integer.",
    yaml_file_parse_issue="Error occurred while parsing yaml file ({file_path}).",
    config_type_issue="Error occurred while reading logging settings: {error}",
)

TOOL_VERSION = f"""imqslog v{imqslog.__version__}
Leveled, rotating-file logging"""
TOOL_USAGE = f"""Supported and loaded modules:
    - write: Log a single message
    - pipe: Forward lines from stdin into the log
    - parse_level: Check how a level name is interpreted"""

MISSING_COMMAND_SLOGAN = """Usage: imqslog [OPTIONS] COMMAND [ARGS]...\nTry 'imqslog --help' for help.
\nError: Missing command."""
