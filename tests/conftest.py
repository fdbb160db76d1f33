import pytest

from imqslog.logger import LoggerFactory

IMQSLOG_ENV_VARS = [
    "IMQSLOG_LEVEL",
    "IMQSLOG_FILE",
    "IMQSLOG_STDOUT",
    "IMQSLOG_MAX_SIZE",
    "IMQSLOG_MAX_BACKUPS",
    "IMQSLOG_REPORTER_TOKEN",
    "IMQSLOG_REPORTER_ENVIRONMENT",
]


@pytest.fixture(autouse=True)
def clean_logging_environment(monkeypatch, mocker):
    """Isolate tests from the host: no IMQSLOG_* variables, never treated as a container,
    and no process-wide logger left behind."""
    for env_var in IMQSLOG_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    mocker.patch("imqslog.logger.is_container", return_value=False)
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()
