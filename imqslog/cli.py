import sys
from pathlib import Path

import click

from imqslog.config import LoggingConfig
from imqslog.constants import MISSING_COMMAND_SLOGAN, TOOL_USAGE, TOOL_VERSION
from imqslog.levels import Level, parse_level
from imqslog.logger import Logger

CONTEXT_SETTINGS = dict(auto_envvar_prefix="IMQSLOG")

imqslog_folder = Path(__file__).parent
cmd_folder = imqslog_folder / "commands/"


class Environment:
    def __init__(self):
        self.config = None
        self.file = None
        self.stdout = None
        self.level = None

    @staticmethod
    def log(msg: str, new_line=True, *args):
        """Logs a message to stdout."""
        if args:
            msg %= args
        click.echo(msg, file=sys.stdout, nl=new_line)

    @staticmethod
    def elog(msg: str, new_line=True, *args):
        """Logs a message to stderr."""
        if args:
            msg %= args
        click.echo(msg, file=sys.stderr, nl=new_line)

    def set_parameters(self, context: click.core.Context):
        for param, value in context.params.items():
            setattr(self, param, value)

    def resolve_level(self, text: str) -> Level:
        """Parses a level name. Prints the error and exits with code 1 if it is not valid."""
        level, error = parse_level(text)
        if error:
            self.elog(error)
            sys.exit(1)
        return level

    def create_logger(self) -> Logger:
        """Builds a Logger from the config file, environment and command line options.
        Prints the error and exits with code 1 if the configuration is invalid."""
        try:
            return LoggingConfig.create_logger(self.config, file=self.file, stdout=self.stdout, level=self.level)
        except ValueError as e:
            self.elog(str(e))
            sys.exit(1)


pass_environment = click.make_pass_decorator(Environment, ensure=True)


class IMQSLOG(click.Group):
    def __init__(self, *args, **kwargs):
        # invoke_without_command=True lets us print usage when started without parameters
        kwargs["invoke_without_command"] = True
        click.Group.__init__(self, *args, **kwargs)

    def list_commands(self, context: click.Context):
        commands = []
        for filename in cmd_folder.iterdir():
            if filename.name.endswith(".py") and filename.name.startswith("cmd_"):
                commands.append(filename.name[4:-3])
        commands.sort()
        return commands

    def get_command(self, context: click.Context, name: str):
        try:
            mod = __import__(f"imqslog.commands.cmd_{name}", None, None, ["cli"])
        except ImportError:
            return None
        return mod.cli


@click.command(cls=IMQSLOG, context_settings=CONTEXT_SETTINGS)
@click.pass_context
@pass_environment
@click.option(
    "-c",
    "--config",
    type=click.Path(),
    metavar="",
    help="Optional path to a YAML file with a 'logging' section.",
)
@click.option("-f", "--file", metavar="", help="Log destination: stdout, stderr or a file path.")
@click.option(
    "--stdout",
    flag_value=True,
    default=None,
    help="Also write file logs to stdout.",
)
@click.option("-l", "--level", metavar="", help="Minimum level to log (trace, debug, info, warn, error).")
def cli(environment: Environment, context: click.core.Context, *args, **kwargs):
    """Leveled, rotating-file logging"""
    if not sys.argv[1:]:
        click.echo(TOOL_VERSION)
        click.echo(TOOL_USAGE)
        sys.exit(0)

    if not context.invoked_subcommand:
        click.echo(MISSING_COMMAND_SLOGAN)
        sys.exit(2)

    environment.set_parameters(context)
    if environment.level is not None:
        environment.resolve_level(environment.level)
