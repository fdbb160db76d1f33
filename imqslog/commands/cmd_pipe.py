import click

from imqslog.cli import pass_environment, CONTEXT_SETTINGS, Environment
from imqslog.forwarder import Forwarder


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--strip-prefix",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    metavar="",
    help="Number of leading characters to drop from every line, e.g. an upstream timestamp.",
)
@click.option(
    "--as",
    "as_level",
    metavar="",
    default="info",
    show_default=True,
    help="Level assigned to every forwarded line.",
)
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, strip_prefix: int, as_level: str):
    """Forward lines read from stdin into the log

    Example:
        myservice 2>&1 | imqslog -f /var/log/imqs/myservice.log pipe --strip-prefix 20
    """
    level = environment.resolve_level(as_level)
    stdin = click.get_text_stream("stdin")
    with environment.create_logger() as log:
        forwarder = Forwarder(strip_prefix, level, log)
        for line in stdin:
            forwarder.write(line)
