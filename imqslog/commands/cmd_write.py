import click

from imqslog.cli import pass_environment, CONTEXT_SETTINGS, Environment


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--as",
    "as_level",
    metavar="",
    default="info",
    show_default=True,
    help="Level the message is logged at.",
)
@click.argument("message", nargs=-1, required=True)
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, as_level: str, message):
    """Log a single message"""
    level = environment.resolve_level(as_level)
    with environment.create_logger() as log:
        log.log(level, " ".join(message))
