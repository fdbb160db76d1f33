import click

from imqslog.cli import pass_environment, CONTEXT_SETTINGS, Environment


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("text")
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, text: str):
    """Show which level a name is interpreted as

    Only the first character counts, so "warn", "Warning" and "w" are all
    the same level.
    """
    level = environment.resolve_level(text)
    environment.log(f"{level.display_name} [{level.tag}]")
