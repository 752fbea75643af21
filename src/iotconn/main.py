import typer

from iotconn.commands import config, logs
from iotconn.commands.inspect import parse_connection_string
from iotconn.commands.params import check_params
from iotconn.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]iotconn[/bold blue] - IoT hub connection string toolkit",
    rich_markup_mode="rich",
)

# Add command groups
app.add_typer(config.app, name="config")
app.add_typer(logs.app, name="logs")

# Add standalone commands
app.command("parse")(parse_connection_string)
app.command("check-params")(check_params)


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]iotconn[/bold blue] - IoT hub connection string toolkit

    Validate service and device connection strings and see which
    authentication method they resolve to.
    """
    if not ctx.invoked_subcommand:
        print("Welcome to iotconn! To proceed type iotconn --help")


def main():
    # Initialize logging early
    setup_logging()
    logger = get_logger("iotconn.main")
    logger.info("iotconn CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("iotconn CLI finished")


if __name__ == "__main__":
    main()
