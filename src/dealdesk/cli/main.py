"""Main CLI entry point."""

import logging

import click
from dealdesk.database.factories import create_sqlite_database
from dealdesk.domain.matching import MatchingPolicy

# Import and register all commands at module level
from dealdesk.cli.commands import (
    user,
    deal,
    match,
    offer,
    transaction,
    rating,
    fee,
    calc,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    # SQL echo is noise even in verbose mode
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DEALDESK_DB_PATH environment variable)",
    envvar="DEALDESK_DB_PATH",
)
@click.option(
    "--min-match",
    type=click.IntRange(0, 100),
    default=20,
    show_default=True,
    envvar="DEALDESK_MIN_MATCH",
    help="Drop matches at or below this percentage",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, min_match: int, verbose: bool):
    """Dealdesk - wholesale real-estate marketplace.

    Wholesalers list deals, investors get matched to them, and sales move
    through escrow to completion and ratings.
    """
    ctx.ensure_object(dict)
    _configure_logging(verbose)
    ctx.obj["matching_policy"] = MatchingPolicy(min_match_percentage=min_match)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
deal.register_commands(cli)
match.register_commands(cli)
offer.register_commands(cli)
transaction.register_commands(cli)
rating.register_commands(cli)
fee.register_commands(cli)
calc.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
