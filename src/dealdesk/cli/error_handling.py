"""CLI error handling helpers."""

import click

from dealdesk.domain.errors import DomainError, InvalidTransitionError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_transition_error(ctx: click.Context, error: InvalidTransitionError) -> None:
    """Render a rejected status change with the moves that are still possible."""
    click.echo(f"Error: cannot move from '{error.current}' to '{error.target}'", err=True)
    if error.available:
        click.echo(f"Available transitions: {', '.join(error.available)}", err=True)
    else:
        click.echo(f"'{error.current}' is a final status; no further transitions", err=True)
    ctx.exit(1)
