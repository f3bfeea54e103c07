"""Transaction management commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error, handle_transition_error
from dealdesk.domain.entities import Transaction, TransactionStatus
from dealdesk.domain.errors import InvalidTransitionError
from dealdesk.domain.escrow import get_available_transitions
from dealdesk.domain.transaction import TransactionService
from dealdesk.domain.user import UserService
from dealdesk.utils.user_resolver import resolve_user

STATUS_CHOICES = click.Choice([s.value for s in TransactionStatus])


def _echo_transaction(txn: Transaction) -> None:
    click.echo(f"Transaction {txn.id} (deal {txn.deal_id})")
    if txn.offer_id is not None:
        click.echo(f"  Offer:         {txn.offer_id}")
    click.echo(f"  Status:        {txn.status.value}")
    click.echo(f"  Sale price:    ${txn.sale_price:,.2f}")
    click.echo(f"  Platform fee:  ${txn.platform_fee:,.2f} ({txn.platform_fee_percent}%)")
    if txn.escrow_amount is not None:
        click.echo(f"  Escrow amount: ${txn.escrow_amount:,.2f}")
    if txn.completed_at is not None:
        click.echo(f"  Completed at:  {txn.completed_at:%Y-%m-%d %H:%M}")
    available = get_available_transitions(txn.status)
    click.echo(f"  Next steps:    {', '.join(s.value for s in available) or 'none (final)'}")


@click.group()
def transaction_group():
    """Manage escrow transactions."""
    pass


@transaction_group.command("create")
@click.argument("offer_id", type=int)
@click.option("--wholesaler", help="Deal owner opening escrow (name or ID)")
@click.pass_context
def create_transaction(ctx, offer_id: int, wholesaler: str | None) -> None:
    """Open escrow for an accepted offer.

    Examples:
        dealdesk transaction create 4
        dealdesk transaction create 4 --wholesaler "Acme Wholesale"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    try:
        wholesaler_id = resolve_user(UserService(db), wholesaler) if wholesaler else None
        transaction_id = service.create_transaction(offer_id, wholesaler_id=wholesaler_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}")
    _echo_transaction(service.get_transaction(transaction_id))


@transaction_group.command("list")
@click.option("--user", help="Only transactions where this user is a party (name or ID)")
@click.option("--status", type=STATUS_CHOICES, help="Filter by status")
@click.pass_context
def list_transactions(ctx, user: str | None, status: str | None) -> None:
    """List transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    user_id = None
    if user is not None:
        try:
            user_id = resolve_user(UserService(db), user)
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

    transactions = service.list_transactions(user_id=user_id, status=status)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 72)
    for txn in transactions:
        click.echo(
            f"ID: {txn.id:3d} | Deal {txn.deal_id:3d} | {txn.status.value:14s} | "
            f"${txn.sale_price:>12,.2f} | Fee ${txn.platform_fee:,.2f}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show a transaction and its possible next steps."""
    service = TransactionService(ctx.obj["db"])
    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)
        return
    _echo_transaction(txn)


@transaction_group.command("advance")
@click.argument("transaction_id", type=int)
@click.argument("status", type=STATUS_CHOICES)
@click.pass_context
def advance_transaction(ctx, transaction_id: int, status: str) -> None:
    """Move a transaction to its next status.

    Examples:
        dealdesk transaction advance 1 under_review
        dealdesk transaction advance 1 completed
    """
    service = TransactionService(ctx.obj["db"])
    try:
        txn = service.advance_status(transaction_id, status)
    except InvalidTransitionError as e:
        handle_transition_error(ctx, e)
        return
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Transaction {transaction_id} is now {txn.status.value}")


@transaction_group.command("timeline")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_timeline(ctx, transaction_id: int) -> None:
    """Show every status a transaction has been in."""
    service = TransactionService(ctx.obj["db"])
    try:
        timeline = service.get_timeline(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nTimeline for transaction {transaction_id}:")
    click.echo("-" * 40)
    for entry in timeline:
        click.echo(f"{entry.timestamp:%Y-%m-%d %H:%M:%S} | {entry.status.value}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
