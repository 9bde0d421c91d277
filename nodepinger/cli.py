"""CLI interface for nodepinger."""

import click
import sys
from typing import Optional
from loguru import logger
from .accounts import AccountManager
from .automation import PingAutomation
from .client import ApiClient
from .logger import setup_logging
from .models import Config
from .nodes import NodeManager
from .utils import format_timestamp, truncate, UNKNOWN


def build_config(accounts: Optional[str] = None, base_url: Optional[str] = None,
                 interval: Optional[float] = None) -> Config:
    """Load configuration from the environment and apply CLI overrides."""
    overrides = {}
    if accounts is not None:
        overrides["accounts_file"] = accounts
    if base_url is not None:
        overrides["base_url"] = base_url
    if interval is not None:
        overrides["interval_minutes"] = interval
    return Config(**overrides)


def make_client(cfg: Config) -> ApiClient:
    return ApiClient(
        cfg.base_url,
        timeout=cfg.request_timeout,
        max_retries=cfg.max_retries,
        retry_delay=cfg.retry_delay,
    )


def load_or_exit(cfg: Config) -> AccountManager:
    manager = AccountManager(cfg.accounts_file)
    if not manager.load_accounts():
        sys.exit(1)
    return manager


@click.group()
def cli():
    """nodepinger - keep account nodes alive"""
    pass


@cli.command()
@click.option("--interval", type=float, default=None, help="Minutes between ping cycles")
@click.option("--accounts", default=None, help="Path to the accounts file")
@click.option("--base-url", default=None, help="API base URL")
def start(interval: Optional[float], accounts: Optional[str], base_url: Optional[str]):
    """Start the ping automation.

    Example:
        nodepinger start --interval 5 --accounts data.txt
    """
    cfg = build_config(accounts, base_url, interval)
    setup_logging(cfg.log_level, cfg.log_prefix)

    automation = PingAutomation(cfg)
    automation.install_signal_handlers()
    try:
        automation.start()
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        automation.stop()
        sys.exit(1)
    finally:
        automation.api_client.close()


@cli.command()
@click.option("--base-url", default=None, help="API base URL")
def health(base_url: Optional[str]):
    """Run a single health check.

    Example:
        nodepinger health
    """
    cfg = build_config(base_url=base_url)
    setup_logging(cfg.log_level, cfg.log_prefix)

    with make_client(cfg) as client:
        healthy = client.health_check()
    if healthy:
        click.echo("✓ Service is healthy")
    else:
        click.echo("✗ Service is not healthy", err=True)
        sys.exit(1)


@cli.command()
@click.option("--accounts", default=None, help="Path to the accounts file")
def accounts(accounts: Optional[str]):
    """List loaded accounts with their decoded claims.

    Example:
        nodepinger accounts --accounts data.txt
    """
    cfg = build_config(accounts=accounts)
    setup_logging(cfg.log_level, cfg.log_prefix)
    manager = load_or_exit(cfg)

    rows = manager.describe_accounts()
    if not rows:
        click.echo("No accounts found")
        return

    length = cfg.truncate_length
    click.echo(f"\n{'Account':<16} {'User ID':<26} {'Issued':<20} {'Expires':<20}")
    click.echo("-" * 82)
    for account in rows:
        claims = account.claims
        user_id = (claims and claims.user_id) or UNKNOWN
        issued = format_timestamp(claims.iat if claims else None)
        expires = format_timestamp(claims.exp if claims else None)
        click.echo(f"{truncate(account.token, length):<16} {user_id:<26} {issued:<20} {expires:<20}")
    click.echo()


@cli.command()
@click.option("--accounts", default=None, help="Path to the accounts file")
@click.option("--base-url", default=None, help="API base URL")
def nodes(accounts: Optional[str], base_url: Optional[str]):
    """List the nodes registered to each account.

    Example:
        nodepinger nodes
    """
    cfg = build_config(accounts, base_url)
    setup_logging(cfg.log_level, cfg.log_prefix)
    manager = load_or_exit(cfg)

    length = cfg.truncate_length
    with make_client(cfg) as client:
        node_manager = NodeManager(client)
        for token in manager.get_accounts():
            try:
                found = node_manager.get_nodes(token)
            except ValueError as e:
                click.echo(f"✗ {truncate(token, length)}: {e}", err=True)
                continue
            click.echo(f"{truncate(token, length)}: {len(found)} node(s)")
            for node in found:
                click.echo(f"  {node.pub_key}")


@cli.group()
def config():
    """Inspect configuration"""
    pass


@config.command()
def show():
    """Show the effective configuration.

    Example:
        nodepinger config show
    """
    cfg = build_config()

    click.echo("\nCurrent Configuration:")
    for key, value in cfg.model_dump().items():
        click.echo(f"  {key.replace('_', '-') + ':':<18} {value}")
    click.echo()


if __name__ == "__main__":
    cli()
