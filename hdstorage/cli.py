"""
Command-line tool for files in HDInsight cluster storage.

Usage:
    hdstorage env
    hdstorage storage MyCluster --show-keys
    hdstorage ls MyCluster example/data/
    hdstorage put MyCluster ./data.txt example/data/ --overwrite
    hdstorage get MyCluster wasb:///example/data/data.txt ./data.txt
    hdstorage rm MyCluster example/data/ --recursive
"""

import functools
from pathlib import Path

import click
import structlog
from azure.core.exceptions import AzureError

from hdstorage.cloud import get_cloud
from hdstorage.cluster import HDInsightClusterMetadata
from hdstorage.config import configure_logging, get_settings
from hdstorage.errors import BlobNotFound, HDStorageError
from hdstorage.models import ResolvedAddress
from hdstorage.operations import StorageOperations
from hdstorage.session import get_session
from hdstorage.storage import WasbPath

logger = structlog.get_logger(__name__)


def mask_key(key: str) -> str:
    """Show only the last four characters of an account key."""
    if len(key) <= 4:
        return "*" * len(key)
    return "*" * 8 + key[-4:]


def build_operations() -> StorageOperations:
    """Wire the session, HDInsight metadata client and blob client factory."""
    session = get_session()
    metadata_service = HDInsightClusterMetadata(session)
    return StorageOperations(session, metadata_service)


def get_operations(ctx: click.Context) -> StorageOperations:
    ctx.ensure_object(dict)
    if "operations" not in ctx.obj:
        ctx.obj["operations"] = build_operations()
    return ctx.obj["operations"]


def handle_errors(func):
    """Report hdstorage, Azure SDK and local file errors as click errors (exit code 1)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HDStorageError as e:
            logger.debug("Command failed", error=str(e), error_type=type(e).__name__)
            raise click.ClickException(str(e)) from e
        except AzureError as e:
            logger.error("Azure request failed", error=str(e), error_type=type(e).__name__)
            message = getattr(e, "message", None) or str(e)
            raise click.ClickException(f"Azure request failed: {message}") from e
        except OSError as e:
            logger.error("Local file operation failed", error=str(e))
            raise click.ClickException(str(e)) from e

    return wrapper


def addressing_options(func):
    """Options for addressing a non-default account or container."""
    func = click.option(
        "--container",
        default=None,
        help="Container to use instead of the cluster's default container",
    )(func)
    func = click.option(
        "--storage-account",
        default=None,
        help="Storage account bound to the cluster (default: cluster's default account)",
    )(func)
    return func


def format_uri(address: ResolvedAddress) -> str:
    suffix = get_cloud(address.cloud_environment).storage_endpoint_suffix
    return WasbPath.to_uri(address.container, address.account_name, address.blob_key, suffix)


@click.group()
@click.option("--log-level", default=None, help="Log level (default: LOG_LEVEL setting)")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """Copy, list, fetch and delete files in HDInsight cluster storage."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_output=settings.log_format == "json",
    )
    ctx.ensure_object(dict)


@main.command()
@click.pass_context
def env(ctx: click.Context):
    """Show the active subscription and cloud environment."""
    session = ctx.obj.get("session") or get_session()
    click.echo(f"Subscription:      {session.subscription_id or '(not set)'}")
    click.echo(f"Cloud environment: {session.current_environment_name()}")
    click.echo(f"Resource group:    {session.resource_group or '(any)'}")
    click.echo(f"Session active:    {'yes' if session.has_active_session() else 'no'}")


@main.command()
@click.argument("cluster")
@click.option("--show-keys", is_flag=True, help="Print account keys in full")
@click.pass_context
@handle_errors
def storage(ctx: click.Context, cluster: str, show_keys: bool):
    """List the storage accounts and keys bound to CLUSTER."""
    operations = get_operations(ctx)
    directory = operations.describe_cluster_storage(cluster)

    click.echo(f"Cluster:           {directory.cluster_name}")
    click.echo(f"Default account:   {directory.default_account_name}")
    click.echo(f"Default container: {directory.default_container}")
    click.echo("Accounts:")
    for name, key in directory.accounts.items():
        shown = key if show_keys else mask_key(key)
        marker = " (default)" if directory.is_default(name) else ""
        click.echo(f"  {name}{marker}: {shown}")


@main.command()
@click.argument("cluster")
@click.argument("path", default="")
@addressing_options
@click.pass_context
@handle_errors
def resolve(ctx: click.Context, cluster: str, path: str, storage_account, container):
    """Print the fully qualified wasbs:// URI for PATH."""
    operations = get_operations(ctx)
    address = operations.resolve(path, cluster, storage_account, container)
    click.echo(format_uri(address))


@main.command("ls")
@click.argument("cluster")
@click.argument("path", default="")
@click.option("--long", "-l", "long_format", is_flag=True, help="Show size and last modified time")
@addressing_options
@click.pass_context
@handle_errors
def list_command(
    ctx: click.Context,
    cluster: str,
    path: str,
    long_format: bool,
    storage_account,
    container,
):
    """List blobs under PATH (a key or key prefix)."""
    operations = get_operations(ctx)
    address = operations.resolve(path, cluster, storage_account, container)

    count = 0
    for blob in operations.list(address):
        count += 1
        if long_format:
            modified = blob.last_modified.isoformat() if blob.last_modified else "-"
            click.echo(f"{blob.size or 0:>12}  {modified}  {blob.key}")
        else:
            click.echo(blob.key)
    logger.debug("Listed blobs", container=address.container, prefix=address.blob_key, count=count)


@main.command()
@click.argument("cluster")
@click.argument("local", type=click.Path(path_type=Path))
@click.argument("path", default="")
@click.option("--overwrite", is_flag=True, help="Replace the blob if it already exists")
@addressing_options
@click.pass_context
@handle_errors
def put(
    ctx: click.Context,
    cluster: str,
    local: Path,
    path: str,
    overwrite: bool,
    storage_account,
    container,
):
    """Upload LOCAL to PATH (a trailing '/' keeps the local file name)."""
    operations = get_operations(ctx)
    blob = operations.upload(
        local,
        path,
        cluster,
        overwrite=overwrite,
        storage_account=storage_account,
        container=container,
    )
    click.echo(f"Uploaded {local} -> {blob.key} ({blob.size} bytes)")


@main.command()
@click.argument("cluster")
@click.argument("path")
@click.argument("local", type=click.Path(path_type=Path), default=".")
@click.option("--overwrite", is_flag=True, help="Replace the local file if it already exists")
@addressing_options
@click.pass_context
@handle_errors
def get(
    ctx: click.Context,
    cluster: str,
    path: str,
    local: Path,
    overwrite: bool,
    storage_account,
    container,
):
    """Download the blob at PATH to LOCAL (file or directory)."""
    operations = get_operations(ctx)
    address = operations.resolve(path, cluster, storage_account, container)

    target = local / WasbPath.get_name(address.blob_key) if local.is_dir() else local
    if not WasbPath.is_folder(address.blob_key) and target.exists() and not overwrite:
        raise click.ClickException(f"Local file '{target}' exists; use --overwrite to replace it")

    written = operations.get(address, target)
    click.echo(f"Downloaded {address.blob_key} -> {written}")


@main.command()
@click.argument("cluster")
@click.argument("path")
@click.option("--recursive", "-r", is_flag=True, help="Delete every blob under PATH as a prefix")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Do not ask before emptying a whole container")
@addressing_options
@click.pass_context
@handle_errors
def rm(
    ctx: click.Context,
    cluster: str,
    path: str,
    recursive: bool,
    assume_yes: bool,
    storage_account,
    container,
):
    """Delete the blob at PATH, or every blob under it with --recursive."""
    operations = get_operations(ctx)
    address = operations.resolve(path, cluster, storage_account, container)

    if not recursive:
        operations.delete(address)
        click.echo(f"Deleted {address.blob_key}")
        return

    # Snapshot the listing so deletes do not disturb paging
    keys = [blob.key for blob in operations.list(address)]
    if not keys:
        raise BlobNotFound(address.container, address.blob_key)

    if address.is_container_root and not assume_yes:
        click.confirm(
            f"Delete all {len(keys)} blobs in container '{address.container}'?",
            abort=True,
        )

    deleted = 0
    with click.progressbar(keys, label="Deleting blobs") as progress:
        for key in progress:
            operations.delete(address.with_blob_key(key))
            deleted += 1

    click.echo(f"Deleted {deleted} blobs under '{address.blob_key}'")


if __name__ == "__main__":
    main()
