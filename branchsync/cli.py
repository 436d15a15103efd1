"""CLI entry point for branch-sync."""

import sys
from typing import NoReturn

import click

from . import __version__
from .config import (
    DEFAULT_API_URL,
    DEFAULT_DESCRIPTION,
    DEFAULT_TIMEOUT,
    DEFAULT_TITLE,
    ExitCode,
    MergeConfig,
)
from .connectors import BitbucketConnector, ConnectorError


class UsageOnEmptyCommand(click.Command):
    """Command that prints its help and exits with the usage code when given no arguments."""

    def parse_args(self, ctx: click.Context, args: list) -> list:
        if not args:
            click.echo(ctx.get_help())
            ctx.exit(ExitCode.USAGE)
        return super().parse_args(ctx, args)


def _fail(message: str, code: ExitCode) -> NoReturn:
    click.echo(click.style("Error: ", fg="red", bold=True) + message, err=True)
    sys.exit(int(code))


@click.command(cls=UsageOnEmptyCommand)
@click.version_option(version=__version__, prog_name="branch-sync")
@click.option("--source", "-s", help="Source branch to merge from")
@click.option("--destination", "-d", help="Destination branch to merge into")
@click.option(
    "--user",
    "-u",
    envvar="BITBUCKET_USER",
    help="Bitbucket username (or set BITBUCKET_USER env var)",
)
@click.option(
    "--password",
    "-p",
    envvar="BITBUCKET_PASSWORD",
    help="Bitbucket password or app password (or set BITBUCKET_PASSWORD env var)",
)
@click.option(
    "--repo-owner",
    envvar="BITBUCKET_REPO_OWNER",
    help="Repository owner / workspace (or set BITBUCKET_REPO_OWNER env var)",
)
@click.option(
    "--repo-slug",
    envvar="BITBUCKET_REPO_SLUG",
    help="Repository slug (or set BITBUCKET_REPO_SLUG env var)",
)
@click.option(
    "--api-url",
    envvar="BITBUCKET_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="Bitbucket REST API base URL",
)
@click.option("--title", default=DEFAULT_TITLE, show_default=True, help="Pull request title")
@click.option("--description", default=DEFAULT_DESCRIPTION, help="Pull request description")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Per-request timeout in seconds",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def cli(
    source: str,
    destination: str,
    user: str,
    password: str,
    repo_owner: str,
    repo_slug: str,
    api_url: str,
    title: str,
    description: str,
    timeout: float,
    verbose: bool,
):
    """Create a pull request between two branches and merge it.

    Meant for CI pipelines that keep branches in sync. If Bitbucket reports
    there is nothing to pull, the run succeeds without merging.

    \b
    Example:
        branch-sync -s main -d develop
        branch-sync -s release -d main -u ci-bot -p $APP_PASSWORD \\
            --repo-owner acme --repo-slug shop
    """
    config = MergeConfig(
        source=source,
        destination=destination,
        user=user,
        password=password,
        repo_owner=repo_owner,
        repo_slug=repo_slug,
        api_url=api_url,
        title=title,
        description=description,
        timeout=timeout,
    )

    if not config.source:
        _fail("Source branch is required. Use --source/-s.", ExitCode.MISSING_SOURCE)
    if not config.destination:
        _fail("Destination branch is required. Use --destination/-d.", ExitCode.MISSING_DESTINATION)

    missing = config.missing_dependencies()
    if missing:
        _fail(
            "Missing " + ", ".join(missing) + ". Pass the flags or set the "
            "BITBUCKET_USER, BITBUCKET_PASSWORD, BITBUCKET_REPO_OWNER and "
            "BITBUCKET_REPO_SLUG env vars.",
            ExitCode.MISSING_DEPENDENCY,
        )

    connector = BitbucketConnector.from_config(config)

    click.echo(
        f"Creating pull request {config.source} -> {config.destination} "
        f"in {config.repo_owner}/{config.repo_slug}..."
    )
    if verbose:
        click.echo(f"  POST {connector.pullrequests_url} (user: {config.user})")

    try:
        result = connector.create_pull_request(
            source=config.source,
            destination=config.destination,
            title=config.title,
            description=config.description,
            close_source_branch=config.close_source_branch,
        )
    except ConnectorError as e:
        _fail(str(e), ExitCode.API_FAILURE)

    if verbose and result.status_code is not None:
        click.echo(f"  HTTP {result.status_code}")

    if not result.success:
        _fail(result.error, ExitCode.API_FAILURE)

    if result.no_changes:
        click.echo(
            click.style("Nothing to merge: ", fg="yellow")
            + f"{config.destination} already contains {config.source}."
        )
        return

    if result.pr_id is not None:
        click.echo(f"  Created pull request #{result.pr_id}")
    else:
        click.echo("  Created pull request")
    if result.html_url:
        click.echo(f"  {result.html_url}")

    click.echo("Merging pull request...")
    if verbose:
        click.echo(f"  POST {result.merge_url}")

    try:
        connector.merge_pull_request(
            result.merge_url,
            close_source_branch=config.close_source_branch,
        )
    except ConnectorError as e:
        _fail(str(e), ExitCode.API_FAILURE)

    click.echo(
        click.style("✓ Merged ", fg="green", bold=True)
        + f"{config.source} into {config.destination}"
    )


# Keep 'main' as the console script name
main = cli


if __name__ == "__main__":
    cli()
