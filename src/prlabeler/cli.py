"""CLI entry point for prlabeler.

`prlabeler run` is what the GitHub Action executes on pull_request events.
Inputs come from options, their environment variables, or a YAML file,
in that order of precedence.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import httpx

from prlabeler.config import ConfigurationError, LabelerConfig, load_config_file
from prlabeler.extractor import extract_tickets
from prlabeler.github import (
    EventContextError,
    GitHubError,
    PullRequestClient,
    PullRequestRef,
    TagApplier,
)
from prlabeler.logging import sanitize_for_log, setup_logging
from prlabeler.reconciler import ReconcileSummary, Reconciler
from prlabeler.tracker import TrackerClient, TrackerError

logger = logging.getLogger("prlabeler.cli")


def escape_command_data(message: str) -> str:
    """Escape a message for use in a GitHub Actions workflow command."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def report_failure(message: str) -> None:
    """Record the run as failed, the way actions/core setFailed does."""
    message = sanitize_for_log(message)
    logger.error("Run failed: %s", message)
    click.echo(f"::error::{escape_command_data(message)}")


def resolve_pull_request(
    repository: str | None, event_path: Path | None, pr_number: int | None
) -> PullRequestRef:
    """Work out which pull request to label.

    Raises:
        EventContextError: If the repository or pull request cannot be determined.
    """
    if not repository:
        raise EventContextError("Repository not set; pass --repo or set GITHUB_REPOSITORY")
    if pr_number is not None:
        return PullRequestRef.from_repository(repository, pr_number)
    if event_path is None:
        raise EventContextError("No pull request given; pass --pr or set GITHUB_EVENT_PATH")
    return PullRequestRef.from_event(event_path, repository)


@click.group()
@click.version_option(package_name="jira-pr-labeler")
def main() -> None:
    """Label pull requests from the Jira tickets named in their commits."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="PRLABELER_CONFIG",
    help="YAML file with input values (overridden by options)",
)
@click.option("--github-token", envvar="GITHUB_TOKEN", help="GitHub token")
@click.option(
    "--github-labels",
    envvar="PRLABELER_GITHUB_LABELS",
    help="Comma-separated GitHub labels, matched by position",
)
@click.option(
    "--jira-labels",
    envvar="PRLABELER_JIRA_LABELS",
    help="Comma-separated Jira labels, one per GitHub label",
)
@click.option(
    "--jira-components",
    envvar="PRLABELER_JIRA_COMPONENTS",
    help="Comma-separated Jira components, one per GitHub label",
)
@click.option(
    "--jira-api-url",
    envvar="PRLABELER_JIRA_API_URL",
    help="Jira REST API URL, e.g. https://jira.example.com/rest/api/2",
)
@click.option(
    "--jira-auth-token",
    envvar="PRLABELER_JIRA_AUTH_TOKEN",
    help="Jira credential as user:token",
)
@click.option(
    "--jira-token-encoded",
    is_flag=True,
    default=None,
    envvar="PRLABELER_JIRA_TOKEN_ENCODED",
    help="The Jira credential is already base64-encoded",
)
@click.option("--repo", "repository", envvar="GITHUB_REPOSITORY", help="Repository as owner/repo")
@click.option(
    "--event-path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="GITHUB_EVENT_PATH",
    help="GitHub Actions event payload",
)
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number")
@click.option(
    "--github-api-url",
    envvar="GITHUB_API_URL",
    default="https://api.github.com",
    show_default=True,
    help="GitHub API base URL",
)
@click.option("--timeout", type=float, default=None, help="Jira request timeout in seconds")
@click.option("--dedupe", is_flag=True, help="Write each label at most once per run")
@click.option("--dry-run", is_flag=True, help="Log label changes without making them")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug output")
def run(
    config_path: Path | None,
    github_token: str | None,
    github_labels: str | None,
    jira_labels: str | None,
    jira_components: str | None,
    jira_api_url: str | None,
    jira_auth_token: str | None,
    jira_token_encoded: bool | None,
    repository: str | None,
    event_path: Path | None,
    pr_number: int | None,
    github_api_url: str,
    timeout: float | None,
    dedupe: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Add GitHub labels for the Jira tickets referenced by a pull request."""
    setup_logging(verbose=verbose)

    try:
        file_values = load_config_file(config_path) if config_path else {}
        config = LabelerConfig.from_inputs(
            github_token=github_token or file_values.get("github-token"),
            github_labels=github_labels or file_values.get("github-labels"),
            jira_api_url=jira_api_url or file_values.get("jira-api-url"),
            jira_auth_token=jira_auth_token or file_values.get("jira-auth-token"),
            jira_labels=jira_labels or file_values.get("jira-labels"),
            jira_components=jira_components or file_values.get("jira-components"),
            jira_token_encoded=bool(
                jira_token_encoded
                if jira_token_encoded is not None
                else file_values.get("jira-token-encoded", False)
            ),
        )
        pull_request = resolve_pull_request(repository, event_path, pr_number)
        logger.debug(
            "Owner: '%s', Repo: '%s', Pull Request Number '%d'",
            pull_request.owner,
            pull_request.repo,
            pull_request.number,
        )

        with (
            PullRequestClient(config.github_token, base_url=github_api_url) as github,
            TrackerClient(
                config.jira_api_url,
                config.jira_auth_token,
                credential_encoded=config.jira_token_encoded,
                timeout=timeout,
            ) as tracker,
        ):
            existing_tags = github.get_labels(pull_request)
            tickets = extract_tickets(github.list_commit_messages(pull_request))
            if not tickets:
                logger.info("No Jira tickets found in the commits of PR #%d", pull_request.number)
                return

            applier = TagApplier(
                github, pull_request, existing_tags, dedupe=dedupe, dry_run=dry_run
            )
            reconciler = Reconciler(
                tracker,
                applier,
                label_mappings=config.label_mappings,
                component_mappings=config.component_mappings,
            )
            decisions = reconciler.reconcile(tickets)

        summary = ReconcileSummary.from_decisions(tickets, decisions)
        logger.info(
            "Checked %d ticket(s): %d match(es), %d label write(s) %s",
            summary.tickets,
            summary.matches,
            summary.writes,
            summary.labels_added,
        )

    except ConfigurationError as e:
        report_failure(f"Configuration error: {e}")
        sys.exit(1)
    except (GitHubError, TrackerError) as e:
        report_failure(str(e))
        sys.exit(1)
    except httpx.HTTPError as e:
        report_failure(f"HTTP error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        report_failure(f"Unexpected error: {e}")
        sys.exit(1)


@main.command()
@click.argument("messages", nargs=-1)
def extract(messages: tuple[str, ...]) -> None:
    """Print the Jira ticket ids found in MESSAGES (or stdin)."""
    if not messages:
        messages = (click.get_text_stream("stdin").read(),)
    for ticket in sorted(extract_tickets(messages)):
        click.echo(ticket)


if __name__ == "__main__":
    main()
