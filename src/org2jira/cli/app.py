"""
CLI Application - Entry point of the org2jira command.

Usage:
    # Create an issue from a heading (dry-run by default)
    org2jira -f plan.org create --heading "Write importer" --execute

    # Pull story points, estimate and sprint into all linked headings
    org2jira -f plan.org refresh --execute

    # Log the clocked time of a heading as a worklog
    org2jira -f plan.org log-work --heading "Write importer" --execute

    # Show sprints of an issue / create fields of a project
    org2jira sprints PROJ-12
    org2jira -p PROJ fields

Environment Variables Required:
    JIRA_URL: Your Jira instance URL
    JIRA_USER: Your Jira user name
    JIRA_API_TOKEN: Your Jira API token or password
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional

from ..adapters.config import EnvironmentConfigProvider
from ..adapters.jira import JiraApiClient
from ..adapters.outline import OrgDocument, OrgHeading
from ..application.commands import (
    CommandBatch,
    CreateIssueCommand,
    LogWorkCommand,
    RefreshIssueCommand,
)
from ..application.metadata import IssueMetadataResolver
from ..core.domain.events import DomainEvent, EventBus
from ..core.domain.issue_requests import IssueRequestBuilder
from ..core.exceptions import (
    ConfigError,
    NotFoundError,
    Org2JiraError,
    ProjectNotFoundError,
    TransportError,
)
from ..core.ports.config_provider import AppConfig
from ..core.ports.transport import TransportPort
from .exit_codes import ExitCode
from .output import Console


@dataclass
class CliContext:
    """Everything a subcommand handler needs."""

    args: argparse.Namespace
    config: AppConfig
    transport: TransportPort
    builder: IssueRequestBuilder
    console: Console
    event_bus: EventBus


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="org2jira",
        description="Reconcile Org outline headings with Jira issues",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("--file", "-f", type=str, help="Path to the Org file")
    parser.add_argument("--project", "-p", type=str, help="Jira project key (or set JIRA_PROJECT)")
    parser.add_argument("--jira-url", type=str, help="Jira instance URL (or set JIRA_URL)")
    parser.add_argument(
        "--execute",
        action="store_true",
        default=None,
        help="Actually execute changes (default is dry-run)",
    )
    parser.add_argument("--no-confirm", action="store_true", help="Skip confirmation prompts")
    parser.add_argument("--verbose", "-v", action="store_true", default=None, help="Enable verbose logging")

    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create an issue from a heading")
    create.add_argument("--heading", required=True, help="Title of the heading")
    create.add_argument("--issue-type", help="Issue type name (or set JIRA_ISSUE_TYPE)")
    create.add_argument(
        "--check-fields",
        action="store_true",
        help="Check issue type and epic link against the project's create metadata",
    )

    refresh = sub.add_parser("refresh", help="Refresh heading properties from Jira")
    refresh.add_argument("--heading", help="Only refresh this heading (default: all linked)")

    log_work = sub.add_parser("log-work", help="Log time spent on a heading's issue")
    log_work.add_argument("--heading", required=True, help="Title of the heading")
    log_work.add_argument("--minutes", type=int, help="Minutes spent (default: clocked time)")
    log_work.add_argument("--comment", help="Worklog comment")

    sprints = sub.add_parser("sprints", help="Show the sprints of an issue")
    sprints.add_argument("issue_key", nargs="?", help="Issue key (or use --heading)")
    sprints.add_argument("--heading", help="Read the issue key from this heading")

    sub.add_parser("fields", help="Show create fields per issue type of the project")

    return parser


# -------------------------------------------------------------------------
# Subcommand Handlers
# -------------------------------------------------------------------------

def _load_document(ctx: CliContext) -> OrgDocument:
    if not ctx.config.org_path:
        raise ConfigError(["An Org file is required. Use --file or -f to specify."])
    return OrgDocument.from_file(ctx.config.org_path)


def _find_heading(ctx: CliContext, document: OrgDocument, title: str) -> Optional[OrgHeading]:
    heading = document.find(title)
    if heading is None:
        ctx.console.error(f"No heading titled '{title}'")
    return heading


def cmd_create(ctx: CliContext) -> int:
    if not ctx.config.tracker.project_key:
        raise ConfigError(["A project key is required. Use --project or set JIRA_PROJECT."])

    document = _load_document(ctx)
    heading = _find_heading(ctx, document, ctx.args.heading)
    if heading is None:
        return ExitCode.NOT_FOUND

    issue_type = ctx.args.issue_type or ctx.config.tracker.issue_type
    field_map = None
    if ctx.args.check_fields:
        field_map = IssueMetadataResolver(ctx.transport).resolve(ctx.config.tracker.project_key)

    command = CreateIssueCommand(
        transport=ctx.transport,
        builder=ctx.builder,
        node=heading,
        issue_type=issue_type,
        field_map=field_map,
        event_bus=ctx.event_bus,
        dry_run=ctx.config.dry_run,
    )
    result = command.execute()
    ctx.console.command_result(f"Create '{heading.title}'", result)

    if not result.success:
        return ExitCode.PRECONDITION_FAILED
    if not result.dry_run:
        document.save()
    return ExitCode.SUCCESS


def cmd_refresh(ctx: CliContext) -> int:
    document = _load_document(ctx)

    if ctx.args.heading:
        heading = _find_heading(ctx, document, ctx.args.heading)
        if heading is None:
            return ExitCode.NOT_FOUND
        headings = [heading]
    else:
        headings = document.linked_headings()

    batch = CommandBatch(stop_on_error=False)
    for heading in headings:
        batch.add(RefreshIssueCommand(
            transport=ctx.transport,
            builder=ctx.builder,
            node=heading,
            event_bus=ctx.event_bus,
        ))

    for heading, result in zip(headings, batch.execute_all()):
        ctx.console.command_result(f"Refresh '{heading.title}'", result)
        if result.success and result.data:
            for message in result.data.get("missing", []):
                ctx.console.detail(message)

    if ctx.config.dry_run:
        ctx.console.info("Dry-run: Org file not written. Use --execute to save.")
    elif batch.executed_count:
        document.save()

    return ExitCode.SUCCESS if batch.all_succeeded else ExitCode.ERROR


def cmd_log_work(ctx: CliContext) -> int:
    document = _load_document(ctx)
    heading = _find_heading(ctx, document, ctx.args.heading)
    if heading is None:
        return ExitCode.NOT_FOUND

    if ctx.args.minutes is not None:
        seconds = ctx.args.minutes * 60
    else:
        seconds = heading.clocked_seconds()

    command = LogWorkCommand(
        transport=ctx.transport,
        builder=ctx.builder,
        issue_key=heading.issue_key or "",
        seconds=seconds,
        comment=ctx.args.comment,
        event_bus=ctx.event_bus,
        dry_run=ctx.config.dry_run,
    )
    result = command.execute()
    ctx.console.command_result(f"Log {ctx.builder.codec.encode(seconds) or '0m'} on '{heading.title}'", result)
    return ExitCode.SUCCESS if result.success else ExitCode.PRECONDITION_FAILED


def cmd_sprints(ctx: CliContext) -> int:
    issue_key = ctx.args.issue_key
    if not issue_key and ctx.args.heading:
        heading = _find_heading(ctx, _load_document(ctx), ctx.args.heading)
        if heading is None:
            return ExitCode.NOT_FOUND
        issue_key = heading.issue_key

    if not issue_key:
        ctx.console.error("No issue key given")
        return ExitCode.PRECONDITION_FAILED

    sprint_field = ctx.builder.fields.sprint
    issue = ctx.transport.request("GET", f"issue/{issue_key}?fields={sprint_field}")
    ctx.console.sprints(issue_key, ctx.builder.extract_sprints(issue))
    return ExitCode.SUCCESS


def cmd_fields(ctx: CliContext) -> int:
    project_key = ctx.config.tracker.project_key
    if not project_key:
        raise ConfigError(["A project key is required. Use --project or set JIRA_PROJECT."])

    field_map = IssueMetadataResolver(ctx.transport).resolve(project_key)
    ctx.console.field_map(project_key, field_map)
    return ExitCode.SUCCESS


HANDLERS = {
    "create": cmd_create,
    "refresh": cmd_refresh,
    "log-work": cmd_log_work,
    "sprints": cmd_sprints,
    "fields": cmd_fields,
}


# -------------------------------------------------------------------------
# Main
# -------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    provider = EnvironmentConfigProvider(cli_overrides=vars(args))
    config = provider.load()

    setup_logging(config.verbose)
    logger = logging.getLogger("main")
    console = Console(verbose=config.verbose)

    errors = provider.validate()
    if errors:
        for error in errors:
            console.error(error)
        return ExitCode.CONFIG_ERROR

    if config.dry_run and args.command in ("create", "log-work"):
        console.dry_run_banner()
    elif not config.dry_run and args.command == "create" and not args.no_confirm:
        if not console.confirm("Create the issue in Jira?"):
            logger.info("Aborted.")
            return ExitCode.CANCELLED

    event_bus = EventBus()
    event_bus.subscribe(DomainEvent, console.event)

    try:
        transport = JiraApiClient(
            base_url=config.tracker.url,
            credentials=provider,
            dry_run=config.dry_run,
            timeout=config.tracker.timeout,
        )
        ctx = CliContext(
            args=args,
            config=config,
            transport=transport,
            builder=IssueRequestBuilder(
                project_key=config.tracker.project_key or "",
                fields=config.tracker.fields,
            ),
            console=console,
            event_bus=event_bus,
        )
        return int(HANDLERS[args.command](ctx))
    except ConfigError as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR
    except (NotFoundError, ProjectNotFoundError) as e:
        console.error(str(e))
        return ExitCode.NOT_FOUND
    except TransportError as e:
        logger.error(f"Jira request failed: {e}")
        return ExitCode.TRANSPORT_ERROR
    except Org2JiraError as e:
        logger.error(str(e))
        return ExitCode.ERROR
    except FileNotFoundError as e:
        console.error(f"File not found: {e.filename}")
        return ExitCode.NOT_FOUND


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
