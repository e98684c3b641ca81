#!/usr/bin/env python3
"""
DNS Zone Manager - Command Line Interface

Main entry point for the DNS Zone Manager CLI.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..core.dns_manager import DNSManager
from ..core.record_manager import RecordManager
from ..exceptions import DNSError
from ..parsers.zonefile import ZoneFileParser, filter_records
from ..utils.config import DEFAULT_CONFIG_PATH, config_logger, load_config

console = Console()
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="DNS Zone Manager - Managed DNS zone record management"
    )
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help=f"Configuration file path (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--skip-soa", action="store_true", help="Do not update the zone's SOA serial"
    )
    parser.add_argument(
        "--soa-serial", type=int, help="Use this SOA serial instead of incrementing"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("zones", help="List managed zones")

    records = commands.add_parser("records", help="List records in a zone")
    records.add_argument("zone")
    records.add_argument("--name")
    records.add_argument("--type")

    changes = commands.add_parser("changes", help="List changes made to a zone")
    changes.add_argument("zone")
    changes.add_argument("--order", choices=["asc", "desc"])

    for command in ("add", "replace"):
        sub = commands.add_parser(command, help=f"{command.capitalize()} a record")
        sub.add_argument("zone")
        sub.add_argument("name")
        sub.add_argument("type")
        sub.add_argument("ttl", type=int)
        sub.add_argument("data", nargs="+")

    remove = commands.add_parser("remove", help="Remove records by name and type")
    remove.add_argument("zone")
    remove.add_argument("name")
    remove.add_argument("type")

    export = commands.add_parser("export", help="Export a zone to a zone file")
    export.add_argument("zone")
    export.add_argument("path")

    importer = commands.add_parser("import", help="Import records from a zone file")
    importer.add_argument("zone")
    importer.add_argument("path")
    importer.add_argument("--only", nargs="+", help="Record types to import")
    importer.add_argument("--exclude", nargs="+", help="Record types to skip")
    importer.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be changed without making changes",
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        config_logger(config, verbose=args.verbose)
        manager = DNSManager(config)
        run_command(manager, args)
    except (DNSError, ValueError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if args.verbose:
            console.print_exception()
        sys.exit(1)

    sys.exit(0)


def run_command(manager: DNSManager, args):
    """Dispatch a parsed command."""
    if args.command == "zones":
        display_zones(manager.zones().all())
        return

    zone = manager.zone(args.zone)
    if zone is None:
        raise DNSError(f"Zone '{args.zone}' not found")

    options = {"skip_soa": args.skip_soa, "soa_serial": args.soa_serial}

    if args.command == "records":
        display_records(zone.records(args.name, args.type).all(), title=f"Records in {zone.dns}")
    elif args.command == "changes":
        display_changes(zone.changes(order=args.order).all())
    elif args.command == "add":
        report_change(zone.add(args.name, args.type, args.ttl, args.data, **options))
    elif args.command == "replace":
        report_change(zone.replace(args.name, args.type, args.ttl, args.data, **options))
    elif args.command == "remove":
        report_change(zone.remove(args.name, args.type, **options))
    elif args.command == "export":
        zone.export(args.path)
        console.print(f"[green]Zone {zone.dns} exported to {args.path}[/green]")
    elif args.command == "import":
        if args.dry_run:
            records = filter_records(
                ZoneFileParser(zone.dns).parse(args.path), only=args.only, exclude=args.exclude
            )
            planned = RecordManager().diff(records, [])
            console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")
            display_records(planned.additions, title="Records to add")
            return
        report_change(
            zone.import_records(args.path, only=args.only, exclude=args.exclude, **options)
        )


def report_change(change):
    if change is None:
        console.print("[green]No changes required - DNS records are up to date[/green]")
        return
    console.print(f"[green]Change {change.id} submitted ({change.status})[/green]")
    display_records(change.additions, title="Additions")
    display_records(change.deletions, title="Deletions")


def display_zones(zones):
    table = Table(title="Managed Zones")
    table.add_column("Name", style="cyan")
    table.add_column("DNS", style="magenta")
    table.add_column("Description", style="white")
    for zone in zones:
        table.add_row(zone.name, zone.dns, zone.description)
    console.print(table)


def display_records(records, title: str = "Records"):
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("TTL", style="yellow")
    table.add_column("Data", style="white")
    for record in records:
        table.add_row(record.name, record.type, str(record.ttl), "\n".join(record.data))
    console.print(table)


def display_changes(changes):
    table = Table(title="Changes")
    table.add_column("Id", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Additions", style="green")
    table.add_column("Deletions", style="red")
    for change in changes:
        table.add_row(
            change.id, change.status or "", str(len(change.additions)), str(len(change.deletions))
        )
    console.print(table)


if __name__ == "__main__":
    main()
