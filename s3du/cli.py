#!/usr/bin/env python3
"""
s3du: show the space used by S3 buckets

Usage:
    s3du size                      # Size every bucket in the current region
    s3du size my-bucket -m s3      # Size one bucket by listing its objects
    s3du size -o all --json        # Include every object version, JSON output
    s3du serve --port 8000         # Serve the same report over HTTP
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from s3du import __version__
from s3du.config import Backend, ObjectVersions
from s3du.core.logging import configure_logging
from s3du.core.settings import get_settings
from s3du.formatting import SizeUnit, format_size
from s3du.report import build_report
from s3du.sizer import SizerError, create_sizer, size_buckets, total_size

console = Console()
err_console = Console(stderr=True)


def cmd_size(args) -> int:
    """Discover buckets and print their sizes."""
    settings = get_settings()
    config = settings.client_config(
        region=args.region,
        backend=Backend(args.mode) if args.mode else None,
        object_versions=ObjectVersions(args.object_versions) if args.object_versions else None,
        bucket_name=args.bucket,
        endpoint_url=args.endpoint,
    )
    sizer = create_sizer(config)
    max_workers = args.max_workers or settings.max_workers
    unit = SizeUnit(args.unit)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
            transient=True,
        ) as progress:
            task = progress.add_task(f"Discovering buckets in {config.region}...", total=None)
            buckets = sizer.buckets()
            progress.update(task, description=f"Sizing {len(buckets)} bucket(s)...")
            results = size_buckets(
                sizer,
                buckets,
                max_workers=max_workers,
                skip_errors=args.skip_errors,
            )
    except SizerError as e:
        err_console.print(f"[red]{e}[/red]")
        return 1

    failed = [r for r in results if not r.ok]

    if args.json:
        print(build_report(config, results).model_dump_json(indent=2))
        return 1 if failed else 0

    if not results:
        err_console.print(f"[yellow]No buckets found in {config.region}.[/yellow]")
        return 0

    table = Table(title=f"S3 usage ({config.backend.value}, {config.region})")
    table.add_column("Bucket", style="cyan")
    table.add_column("Region", style="blue")
    table.add_column("Size", style="green", justify="right")
    if config.backend == Backend.CLOUDWATCH:
        table.add_column("Storage types", style="white")

    for result in sorted(results, key=lambda r: r.bucket.name):
        size = format_size(result.size, unit) if result.ok else "[red]error[/red]"
        row = [result.bucket.name, result.bucket.region or "", size]
        if config.backend == Backend.CLOUDWATCH:
            row.append(", ".join(result.bucket.storage_type_names()))
        table.add_row(*row)

    table.add_section()
    table.add_row("[bold]Total[/bold]", "", f"[bold]{format_size(total_size(results), unit)}[/bold]")
    console.print(table)

    for result in failed:
        err_console.print(f"[red]{result.error}[/red]")

    return 1 if failed else 0


def cmd_serve(args) -> int:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "s3du.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        workers=1,
        log_level="warning",
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3du",
        description="Show the space used by AWS S3 buckets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  cloudwatch  Read the daily BucketSizeBytes metric (cheap, up to a day old,
              StandardStorage only)
  s3          List every object in each bucket (exact, slow on big buckets)

Examples:
  s3du size
  s3du size -m cloudwatch -r eu-west-1
  s3du size my-bucket -o non-current -u decimal
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    size_parser = subparsers.add_parser("size", help="Print bucket sizes")
    size_parser.add_argument("bucket", nargs="?", help="Only size this bucket")
    size_parser.add_argument(
        "-m", "--mode",
        choices=[b.value for b in Backend],
        help="Where sizes come from (default: $S3DU_MODE or s3)",
    )
    size_parser.add_argument(
        "-r", "--region",
        help="Region to size buckets in (default: $AWS_REGION, $AWS_DEFAULT_REGION or us-east-1)",
    )
    size_parser.add_argument(
        "-o", "--object-versions",
        choices=[v.value for v in ObjectVersions],
        help="Object versions to count in s3 mode (default: current)",
    )
    size_parser.add_argument(
        "-u", "--unit",
        choices=[u.value for u in SizeUnit],
        default=SizeUnit.BINARY.value,
        help="Size units (default: binary)",
    )
    size_parser.add_argument(
        "-w", "--max-workers",
        type=int,
        help="Buckets sized in parallel (default: $S3DU_MAX_WORKERS or 8)",
    )
    size_parser.add_argument("-e", "--endpoint", help="Custom S3 endpoint URL")
    size_parser.add_argument("--json", action="store_true", help="Print a JSON report")
    size_parser.add_argument(
        "--fail-fast",
        dest="skip_errors",
        action="store_false",
        help="Stop at the first bucket that can't be sized",
    )

    serve_parser = subparsers.add_parser("serve", help="Serve bucket sizes over HTTP")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = get_settings()
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        return 2

    configure_logging(logging.DEBUG if args.verbose else settings.log_level)

    commands = {
        "size": cmd_size,
        "serve": cmd_serve,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
