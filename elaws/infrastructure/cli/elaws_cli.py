"""
e-Gov Law API Command-Line Interface.

Provides commands for:
- lawlists: List all laws
- lawdata: Fetch the full text of a law
- articles: Fetch an article, paragraph or appendix table
- updatelawlists: List laws updated on a date
- config: Show configuration
"""
import argparse
import asyncio
import base64
import json
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, List

from elaws.domain.elaws_value_objects import (
    LawType,
    LawNum,
    LawId,
    ArticleQuery,
    ParagraphQuery,
    ArticleParagraphQuery,
    AppdxTableQuery,
    ArticlesQuery,
    LawIdentifier,
)
from elaws.infrastructure.adapters.elaws_errors import ElawsError
from elaws.infrastructure.cli.elaws_config import ElawsConfig
from elaws.infrastructure.elaws_client import ElawsClient
from elaws.infrastructure.logging.elaws_logger import (
    ElawsLogger,
    LogLevel,
    configure_logging,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the e-Gov Law API CLI."""
    parser = argparse.ArgumentParser(
        prog="elaws",
        description="e-Gov Law API client - fetch Japanese laws as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s lawlists
  %(prog)s lawdata 322AC0000000067
  %(prog)s articles --law-num 昭和二十二年法律第六十七号 --article 1
  %(prog)s articles --law-id 322AC0000000067 --article 3 --paragraph 2
  %(prog)s updatelawlists 2024-04-01
  %(prog)s config --show
        """,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the JSON result to this file instead of stdout",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write JSON logs (DEBUG and above) to this file",
    )

    parser.add_argument(
        "--image-dir",
        type=str,
        default=None,
        help="Write ImageData (zipped pict folder) to DIR/<law id>.zip",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "lawlists",
        help="List all laws (法令名一覧取得)",
    )

    lawdata_parser = subparsers.add_parser(
        "lawdata",
        help="Fetch the full text of a law (法令取得)",
    )
    lawdata_parser.add_argument(
        "law",
        help="Law number or law ID",
    )

    articles_parser = subparsers.add_parser(
        "articles",
        help="Fetch article contents (条文内容取得)",
    )
    _add_articles_arguments(articles_parser)

    update_parser = subparsers.add_parser(
        "updatelawlists",
        help="List laws updated on a date (更新法令一覧取得)",
    )
    update_parser.add_argument(
        "date",
        type=_parse_date_arg,
        help="Update date as YYYY-MM-DD or YYYYMMDD (2020-11-24 or later)",
    )

    config_parser = subparsers.add_parser(
        "config",
        help="Show configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )

    return parser


def _add_articles_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the articles command."""
    law_group = parser.add_mutually_exclusive_group(required=True)
    law_group.add_argument(
        "--law-num",
        type=str,
        help="Law number (法令番号)",
    )
    law_group.add_argument(
        "--law-id",
        type=str,
        help="Law ID (法令ID)",
    )

    parser.add_argument(
        "--article",
        type=str,
        default=None,
        help="Article (条)",
    )
    parser.add_argument(
        "--paragraph",
        type=str,
        default=None,
        help="Paragraph (項)",
    )
    parser.add_argument(
        "--appdx-table",
        type=str,
        default=None,
        help="Appendix table title, matched by prefix (別表)",
    )


def _parse_date_arg(value: str) -> date:
    """Parse YYYY-MM-DD or YYYYMMDD."""
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise argparse.ArgumentTypeError(f"Invalid date '{value}': expected YYYY-MM-DD or YYYYMMDD")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def build_law_identifier(args: argparse.Namespace) -> LawIdentifier:
    """Map --law-num / --law-id to a domain identifier."""
    if args.law_num is not None:
        return LawNum(args.law_num)
    return LawId(args.law_id)


def requested_identifier(args: argparse.Namespace) -> str:
    """The law number or ID given on the command line, if any."""
    for name in ("law", "law_num", "law_id"):
        value = getattr(args, name, None)
        if value:
            return value
    return ""


def build_articles_query(args: argparse.Namespace) -> ArticlesQuery:
    """
    Map articles options onto exactly one query shape.

    Raises:
        ValueError: If the options match none of the four shapes
    """
    article, paragraph, appdx_table = args.article, args.paragraph, args.appdx_table

    if appdx_table:
        if article or paragraph:
            raise ValueError("--appdx-table cannot be combined with --article or --paragraph")
        return AppdxTableQuery(appdx_table)
    if article and paragraph:
        return ArticleParagraphQuery(article, paragraph)
    if article:
        return ArticleQuery(article)
    if paragraph:
        return ParagraphQuery(paragraph)
    raise ValueError("One of --article, --paragraph or --appdx-table is required")


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    json_output: bool = False,
    default_level: str = "INFO",
    log_file: Optional[str] = None,
) -> ElawsLogger:
    """Configure logging for CLI."""
    try:
        level = LogLevel(default_level.upper())
    except ValueError:
        level = LogLevel.INFO
    if verbose:
        level = LogLevel.DEBUG
    elif quiet:
        level = LogLevel.WARNING
    configure_logging(
        level=level,
        json_output=json_output,
        log_file=Path(log_file) if log_file else None,
    )
    return ElawsLogger("cli")


def write_images(
    record: Any,
    image_dir: str,
    logger: ElawsLogger,
    requested: str = "",
) -> Optional[Path]:
    """
    Decode ImageData, when present, to DIR/<name>.zip.

    The name is the echoed law ID, else the law number, else the
    identifier the user asked for. The API leaves LawId empty when a
    law is looked up by number.
    """
    image_data = getattr(record, "image_data", None)
    if image_data is None:
        return None

    target_dir = Path(image_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    name = record.law_id or record.law_num or requested
    target = target_dir / f"{name}.zip"
    target.write_bytes(base64.b64decode(image_data))
    logger.info(f"Images written to {target}")
    return target


def emit_result(record: Any, output: Optional[str]) -> None:
    """Print the record as JSON, or write it to output."""
    payload = json.dumps(record.to_dict(), ensure_ascii=False, indent=2)
    if output:
        Path(output).write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)


async def run_lawlists(client: ElawsClient, args: argparse.Namespace):
    """Execute the lawlists command."""
    return await client.list_laws(LawType.ALL)


async def run_lawdata(client: ElawsClient, args: argparse.Namespace):
    """Execute the lawdata command."""
    return await client.get_law(args.law)


async def run_articles(client: ElawsClient, args: argparse.Namespace):
    """Execute the articles command."""
    return await client.get_articles(build_law_identifier(args), build_articles_query(args))


async def run_updatelawlists(client: ElawsClient, args: argparse.Namespace):
    """Execute the updatelawlists command."""
    return await client.list_updated_laws(args.date)


COMMANDS = {
    "lawlists": run_lawlists,
    "lawdata": run_lawdata,
    "articles": run_articles,
    "updatelawlists": run_updatelawlists,
}


async def main_async(args: Optional[List[str]] = None, client: Optional[ElawsClient] = None) -> int:
    """Async main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 0

    if parsed_args.command == "articles":
        try:
            build_law_identifier(parsed_args)
            build_articles_query(parsed_args)
        except ValueError as e:
            parser.error(str(e))

    # Load configuration
    config = ElawsConfig.from_env()
    logger = setup_logging(
        verbose=parsed_args.verbose,
        quiet=parsed_args.quiet,
        json_output=parsed_args.json_logs or config.json_logs,
        default_level=config.log_level,
        log_file=parsed_args.log_file,
    )

    if parsed_args.command == "config":
        if parsed_args.show:
            print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
        else:
            print("Use --show to display the current configuration")
        return 0

    handler = COMMANDS[parsed_args.command]
    client = client or ElawsClient(config=config)

    async with client:
        try:
            record = await handler(client, parsed_args)
        except ElawsError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if parsed_args.image_dir:
        write_images(record, parsed_args.image_dir, logger, requested_identifier(parsed_args))
    emit_result(record, parsed_args.output)
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Sync main entry point."""
    return asyncio.run(main_async(args))


if __name__ == "__main__":
    sys.exit(main())
