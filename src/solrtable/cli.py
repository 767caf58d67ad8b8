"""CLI entry point: query and maintain a Solr-backed entity from the shell."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from solrtable.config.settings import Settings
    from solrtable.models.query import QueryDescriptor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solrtable",
        description="solrtable: use an Apache Solr core as an ORM-style table",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"solrtable {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("ping", help="Check that the Solr core answers")

    describe = commands.add_parser("describe", help="Print an entity's field table")
    describe.add_argument("entity", help="Configured entity name")

    query = commands.add_parser("query", help="Search an entity")
    query.add_argument("entity", help="Configured entity name")
    query.add_argument("--q", dest="query", default=None, help="Main query string")
    query.add_argument(
        "--fq",
        action="append",
        default=[],
        type=_split_pair,
        metavar="NAME=QUERY",
        help="Named filter query (repeatable)",
    )
    query.add_argument(
        "--param",
        action="append",
        default=[],
        type=_split_pair,
        metavar="KEY=VALUE",
        help="Extra Solr request parameter (repeatable)",
    )
    query.add_argument("--fields", default=None, help="Comma-separated fields to return")
    query.add_argument("--sort", default=None, help="Sort as '<field> <direction>'")
    query.add_argument("--offset", type=int, default=None, help="Start index")
    query.add_argument("--limit", type=int, default=None, help="Row count")
    query.add_argument("--count", action="store_true", help="Only print the number of matches")
    query.add_argument("--mlt", default=None, metavar="FIELDS", help="More-like-this on these fields")
    query.add_argument("--seed", default=None, help="Seed text for more-like-this")

    delete = commands.add_parser("delete", help="Delete a document by primary key")
    delete.add_argument("entity", help="Configured entity name")
    delete.add_argument("id", help="Primary-key value")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    from solrtable.config.settings import Settings
    from solrtable.exceptions import SolrTableError
    from solrtable.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    try:
        ok = asyncio.run(_run(args, settings))
    except SolrTableError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if not ok:
        sys.exit(1)


async def _run(args: argparse.Namespace, settings: Settings) -> bool:
    from solrtable.datasource import SolrDataSource
    from solrtable.transport.client import SolrTransport

    if args.command == "describe":
        _print(settings.entity(args.entity).describe())
        return True

    transport = SolrTransport(
        base_url=settings.solr.base_url,
        core=settings.solr.core,
        username=settings.solr.username,
        password=settings.solr.password,
        timeout=settings.solr.timeout,
    )

    if args.command == "ping":
        await transport.initialize()
        try:
            health = await transport.health_check()
        finally:
            await transport.shutdown()
        _print(health.model_dump())
        return health.status == "healthy"

    entity = settings.entity(args.entity)
    async with transport:
        source = SolrDataSource(transport)
        if args.command == "delete":
            outcome = await source.delete(entity, args.id)
            _print({"success": outcome.success, "status": outcome.status, "error": _error_text(outcome.error)})
            return outcome.success

        result = await source.read(entity, build_descriptor(args))
        if not result.ok:
            print(f"Error: {result.error}", file=sys.stderr)
            return False
        if args.count:
            _print({"count": result.total_matched})
        else:
            _print(
                {
                    "total_matched": result.total_matched,
                    "rows": result.rows,
                    "interesting_terms": result.interesting_terms,
                }
            )
        return True


def build_descriptor(args: argparse.Namespace) -> QueryDescriptor:
    """Turn ``query`` subcommand arguments into a ``QueryDescriptor``."""
    from solrtable.models.query import COUNT, Conditions, MoreLikeThis, QueryDescriptor

    conditions = Conditions(
        query=args.query,
        filters=dict(args.fq),
        params=dict(args.param),
    )
    more_like_this = None
    if args.mlt is not None or args.seed is not None:
        more_like_this = MoreLikeThis(fields=args.mlt, seed=args.seed)

    return QueryDescriptor(
        fields=COUNT if args.count else args.fields,
        order=args.sort,
        offset=args.offset,
        limit=args.limit,
        conditions=conditions,
        more_like_this=more_like_this,
    )


def _split_pair(item: str) -> tuple[str, str]:
    key, sep, value = item.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {item!r}")
    return key, value


def _error_text(error: Exception | None) -> str | None:
    return str(error) if error is not None else None


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _get_version() -> str:
    """Get the package version."""
    try:
        from solrtable import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
