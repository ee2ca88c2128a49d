"""
CityRadius CLI entrypoint.

Runs the same queries as the HTTP API directly against the configured catalog and
lookup directory; useful for local debugging and scripting. Output is JSON.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from cityradius.catalog.loader import load_catalog
from cityradius.config.settings import get_settings
from cityradius.core.env import resolve_project_path
from cityradius.core.errors import CityRadiusError
from cityradius.core.logging import configure_logging
from cityradius.lookups.orchestrator import RadiusLookupOrchestrator
from cityradius.lookups.store import LookupJobStore
from cityradius.search.distance import distance_between
from cityradius.search.tags import filter_by_tags_and_active, parse_tag_list


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _store() -> LookupJobStore:
    return LookupJobStore(resolve_project_path(get_settings().lookups.dir))


def _catalog(args: argparse.Namespace):
    return load_catalog(args.catalog or get_settings().catalog.path)


def _cmd_distance(args: argparse.Namespace) -> int:
    result = distance_between(_catalog(args), args.from_guid, args.to_guid)
    _print_json(result.model_dump(mode="json", by_alias=True))
    return 0


def _cmd_by_tag(args: argparse.Namespace) -> int:
    tags = [t for raw in args.tag for t in parse_tag_list(raw)]
    if not tags:
        print("error: at least one --tag is required", file=sys.stderr)
        return 2
    cities = filter_by_tags_and_active(
        _catalog(args),
        tags,
        args.active,
        dedupe=not args.legacy_duplicates and get_settings().catalog.dedupe_tag_matches,
    )
    _print_json({"cities": [c.model_dump(mode="json", by_alias=True) for c in cities]})
    return 0


def _cmd_area(args: argparse.Namespace) -> int:
    settings = get_settings()
    orchestrator = RadiusLookupOrchestrator(
        _catalog(args), _store(), max_radius_km=settings.lookups.max_radius_km
    )
    job_id = orchestrator.start_lookup(args.from_guid, args.distance)
    if args.job_id_only:
        print(job_id)
        return 0
    _print_json(orchestrator.read_job(job_id).model_dump(mode="json", by_alias=True))
    return 0


def _cmd_area_result(args: argparse.Namespace) -> int:
    job = _store().read(args.job_id)
    _print_json(job.model_dump(mode="json", by_alias=True))
    return 0


def _cmd_area_results(_: argparse.Namespace) -> int:
    _print_json({"jobs": _store().list_jobs()})
    return 0


def _cmd_catalog_info(args: argparse.Namespace) -> int:
    catalog = _catalog(args)
    tag_counts: dict[str, int] = {}
    for a in catalog:
        for t in a.tags:
            tag_counts[t] = tag_counts.get(t, 0) + 1
    _print_json(
        {
            "catalog_path": str(catalog.source_path),
            "address_count": len(catalog),
            "active_count": sum(1 for a in catalog if a.is_active),
            "tag_counts": dict(sorted(tag_counts.items(), key=lambda kv: (-kv[1], kv[0]))),
        }
    )
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("cityradius.api.app:app", host=args.host, port=int(args.port), log_config=None)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CityRadius CLI."""
    parser = argparse.ArgumentParser(prog="cityradius")
    parser.add_argument("--catalog", default=None, help="Catalog JSON path (defaults to settings.catalog.path)")
    sub = parser.add_subparsers(dest="command", required=True)

    dist = sub.add_parser("distance", help="Distance in km between two addresses.")
    dist.add_argument("from_guid")
    dist.add_argument("to_guid")
    dist.set_defaults(func=_cmd_distance)

    tag = sub.add_parser("by-tag", help="Addresses carrying any of the given tags.")
    tag.add_argument("--tag", action="append", default=[], help="Repeatable; also accepts a,b,c")
    active = tag.add_mutually_exclusive_group()
    active.add_argument("--active", dest="active", action="store_const", const=True, default=None)
    active.add_argument("--inactive", dest="active", action="store_const", const=False)
    tag.add_argument(
        "--legacy-duplicates",
        action="store_true",
        help="Emit an address once per matched tag instead of once overall.",
    )
    tag.set_defaults(func=_cmd_by_tag)

    area = sub.add_parser("area", help="Run a radius lookup and print its record.")
    area.add_argument("from_guid")
    area.add_argument("distance", help="Radius in whole kilometers")
    area.add_argument("--job-id-only", action="store_true", help="Print only the job id")
    area.set_defaults(func=_cmd_area)

    res = sub.add_parser("area-result", help="Print a stored radius lookup record.")
    res.add_argument("job_id")
    res.set_defaults(func=_cmd_area_result)

    lst = sub.add_parser("area-results", help="List stored radius lookups.")
    lst.set_defaults(func=_cmd_area_results)

    info = sub.add_parser("catalog-info", help="Address and tag counts for the catalog.")
    info.set_defaults(func=_cmd_catalog_info)

    srv = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.set_defaults(func=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m cityradius.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except CityRadiusError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
