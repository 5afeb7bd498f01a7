"""One-shot command line for listing places and routing between them."""

import argparse
import json
import sys

from osm_router.app.build import App, build
from osm_router.app.query import RouteReport
from osm_router.domain.errors import RoutingError


def _config(args: argparse.Namespace) -> dict:
    return {
        "name": "cli",
        "run_id": args.run_id,
        "map": {"file": args.map, "fmt": args.fmt},
        "log": {"level": args.log_level, "debug": args.log_level == "DEBUG"},
    }


def print_places(app: App) -> int:
    if not app.places:
        print("No named locations found.")
        return 0
    print("Available locations:")
    for i, p in enumerate(app.places):
        print(f"{i}: {p}")
    return 0


def print_report(report: RouteReport) -> None:
    print(f"Source: {report.source}")
    print(f"Destination: {report.destination}")
    print(f"Direct distance: {report.direct_distance_m:.2f} meters")
    print(f"Source node: {report.source_node} at {report.source_node_coord}")
    print(f"Destination node: {report.target_node} at {report.target_node_coord}")
    if report.found:
        result = report.result
        if result.path is not None:
            print(f"Path found with {len(result.path)} nodes")
        print(f"Shortest road path: {result.total_weight:.2f} meters")
        if report.detour_pct is not None:
            print(f"Road distance is {report.detour_pct:.1f}% longer than direct distance")
        return
    print(f"No road path found between '{report.source.name}' and '{report.destination.name}'")
    print("Possible reasons:")
    for line in report.diagnostics.lines():
        print(line)


def _report_json(report: RouteReport) -> dict:
    out = {
        "source": report.source.name,
        "destination": report.destination.name,
        "source_node": report.source_node,
        "target_node": report.target_node,
        "direct_m": report.direct_distance_m,
        "found": report.found,
    }
    if report.found:
        out.update(
            road_m=report.result.total_weight,
            path=list(report.result.path) if report.result.path is not None else None,
            detour_pct=report.detour_pct,
        )
    else:
        diag = report.diagnostics
        out.update(
            source_degree=diag.source_degree,
            target_degree=diag.target_degree,
            component_size=diag.component_size,
            target_reachable=diag.target_reachable,
        )
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="osm-router",
        description="Shortest road routes between named places of a map extract",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  osm-router places map.osm
  osm-router route map.osm "Library" "Cafe"
  osm-router route map.osm 0 3 --json
  osm-router distance map.osm "Library" "Cafe"
        """,
    )
    parser.add_argument("--fmt", choices=["osm_xml", "jsonl"], default="osm_xml")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    parser.add_argument("--run-id", default="cli")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    places_parser = subparsers.add_parser("places", help="List named places")
    places_parser.add_argument("map", help="Map extract path")

    route_parser = subparsers.add_parser("route", help="Shortest road route between two places")
    route_parser.add_argument("map", help="Map extract path")
    route_parser.add_argument("source", help="Place name, or index when no place has that name")
    route_parser.add_argument("destination", help="Place name, or index when no place has that name")
    route_parser.add_argument("--json", action="store_true", help="Output as JSON")

    dist_parser = subparsers.add_parser("distance", help="Great-circle distance in kilometers")
    dist_parser.add_argument("map", help="Map extract path")
    dist_parser.add_argument("a", help="Place name, or index when no place has that name")
    dist_parser.add_argument("b", help="Place name, or index when no place has that name")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        app = build(_config(args))
        if args.command == "places":
            return print_places(app)

        if args.command == "distance":
            a, b = app.queries.place(args.a), app.queries.place(args.b)
            km = app.queries.advisory_distance_km(a, b)
            print(f"The distance between '{a.name}' and '{b.name}' is {km:.2f} kilometers.")
            return 0

        report = app.queries.route_between(args.source, args.destination)
        if args.json:
            print(json.dumps(_report_json(report), indent=2, ensure_ascii=False))
        else:
            print_report(report)
        return 0 if report.found else 2
    except (RoutingError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cli_main() -> None:
    """Console-script entry point."""
    sys.exit(main())
