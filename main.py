"""
EV Trip Planner - Main Entry Point
Plan charging stops for a road trip from the command line.

    python main.py --origin 37.7749,-122.4194 --destination "Los Angeles, CA" \\
        --vehicle tesla_model3 --battery-percent 60
"""

import argparse
import sys

from ev_trip_planner.config import PlannerConfig
from ev_trip_planner.planning import TripPlanner
from ev_trip_planner.reporting import (
    battery_percent_text,
    battery_warning_message,
    plan_summary_lines,
    preset_range_text,
    preset_specs_text,
    remaining_range_text,
    required_energy_text,
    route_distance_text,
    route_duration_text,
    save_plan_csv,
)
from ev_trip_planner.routing import RoutingError
from ev_trip_planner.vehicle import (
    DEFAULT_PRESET_ID,
    Location,
    Vehicle,
    get_vehicle_preset,
    list_vehicle_presets,
)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="EV road-trip charging planner",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Trip
    parser.add_argument(
        "--origin", type=str, default=None,
        help="Start coordinate as LAT,LNG"
    )
    parser.add_argument(
        "--destination", type=str, default=None,
        help="Destination address or LAT,LNG"
    )

    # Vehicle
    parser.add_argument(
        "--vehicle", type=str, default=DEFAULT_PRESET_ID,
        help="Vehicle preset id (see --list-vehicles)"
    )
    parser.add_argument(
        "--battery-percent", type=float, default=80.0,
        help="Current state of charge (0-100)"
    )
    parser.add_argument(
        "--capacity-kwh", type=float, default=None,
        help="Override the preset's battery capacity"
    )
    parser.add_argument(
        "--efficiency", type=float, default=None,
        help="Override the preset's consumption in kWh/km"
    )

    # Runtime
    parser.add_argument(
        "--env-file", type=str, default=None,
        help="Path to a .env file with API keys"
    )
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Parallel charger queries (overrides EV_PLANNER_MAX_WORKERS)"
    )
    parser.add_argument(
        "--csv", type=str, default=None,
        help="Write the charging plan to this CSV file"
    )
    parser.add_argument(
        "--list-vehicles", action="store_true",
        help="List vehicle presets and exit"
    )

    return parser.parse_args(argv)


def parse_origin(text: str) -> Location:
    """Parse "LAT,LNG" into a Location."""
    try:
        lat_text, lng_text = text.split(",")
        return Location(latitude=float(lat_text), longitude=float(lng_text))
    except ValueError:
        raise ValueError(f"--origin must look like LAT,LNG, got '{text}'.") from None


def build_vehicle(args) -> Vehicle:
    preset = get_vehicle_preset(args.vehicle)
    return Vehicle(
        battery_capacity_kwh=args.capacity_kwh or preset.battery_capacity_kwh,
        efficiency_kwh_per_km=args.efficiency or preset.efficiency_kwh_per_km,
        current_battery_percent=args.battery_percent,
    )


def print_presets():
    for preset in list_vehicle_presets():
        print(f"{preset.id:16s} {preset.display_name:22s} "
              f"{preset_specs_text(preset):22s} {preset_range_text(preset)}")


def main(argv=None):
    """Main entry point for trip planning."""
    args = parse_args(argv)

    if args.list_vehicles:
        print_presets()
        return 0

    if not args.origin or not args.destination:
        print("Both --origin and --destination are required.", file=sys.stderr)
        return 2

    try:
        origin = parse_origin(args.origin)
        vehicle = build_vehicle(args)
        config = PlannerConfig.from_env(args.env_file)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    if args.workers is not None:
        config.max_workers = args.workers

    planner = TripPlanner.from_config(config)
    try:
        result = planner.plan_trip(origin, args.destination, vehicle)
    except RoutingError as exc:
        print(exc.message, file=sys.stderr)
        return 1

    state = result.battery_state
    print("=" * 60)
    print(f"Route   : {route_distance_text(result.route)}, {route_duration_text(result.route)}")
    print(f"Battery : {battery_percent_text(state)}, range {remaining_range_text(state)}, "
          f"route needs {required_energy_text(state)}")
    warning = battery_warning_message(state)
    if warning:
        print(f"          {warning}")
    if result.charger_search_performed:
        print(f"Chargers: {len(result.chargers)} found along the route")
    print("-" * 60)
    for line in plan_summary_lines(result.plan):
        print(line)
    print("=" * 60)

    if args.csv:
        path = save_plan_csv(result.plan, args.csv)
        print(f"Plan written to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
