"""CLI entry point for the weather event planner."""

import argparse
import json
import logging

from planner.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from planner.errors import ValidationError
from planner.ingest.imagery import check_imagery_services
from planner.models.common import TemperatureUnit
from planner.models.events import NewEvent, Settings
from planner.models.weather import DesiredForecast
from planner.pipeline.explain_pipeline import build_pipeline
from planner.storage import events_repo, settings_repo
from planner.storage.database import open_database

DEFAULT_CONFIG = "config/planner.yaml"
DEFAULT_DB = "data/planner.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="planner",
        description="Weather-aware event planner",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # explain
    explain_p = sub.add_parser("explain", help="Explain the weather for a place and date")
    explain_p.add_argument("--location", required=True)
    explain_p.add_argument("--date", required=True, help="YYYY-MM-DD")
    explain_p.add_argument("--desired-temp")
    explain_p.add_argument("--desired-condition")
    explain_p.add_argument("--desired-humidity")
    explain_p.add_argument("--json", action="store_true", help="Print the raw summary")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    # events list / add / delete
    events_p = sub.add_parser("events", help="Saved events")
    events_sub = events_p.add_subparsers(dest="events_command")
    events_sub.add_parser("list", help="List saved events")
    add_p = events_sub.add_parser("add", help="Save an event")
    add_p.add_argument("--name", required=True)
    add_p.add_argument("--date", required=True)
    add_p.add_argument("--location", required=True)
    add_p.add_argument("--weather", default="")
    add_p.add_argument("--min-temp", type=float, required=True, help="Celsius")
    add_p.add_argument("--max-temp", type=float, required=True, help="Celsius")
    del_p = events_sub.add_parser("delete", help="Delete an event")
    del_p.add_argument("event_id")

    # settings show / settings set
    settings_p = sub.add_parser("settings", help="User settings")
    settings_sub = settings_p.add_subparsers(dest="settings_command")
    settings_sub.add_parser("show", help="Display settings")
    sset_p = settings_sub.add_parser("set", help="Change settings")
    sset_p.add_argument("--theme")
    sset_p.add_argument("--unit", choices=[u.value for u in TemperatureUnit])

    # imagery
    sub.add_parser("imagery", help="Probe satellite imagery services")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "explain":
        return _cmd_explain(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "events":
        return _cmd_events(args)
    elif args.command == "settings":
        return _cmd_settings(args)
    elif args.command == "imagery":
        return _cmd_imagery()
    else:
        parser.print_help()
        return 1


def _cmd_explain(config, args) -> int:
    pipeline = build_pipeline(config)
    try:
        desired = DesiredForecast.from_params(
            args.desired_temp, args.desired_condition, args.desired_humidity
        )
        result = pipeline.run(args.location, args.date, desired)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(result.summary.to_dict(), indent=2))
    if not result.summary.ok:
        print(f"Error: {result.summary.message}")
        return 1
    print(result.explanation)
    if result.comparison:
        print(f"Comparison: {result.comparison}")
    return 0


def _cmd_serve(config, args) -> int:
    import uvicorn

    from planner.api import app

    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = (part.strip() for part in kv.split("=", 1))
        try:
            new_config = set_config_value(config, key, value)
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key)} in {args.config}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_events(args) -> int:
    conn = open_database(args.db)
    try:
        if args.events_command == "list":
            events = events_repo.list_events(conn)
            print(f"Saved events: {len(events)}")
            for e in events:
                low, high = (e.temperature_range + ["?", "?"])[:2]
                print(
                    f"  [{e.id}] {e.name} @ {e.location} on {e.date}: "
                    f"{e.weather or '-'} {low}-{high}°{e.unit} "
                    f"favorability={e.favorability or 'n/a'}"
                )
            return 0
        elif args.events_command == "add":
            unit = settings_repo.load_settings(conn).unit
            event = events_repo.add_event(
                conn,
                NewEvent(
                    name=args.name,
                    date=args.date,
                    weather=args.weather,
                    temperature_range_c=(args.min_temp, args.max_temp),
                    location=args.location,
                ),
                unit=unit,
            )
            print(f"Event saved: {event.id}")
            return 0
        elif args.events_command == "delete":
            if events_repo.delete_event(conn, args.event_id):
                print(f"Event deleted: {args.event_id}")
                return 0
            print(f"Event not found: {args.event_id}")
            return 1
        else:
            print("Use: events list | events add ... | events delete ID")
            return 1
    finally:
        conn.close()


def _cmd_settings(args) -> int:
    conn = open_database(args.db)
    try:
        current = settings_repo.load_settings(conn)
        if args.settings_command == "show":
            print(f"Theme: {current.theme} | Unit: {current.unit}")
            return 0
        elif args.settings_command == "set":
            new = Settings(
                theme=args.theme or current.theme,
                unit=TemperatureUnit(args.unit) if args.unit else current.unit,
            )
            settings_repo.save_settings(conn, new)
            print(f"Theme: {new.theme} | Unit: {new.unit}")
            return 0
        else:
            print("Use: settings show | settings set --theme/--unit")
            return 1
    finally:
        conn.close()


def _cmd_imagery() -> int:
    status = check_imagery_services()
    print(f"{status.provider}: {status.message}")
    return 0 if status.status == "success" else 1
