"""CLI entry point for the weather dashboard."""

import argparse
import logging

from pydantic import ValidationError

from weatherdash.config.loader import (
    ConfigError,
    get_config_value,
    load_config,
    masked_config_json,
)
from weatherdash.controller import create_controller
from weatherdash.models.dashboard import SearchStatus
from weatherdash.reporting.formatters import (
    format_favorites_text,
    format_snapshot_text,
    format_view_json,
)
from weatherdash.storage.database import open_storage
from weatherdash.stores.favorites_store import FavoritesStore
from weatherdash.stores.persistence import PersistenceError
from weatherdash.stores.preference_store import PreferenceStore

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdash",
        description="Current weather lookups with saved favorite cities",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--db", default=None, help="SQLite DB path (overrides storage.db_path)"
    )

    sub = parser.add_subparsers(dest="command")

    # search
    search_p = sub.add_parser("search", help="Look up current weather for a city")
    search_p.add_argument("city", help="City name")
    search_p.add_argument(
        "--save", action="store_true", help="Add the result to favorites"
    )
    search_p.add_argument(
        "--json", action="store_true", help="Print the dashboard view as JSON"
    )

    # favorites list / remove / clear
    fav_p = sub.add_parser("favorites", help="Favorites operations")
    fav_sub = fav_p.add_subparsers(dest="favorites_command")
    fav_sub.add_parser("list", help="Show favorite cities")
    rm_p = fav_sub.add_parser("remove", help="Remove a favorite by name")
    rm_p.add_argument("name")
    fav_sub.add_parser("clear", help="Remove all favorites")

    # unit show / toggle
    unit_p = sub.add_parser("unit", help="Unit preference operations")
    unit_sub = unit_p.add_subparsers(dest="unit_command")
    unit_sub.add_parser("show", help="Show the unit preference")
    unit_sub.add_parser("toggle", help="Switch between metric and imperial")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. ui.port")

    # serve
    serve_p = sub.add_parser("serve", help="Run the web dashboard")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e}")
        return 1
    if args.db:
        config = config.model_copy(
            update={"storage": config.storage.model_copy(update={"db_path": args.db})}
        )

    try:
        if args.command == "search":
            return _cmd_search(config, args)
        elif args.command == "favorites":
            return _cmd_favorites(config, args)
        elif args.command == "unit":
            return _cmd_unit(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
        elif args.command == "serve":
            return _cmd_serve(config, args)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1
    parser.print_help()
    return 1


def _cmd_search(config, args) -> int:
    conn = open_storage(config.storage.db_path)
    try:
        controller = create_controller(config, conn)
        status = controller.start_search(args.city)
        view = controller.view()
        if args.json:
            print(format_view_json(view))
            return 0 if status == SearchStatus.SUCCESS else 1
        if status != SearchStatus.SUCCESS or view.snapshot is None:
            print(view.error)
            return 1
        print(format_snapshot_text(view.snapshot))
        if args.save:
            if controller.add_current_to_favorites():
                print(f"Added {view.snapshot.name} to favorites")
            elif controller.view().notification is not None:
                print(controller.view().notification.message)
                return 1
            else:
                print(f"{view.snapshot.name} is already a favorite")
        return 0
    finally:
        conn.close()


def _cmd_favorites(config, args) -> int:
    conn = open_storage(config.storage.db_path)
    try:
        store = FavoritesStore(conn)
        if args.favorites_command == "list":
            print(format_favorites_text(store.list()))
            return 0
        elif args.favorites_command == "remove":
            if store.remove(args.name):
                print(f"Removed {args.name}")
            else:
                print(f"{args.name} is not a favorite")
            return 0
        elif args.favorites_command == "clear":
            store.clear()
            print("Favorites cleared")
            return 0
        else:
            print("Use: favorites list | remove NAME | clear")
            return 1
    except PersistenceError as e:
        print(f"Error: {e}")
        return 1
    finally:
        conn.close()


def _cmd_unit(config, args) -> int:
    conn = open_storage(config.storage.db_path)
    try:
        prefs = PreferenceStore(conn)
        if args.unit_command == "show":
            unit = prefs.get()
            print(f"Unit: {unit} ({unit.label})")
            return 0
        elif args.unit_command == "toggle":
            unit = prefs.toggle()
            print(f"Unit: {unit} ({unit.label})")
            return 0
        else:
            print("Use: unit show | toggle")
            return 1
    except PersistenceError as e:
        print(f"Error: {e}")
        return 1
    finally:
        conn.close()


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(masked_config_json(config))
        return 0
    elif args.config_command == "get":
        if args.key == "api.api_key":
            print("Error: use config show to check the API key")
            return 1
        try:
            print(get_config_value(config, args.key))
        except KeyError as e:
            print(f"Error: {e}")
            return 1
        return 0
    print("Use: config show | config get KEY")
    return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from weatherdash.dashboard import create_app

    conn = open_storage(config.storage.db_path, check_same_thread=False)
    try:
        app = create_app(create_controller(config, conn))
        uvicorn.run(
            app,
            host=args.host or config.ui.host,
            port=args.port or config.ui.port,
        )
        return 0
    finally:
        conn.close()
