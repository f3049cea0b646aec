"""CLI entry point for the weather lookup app."""

import argparse
import asyncio
import json
import logging

from pydantic import BaseModel

from skycast.config.loader import get_config_value, load_config
from skycast.config.schema import AppConfig
from skycast.models.state import Phase, ViewState
from skycast.reporting.formatters import (
    format_forecast_json,
    format_forecast_text,
    format_history,
)
from skycast.viewmodel.weather_view_model import WeatherViewModel

DEFAULT_CONFIG = "skycast.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skycast",
        description="Multi-day weather forecast lookup",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print state as JSON"
    )

    sub = parser.add_subparsers(dest="command")

    # forecast
    forecast_p = sub.add_parser(
        "forecast", help="Show the forecast for a city or the current location"
    )
    forecast_p.add_argument("--city", help="City name to look up")

    # interactive
    sub.add_parser("interactive", help="Search cities and revisit history")

    # config show / get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. forecast.timeout_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)
    logging.basicConfig(
        level=config.logging.level.value,
        format=config.logging.format,
    )

    if args.command == "forecast":
        return asyncio.run(_cmd_forecast(config, args))
    elif args.command == "interactive":
        return asyncio.run(_cmd_interactive(config, args))
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def build_view_model(config: AppConfig) -> WeatherViewModel:
    return WeatherViewModel.from_config(config)


def _render(state: ViewState, as_json: bool) -> None:
    if as_json:
        print(format_forecast_json(state))
    else:
        print(format_forecast_text(state))


async def _cmd_forecast(config: AppConfig, args) -> int:
    vm = build_view_model(config)
    if args.city is not None:
        state = await vm.submit_city_query(args.city)
    else:
        state = await vm.use_device_location()
    _render(state, args.json)
    return 0 if state.phase == Phase.READY else 1


async def _cmd_interactive(config: AppConfig, args) -> int:
    vm = build_view_model(config)
    state = await vm.use_device_location()
    _render(state, args.json)

    while True:
        try:
            line = input("city> ")
        except EOFError:
            break
        if not line.strip():
            break

        if line.strip() == "history":
            print(format_history(vm.state))
            continue

        vm.dismiss_error()
        if line.startswith("#") and line[1:].strip().isdigit():
            index = int(line[1:].strip()) - 1
            history = vm.state.search_history
            if not 0 <= index < len(history):
                print(f"No history entry {line.strip()}")
                continue
            state = await vm.select_history_entry(history[index])
        else:
            state = await vm.submit_city_query(line)
        _render(state, args.json)

    return 0 if vm.state.phase == Phase.READY else 1


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError:
            print(f"Error: unknown config key '{args.key}'")
            return 1
        if isinstance(value, BaseModel):
            print(value.model_dump_json(indent=2))
        elif isinstance(value, (list, dict)):
            print(json.dumps(value))
        else:
            print(value)
        return 0
    print("Error: use 'config show' or 'config get KEY'")
    return 1
