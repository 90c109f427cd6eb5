"""
Flagwork CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.

Demo program: `python -m flagwork --help`.
"""

import time
from datetime import timedelta

from rich.console import Console

from flagwork.console import console as default_console
from flagwork.flagwork import Flagwork
from flagwork.parser import Cell, Scope
from flagwork.utils import setup_logging
from flagwork.validators import min_length, value_range
from flagwork.version import __version__


def build_cli(console: Console | None = None) -> Flagwork:
    """Build the demo CLI with a few global flags and subcommands."""
    console = console or default_console
    cli = Flagwork(
        program="flagwork",
        description="Demo of the Flagwork argument engine.",
        console=console,
    )

    cli.add_string("config", "c", Cell("config.json"), "Path to config file")
    cli.add_bool("verbose", "v", Cell(False), "Enable verbose output")
    cli.add_duration("timeout", "t", Cell(timedelta(seconds=5)), "Timeout for the request")
    cli.add_int(
        "port", "p", Cell(8080), "Port to listen on", validators=[value_range(1, 65535)]
    )
    cli.add_host_port("hostport", "", Cell(""), "Host:Port to listen on")
    cli.add_url("url", "u", Cell(None), "URL to fetch")
    cli.add_uuid("uuid", "", Cell(None), "UUID to use")
    cli.add_ip("ip", "i", Cell(None), "IP to use")
    cli.add_mac("mac", "m", Cell(None), "MAC address to use")
    cli.add_email("email", "e", Cell(""), "Email address to use")
    cli.add_file_path("file", "f", Cell(""), "File path to use")
    cli.add_dir_path("dir", "d", Cell(""), "Directory path to use")

    def greet(_global_flags: Scope, flags: Scope) -> None:
        message = f"{flags.get_string('greeting')} {flags.get_string('name')}"
        if flags.get_bool("upper"):
            message = message.upper()
        console.print(message, markup=False)

    def version(global_flags: Scope, flags: Scope) -> None:
        console.print(__version__)
        if not flags.get_bool("short") and global_flags.get_bool("verbose"):
            console.print("Build Date: 2025-01-01")

    def sleep(_global_flags: Scope, flags: Scope) -> None:
        time.sleep(flags.get_int("time"))

    def cors(_global_flags: Scope, flags: Scope) -> None:
        for name in ("origins", "methods", "headers"):
            console.print(f"{name.title()}: {', '.join(flags.get_string_list(name))}")
        console.print(f"Credentials: {flags.get_bool('credentials')}")

    cli.subcommand("greet", "Greet a person", greet).add_string(
        "name",
        "n",
        Cell("World"),
        "Name of the person to greet",
        required=True,
        validators=[min_length(1)],
    ).add_string("greeting", "g", Cell("Hello"), "Greeting to use").add_bool(
        "upper", "u", Cell(False), "Print in upper case"
    )

    cli.subcommand("version", "Print version", version).add_bool(
        "short", "s", Cell(False), "Print short version"
    )

    cli.subcommand("sleep", "Sleep for a while", sleep).add_int(
        "time",
        "t",
        Cell(1),
        "Time to sleep in seconds",
        required=True,
        validators=[value_range(0, 60)],
    )

    cli.subcommand("cors", "Print CORS settings", cors).add_string_list(
        "origins", "o", Cell(["*"]), "Allowed origins"
    ).add_string_list(
        "methods",
        "m",
        Cell(["GET", "POST"]),
        "Allowed methods",
        validators=[
            lambda methods: (
                all(m in {"GET", "POST", "PUT", "PATCH", "DELETE"} for m in methods),
                "unsupported HTTP method",
            )
        ],
    ).add_string_list(
        "headers", "d", Cell(["Content-Type"]), "Allowed headers"
    ).add_bool(
        "credentials", "", Cell(False), "Allow credentials"
    )
    return cli


def main() -> None:
    setup_logging()
    build_cli().run()


if __name__ == "__main__":
    main()
