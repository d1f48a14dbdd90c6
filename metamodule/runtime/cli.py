"""Command-line interface for inspecting declared modules."""
from __future__ import annotations

import argparse
import json
import logging
import sys

from ..errors import MetaModuleError
from .analysis import describe, export_graphviz, registration_order, to_dot
from .loader import load_module


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="metamodule",
        description="Inspect metamodule declarations.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log registrations and on-demand loads",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List registered modules")
    list_cmd.add_argument(
        "--load",
        action="append",
        default=[],
        metavar="NAME",
        help="Load NAME before listing (repeatable)",
    )

    describe_cmd = commands.add_parser("describe", help="Describe one module")
    describe_cmd.add_argument("name", help="Fully-qualified module name")
    describe_cmd.add_argument("--json", action="store_true", help="Emit JSON")

    graph_cmd = commands.add_parser("graph", help="Emit the embedding graph as DOT")
    graph_cmd.add_argument("names", nargs="+", help="Root module names")
    graph_cmd.add_argument("-o", "--output", help="Write DOT to this file")

    return parser.parse_args(argv)


def _print_description(info):
    print(f"{info['name']}")
    print(f"  package:   {info['package'] or '-'}")
    print(f"  embeds:    {', '.join(info['embeds']) or '-'}")
    print(f"  lineage:   {', '.join(info['lineage']) or '-'}")
    print(f"  behaviors: {', '.join(info['behaviors'])}")
    print(f"  protocol:  {', '.join(info['protocol'])}")
    if info["state"]:
        print("  state:")
        for key, value in info["state"].items():
            print(f"    {key} = {value}")


def main(argv=None):
    params = parse_args(argv)
    if params.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if params.command == "list":
            for name in params.load:
                load_module(name)
            for name in registration_order():
                print(name)
        elif params.command == "describe":
            load_module(params.name)
            info = describe(params.name)
            if params.json:
                print(json.dumps(info, indent=2))
            else:
                _print_description(info)
        elif params.command == "graph":
            for name in params.names:
                load_module(name)
            if params.output:
                path = export_graphviz(params.output, params.names)
                print(f"Wrote {path}")
            else:
                print(to_dot(params.names).to_string())
    except (MetaModuleError, ImportError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


__all__ = ["main", "parse_args"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
