"""
Humidity - CLI Entry Point.

Commands:
    up <kind> <name>       Deploy a new service
    down <id>              Tear a service down and forget it
    list                   Show deployed services
    kinds                  Show deployable service kinds
    invoke <id> [json]     Call a service's function directly
"""

import argparse
import json
import sys

from humidity.core.exceptions import DeploymentError
from humidity.logger import configure_logger, logger, print_stack_trace
from humidity.orchestrator import LifecycleOrchestrator
from humidity.settings import load_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="humidity", description="Serverless service deployer")
    parser.add_argument("--home", help="Humidity home directory (default: ~/.humidity)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    up = commands.add_parser("up", help="Deploy a new service")
    up.add_argument("kind", help="Service kind, see 'humidity kinds'")
    up.add_argument("name", help="Display name of the service")

    down = commands.add_parser("down", help="Tear a service down")
    down.add_argument("id", help="Service id")

    commands.add_parser("list", help="List deployed services")
    commands.add_parser("kinds", help="List deployable service kinds")

    invoke = commands.add_parser("invoke", help="Invoke a service's function")
    invoke.add_argument("id", help="Service id")
    invoke.add_argument("payload", nargs="?", default="{}", help="JSON payload")

    return parser


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def run(args: argparse.Namespace) -> int:
    settings = load_settings(args.home)
    configure_logger(args.debug or settings.HUMIDITY_DEBUG)

    orchestrator = LifecycleOrchestrator(settings)

    if args.command == "up":
        record = orchestrator.up(args.kind, args.name)
        _print_json(record.model_dump(mode="json"))
    elif args.command == "down":
        orchestrator.down(args.id)
        logger.info(f"Service {args.id} removed")
    elif args.command == "list":
        _print_json([
            {"id": r.id, "name": r.name, "serviceType": r.serviceType, "url": r.url}
            for r in orchestrator.list_services()
        ])
    elif args.command == "kinds":
        _print_json(orchestrator.list_kinds())
    elif args.command == "invoke":
        try:
            payload = json.loads(args.payload)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON payload: {e}")
            return 2
        _print_json(orchestrator.invoke(args.id, payload))
    return 0


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        return run(args)
    except DeploymentError as e:
        logger.error(str(e))
        print_stack_trace()
        return 1


if __name__ == "__main__":
    sys.exit(main())
