"""Command line entry point: serve the API or run a single check."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Awaitable, Callable, Optional, Sequence

from asset_expiry.core.config import get_settings
from asset_expiry.core.container import ApplicationContainer, build_container
from asset_expiry.core.logging import configure_logging
from asset_expiry.infrastructure.database.session import init_db
from asset_expiry.modules.expiration import ExpirationError

logger = logging.getLogger(__name__)

EXIT_CODES = {
    "configuration": 2,
    "not_validated": 2,
    "query": 3,
    "invariant_violation": 4,
    "event_dispatch": 5,
    "run_in_progress": 6,
}


async def cmd_validate(container: ApplicationContainer) -> None:
    if container.settings.database.create_tables:
        await init_db(container.engine)
    await container.expiration.validate()


async def cmd_check(container: ApplicationContainer) -> None:
    await cmd_validate(container)
    await container.trigger.fire()


COMMANDS: dict[str, Callable[[ApplicationContainer], Awaitable[None]]] = {
    "validate": cmd_validate,
    "check": cmd_check,
}


async def _execute(command: str, container: ApplicationContainer) -> None:
    try:
        await COMMANDS[command](container)
    finally:
        await container.engine.dispose()


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "asset_expiry.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=settings.server.reload,
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="asset-expiry", description="Asset expiration server")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("validate", help="Resolve the named queries and exit")
    sub.add_parser("check", help="Validate, then run one expiration check")
    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    args = ap.parse_args(argv)
    if args.command == "serve":
        return cmd_serve(args)

    settings = get_settings()
    configure_logging(settings)
    container = build_container(settings)
    try:
        asyncio.run(_execute(args.command, container))
    except ExpirationError as exc:
        logger.error("%s failed [%s]: %s", args.command, exc.code, exc)
        print(json.dumps({"status": "error", "code": exc.code, "message": str(exc)}))
        return EXIT_CODES.get(exc.code, 1)

    print(json.dumps({"status": "ok", "command": args.command}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
