"""
A minimal managed application used to exercise AppWatch end to end.

Serves a greeting on `/` and a health endpoint on `/health`. Start it with
`appwatch-demo-app` (or point the supervisor's `command` at that script).
"""
import asyncio
import logging
import setproctitle
from starlette.routing import Route
from starlette.requests import Request
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from hypercorn.config import Config as HypercornConfig
from hypercorn.asyncio import serve

from appwatch import settings
from appwatch.log import setup_logging

log = logging.getLogger("demo_app")


async def hello(request: Request) -> PlainTextResponse:
    return PlainTextResponse("Hello World!\n")


async def health(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK\n", status_code=200)


app = Starlette(routes=[
    Route("/", hello),
    Route("/health", health),
])


def main() -> None:
    """Runs the demo app under Hypercorn until it is killed."""
    setproctitle.setproctitle(settings.DEMO_APP_PROCESS_TITLE)
    setup_logging(console_level=logging.INFO)

    config = HypercornConfig()
    config.bind = [f"{settings.DEMO_APP_HOST}:{settings.DEMO_APP_PORT}"]
    log.info(f"App listening on {config.bind[0]}")
    asyncio.run(serve(app, config))


if __name__ == "__main__":
    main()
