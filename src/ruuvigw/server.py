"""aiohttp application exposing the ingestion and scrape endpoints.

``POST /`` takes the gateway's JSON batch, ``GET /metrics`` returns the
plaintext document.  Both handlers share the one
:class:`~ruuvigw.state.store.MeasurementStore` stored on the application.
"""

from __future__ import annotations

import logging

from aiohttp import web

from ruuvigw._constants import GATEWAY_RATE_HEADER, GATEWAY_RATE_SECONDS, MAX_BODY_SIZE
from ruuvigw.exceptions import EnvelopeError
from ruuvigw.ingestion import apply_gateway_message, parse_gateway_request
from ruuvigw.labels import LabelLookup, LabelMapping
from ruuvigw.metrics import collect_metrics
from ruuvigw.state import MeasurementStore

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", MeasurementStore)
LABELS_KEY = web.AppKey("labels", LabelLookup)


async def handle_ingest(request: web.Request) -> web.Response:
    """Accept one gateway batch."""
    body = await request.read()
    try:
        message = parse_gateway_request(body)
    except EnvelopeError as exc:
        _logger.warning("Rejected gateway request from %s: %s", request.remote, exc)
        return web.Response(status=400, text=f"{exc}\n")

    report = apply_gateway_message(request.app[STORE_KEY], message)
    _logger.debug("Gateway %s posted %d tags", message.gw_mac, report.total)
    return web.Response(text="", headers={GATEWAY_RATE_HEADER: str(GATEWAY_RATE_SECONDS)})


async def handle_metrics(request: web.Request) -> web.Response:
    """Render the current snapshot."""
    snapshot = request.app[STORE_KEY].snapshot()
    text = collect_metrics(snapshot, request.app[LABELS_KEY])
    return web.Response(text=text, content_type="text/plain", charset="utf-8")


def create_app(
    store: MeasurementStore | None = None,
    labels: LabelLookup | None = None,
    *,
    max_body_size: int = MAX_BODY_SIZE,
) -> web.Application:
    """Build the web application."""
    app = web.Application(client_max_size=max_body_size)
    app[STORE_KEY] = store if store is not None else MeasurementStore()
    app[LABELS_KEY] = labels if labels is not None else LabelMapping()
    app.router.add_post("/", handle_ingest)
    app.router.add_get("/metrics", handle_metrics)
    return app
