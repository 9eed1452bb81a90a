from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CATALOG_MUTATIONS = Counter(
    "songlib_catalog_mutations_total",
    "Catalog writes that reached storage, by operation.",
    ["operation"],
)
DETAIL_LOOKUPS = Counter(
    "songlib_detail_lookups_total",
    "Calls to the song detail service, by outcome.",
    ["outcome"],
)
PAGE_SIZES = Histogram(
    "songlib_catalog_page_entries",
    "Number of entries returned per catalog page.",
    buckets=(0, 1, 5, 10, 20, 50, 100, 500, 1000, float("inf")),
)


def record_mutation(operation: str) -> None:
    CATALOG_MUTATIONS.labels(operation=operation).inc()


def record_detail_lookup(outcome: str) -> None:
    DETAIL_LOOKUPS.labels(outcome=outcome).inc()


def observe_page_size(entries: int) -> None:
    PAGE_SIZES.observe(max(0, entries))


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
