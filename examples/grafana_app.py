"""Example FastAPI application serving derived series to Grafana.

Run with:
    DIAGSERIES_DATA=diagnostics.json uvicorn examples.grafana_app:app --reload

The data file holds three lists of raw documents:

    {"serverStatus": [...], "systemMetrics": [...], "replSetGetStatus": [...]}

Point a Grafana SimpleJSON datasource at the server root and chart targets
such as ``ops_insert``, ``disks_utils`` or ``replication_lags``.

Endpoints:
    /         - connection check
    /search   - metric names
    /query    - series for a time range
    /reload   - re-read the data file and rebuild the store
"""

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI

from diagseries import (
    TimeSeriesStore,
    decode_repl_status,
    decode_server_status,
    decode_system_metrics,
)
from diagseries.adapters.frameworks.fastapi import create_grafana_router

logging.basicConfig(level=logging.INFO)

DATA_FILE = Path(os.environ.get("DIAGSERIES_DATA", "diagnostics.json"))

store = TimeSeriesStore()

app = FastAPI(title="diagseries Grafana datasource")
app.include_router(create_grafana_router(store))


def load(path: Path) -> None:
    """Decode the documents in ``path`` and rebuild the store."""
    data = json.loads(path.read_text())
    store.rebuild(
        [decode_server_status(doc) for doc in data.get("serverStatus", [])],
        [decode_system_metrics(doc) for doc in data.get("systemMetrics", [])],
        [decode_repl_status(doc) for doc in data.get("replSetGetStatus", [])],
    )


@app.post("/reload")
async def reload() -> dict[str, int]:
    """Rebuild the store from the data file."""
    load(DATA_FILE)
    return {"generation": store.generation}


if DATA_FILE.exists():
    load(DATA_FILE)
