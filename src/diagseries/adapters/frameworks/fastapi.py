"""FastAPI adapter serving the store as a Grafana SimpleJSON datasource.

Grafana's SimpleJSON plugin calls ``GET /`` to test the connection,
``POST /search`` to list metrics and ``POST /query`` to fetch series for a
time range.
"""

from datetime import datetime

from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict, Field

from diagseries.core.encoding.series import series_to_dict
from diagseries.core.models import TimeSeries, to_millis, utc_seconds
from diagseries.core.ports import SeriesReaderPort


class QueryRange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: datetime = Field(alias="from")
    to: datetime


class QueryTarget(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target: str
    ref_id: str = Field(default="", alias="refId")
    type: str = "timeserie"


class QueryRequest(BaseModel):
    """Body of a SimpleJSON ``/query`` call."""

    timezone: str = ""
    range: QueryRange
    targets: list[QueryTarget] = Field(default_factory=list)


class SearchRequest(BaseModel):
    target: str = ""


def _in_range(series: TimeSeries, start: float, end: float) -> TimeSeries:
    """Copy of ``series`` holding only points with start <= timestamp <= end."""
    points = [p for p in series.points if start <= p.timestamp <= end]
    return TimeSeries(series.target, points)


def create_grafana_router(store: SeriesReaderPort) -> APIRouter:
    """Create a FastAPI router with the SimpleJSON datasource endpoints.

    Args:
        store: Series reader, usually a TimeSeriesStore.

    Returns:
        APIRouter with ``/``, ``/search`` and ``/query`` configured.
    """
    router = APIRouter()

    @router.get("/")
    async def test_connection() -> Response:
        return Response(content="OK", media_type="text/plain")

    @router.post("/search")
    async def search(request: SearchRequest | None = None) -> list[str]:
        """Return catalog keys, optionally filtered by a substring."""
        names = store.names()
        if request is None or not request.target:
            return names
        return [name for name in names if request.target in name]

    @router.post("/query")
    async def query(request: QueryRequest) -> list[dict[str, object]]:
        """Return every requested series, trimmed to the requested range."""
        start = to_millis(utc_seconds(request.range.from_))
        end = to_millis(utc_seconds(request.range.to))
        results = []
        for target in request.targets:
            for series in store.expand(target.target):
                results.append(series_to_dict(_in_range(series, start, end)))
        return results

    return router
