"""JSON encoding for time series and whole catalogs."""

import json
from collections.abc import Iterable, Mapping

from diagseries.core.models import TimeSeries


def series_to_dict(series: TimeSeries) -> dict[str, object]:
    """Encode a series as ``{"target": ..., "datapoints": [[value, ts], ...]}``."""
    return {"target": series.target, "datapoints": series.datapoints()}


def encode_series(series: Iterable[TimeSeries]) -> str:
    """Encode a list of series as a JSON array."""
    return json.dumps([series_to_dict(s) for s in series])


def encode_catalog(catalog: Mapping[str, TimeSeries]) -> str:
    """Encode a catalog keyed by metric key as a JSON object.

    Args:
        catalog: Series keyed by their catalog key.

    Returns:
        JSON text. Keys keep the catalog's order, so identical catalogs
        always encode to identical text.
    """
    return json.dumps({key: series_to_dict(s) for key, s in catalog.items()})
