from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from railmap.graph.components import (
    build_station_graph,
    find_connected_components,
    isolated_station_ids,
)
from railmap.models.schemas import Station, Track

LOGGER = logging.getLogger(__name__)


def compute_network_metrics(stations: Sequence[Station], tracks: Sequence[Track]) -> pd.DataFrame:
    """Compute basic network connectivity metrics as `metric`/`value` rows."""
    G = build_station_graph(stations, tracks)
    n = G.number_of_nodes()
    m = G.number_of_edges()
    comps = find_connected_components(stations, tracks)
    largest = max((len({s.id for s in c}) for c in comps), default=0)
    degs = [d for _, d in G.degree()]
    dangling = sum(1 for t in tracks if t.source not in G or t.target not in G)

    LOGGER.debug("Network metrics: %d stations, %d edges, %d components", n, m, len(comps))
    return pd.DataFrame(
        [
            {"metric": "n_stations", "value": n},
            {"metric": "n_tracks", "value": len(tracks)},
            {"metric": "n_edges", "value": m},
            {"metric": "n_dangling_tracks", "value": dangling},
            {"metric": "n_components", "value": len(comps)},
            {"metric": "largest_component", "value": largest},
            {"metric": "largest_share", "value": (largest / n) if n else 0.0},
            {"metric": "n_isolated", "value": len(isolated_station_ids(stations, tracks))},
            {"metric": "mean_degree", "value": float(sum(degs) / len(degs)) if degs else 0.0},
            {"metric": "max_degree", "value": int(max(degs)) if degs else 0},
        ]
    )
