"""Connectivity of the station/track graph (pure functions only)."""

from __future__ import annotations

from collections.abc import Sequence

import networkx as nx

from railmap.models.schemas import Station, Track


def build_station_graph(stations: Sequence[Station], tracks: Sequence[Track]) -> nx.Graph:
    """Build an undirected graph with one node per station id.

    Every track contributes an edge regardless of `bidirectional`/`direction`;
    tracks with an endpoint that is not a station contribute nothing.
    """
    G = nx.Graph()
    # Insertion order of nodes follows the station list (first occurrence of each id).
    G.add_nodes_from(s.id for s in stations)
    for t in tracks:
        if t.source in G and t.target in G:
            G.add_edge(t.source, t.target)
    return G


def find_connected_components(
    stations: Sequence[Station], tracks: Sequence[Track]
) -> list[list[Station]]:
    """Partition `stations` into maximal connected groups.

    Components are ordered by the first station they contain; stations keep
    their input order inside a component. Isolated stations form singleton
    components and stations sharing an id always land in the same component.
    """
    if not stations:
        return []

    G = build_station_graph(stations, tracks)
    component_of: dict[str, int] = {}
    n_components = 0
    for idx, nodes in enumerate(nx.connected_components(G)):
        for n in nodes:
            component_of[n] = idx
        n_components = idx + 1

    components: list[list[Station]] = [[] for _ in range(n_components)]
    for s in stations:
        components[component_of[s.id]].append(s)
    return components


def isolated_station_ids(stations: Sequence[Station], tracks: Sequence[Track]) -> list[str]:
    """Station ids with no incident track to another existing station (input order)."""
    G = build_station_graph(stations, tracks)
    return [n for n in G.nodes if G.degree(n) == 0 or set(G.neighbors(n)) == {n}]
