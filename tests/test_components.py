from railmap.graph.components import find_connected_components, isolated_station_ids
from railmap.graph.geometry import endpoint_matches, invalid_point_indices
from railmap.graph.metrics import compute_network_metrics
from railmap.models import Coordinates, Station, Track


def _station(sid, x=0.0, y=0.0):
    return Station(id=sid, name=sid.upper(), coordinates=Coordinates(x=x, y=y))


def _track(tid, source, target, bidirectional=True, points=None):
    return Track(
        id=tid,
        source=source,
        target=target,
        distance_km=1.0,
        speed_type="LOCAL",
        bidirectional=bidirectional,
        points=points,
    )


def _ids(components):
    return [[s.id for s in c] for c in components]


def test_two_components_with_singleton():
    stations = [_station("a"), _station("b"), _station("c")]
    tracks = [_track("a-b", "a", "b")]

    components = find_connected_components(stations, tracks)

    assert _ids(components) == [["a", "b"], ["c"]]


def test_empty_station_list():
    assert find_connected_components([], [_track("x-y", "x", "y")]) == []


def test_direction_flags_do_not_affect_connectivity():
    stations = [_station("a"), _station("b"), _station("c")]
    tracks = [_track("b-a", "b", "a", bidirectional=False), _track("c-b", "c", "b", bidirectional=False)]
    assert _ids(find_connected_components(stations, tracks)) == [["a", "b", "c"]]


def test_components_partition_station_set():
    stations = [_station(s) for s in "abcdefg"]
    tracks = [
        _track("1", "a", "c"),
        _track("2", "e", "g"),
        _track("3", "c", "f"),
        _track("4", "b", "b"),
    ]
    components = find_connected_components(stations, tracks)

    flat = [s.id for c in components for s in c]
    assert sorted(flat) == sorted(s.id for s in stations)
    assert len(flat) == len(set(flat))
    assert _ids(components) == [["a", "c", "f"], ["b"], ["d"], ["e", "g"]]


def test_dangling_tracks_are_ignored_and_input_untouched():
    stations = [_station("a"), _station("b")]
    tracks = [_track("a-x", "a", "x"), _track("y-b", "y", "b")]
    before = [s.model_copy(deep=True) for s in stations]

    components = find_connected_components(stations, tracks)

    assert _ids(components) == [["a"], ["b"]]
    assert stations == before


def test_duplicate_ids_share_a_component():
    stations = [_station("a"), _station("b"), _station("a", x=5)]
    components = find_connected_components(stations, [])
    assert _ids(components) == [["a", "a"], ["b"]]


def test_isolated_station_ids_counts_self_loops_as_isolated():
    stations = [_station("a"), _station("b"), _station("c")]
    tracks = [_track("a-b", "a", "b"), _track("c-c", "c", "c")]
    assert isolated_station_ids(stations, tracks) == ["c"]


def test_invalid_point_indices():
    points = [
        Coordinates(x=0, y=0),
        Coordinates(x=float("nan"), y=1),
        Coordinates(x=2, y=float("inf")),
        Coordinates(x=3, y=3),
    ]
    assert invalid_point_indices(points) == [1, 2]
    assert invalid_point_indices(None) == []


def test_endpoint_matches_each_end_independently():
    a, b = _station("a", 0, 0), _station("b", 10, 10)
    track = _track("a-b", "a", "b", points=[Coordinates(x=0, y=0), Coordinates(x=9, y=10)])
    assert endpoint_matches(track, a, b) == (True, False)
    assert endpoint_matches(_track("a-b", "a", "b"), a, b) == (True, True)


def test_network_metrics():
    stations = [_station("a"), _station("b"), _station("c")]
    tracks = [_track("a-b", "a", "b"), _track("b-z", "b", "z")]

    metrics = compute_network_metrics(stations, tracks).set_index("metric")["value"].to_dict()

    assert metrics["n_stations"] == 3
    assert metrics["n_tracks"] == 2
    assert metrics["n_edges"] == 1
    assert metrics["n_dangling_tracks"] == 1
    assert metrics["n_components"] == 2
    assert metrics["largest_component"] == 2
    assert metrics["n_isolated"] == 1
