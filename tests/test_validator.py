from railmap.models import (
    Category,
    Coordinates,
    GameMap,
    RailNetwork,
    Severity,
    Station,
    Track,
    create_default_map,
    has_errors,
)
from railmap.validation import validate_map


def _station(sid, x=0.0, y=0.0, name=None):
    return Station(id=sid, name=sid.upper() if name is None else name, coordinates=Coordinates(x=x, y=y))


def _track(tid, source, target, points=None):
    return Track(
        id=tid,
        source=source,
        target=target,
        distance_km=5.0,
        speed_type="EXPRESS",
        points=points,
    )


def _map(stations, tracks):
    game_map = create_default_map()
    game_map.rail_network = RailNetwork(stations=stations, tracks=tracks)
    return game_map


def _pt(x, y):
    return Coordinates(x=x, y=y)


def test_empty_map_is_clean():
    assert validate_map(create_default_map()) == []


def test_disconnected_network_single_warning():
    report = validate_map(_map([_station("a"), _station("b"), _station("c")], [_track("a-b", "a", "b")]))

    assert len(report) == 1
    finding = report[0]
    assert finding.severity is Severity.WARNING
    assert finding.category is Category.NETWORK
    assert "2 separate sub-networks" in finding.message
    assert not has_errors(report)


def test_self_loop_is_error():
    report = validate_map(_map([_station("x")], [_track("loop", "x", "x")]))

    errors = [e for e in report if e.severity is Severity.ERROR]
    assert len(errors) == 1
    assert errors[0].category is Category.TRACK
    assert errors[0].related_id == "loop"
    assert "connects a station to itself" in errors[0].message


def test_duplicate_track_ids():
    stations = [_station("a"), _station("b"), _station("c")]
    tracks = [_track("t1", "a", "b"), _track("t1", "b", "c")]

    report = validate_map(_map(stations, tracks))

    assert [(e.severity, e.related_id, e.message) for e in report] == [
        (Severity.ERROR, "t1", 'Duplicate track ID: "t1"')
    ]


def test_duplicate_station_ids_and_missing_name():
    stations = [_station("a"), _station("a", name=""), _station("b")]
    tracks = [_track("a-b", "a", "b")]

    report = validate_map(_map(stations, tracks))

    assert [(e.severity, e.category, e.related_id) for e in report] == [
        (Severity.ERROR, Category.STATION, "a"),
        (Severity.WARNING, Category.STATION, "a"),
    ]


def test_endpoints_checked_against_last_duplicate_station():
    stations = [_station("a", 0, 0), _station("a", 3, 3), _station("b", 10, 10)]
    tracks = [_track("a-b", "a", "b", points=[_pt(3, 3), _pt(10, 10)])]

    report = validate_map(_map(stations, tracks))

    assert [e.category for e in report] == [Category.STATION]
    assert report[0].message == 'Duplicate station ID: "a"'


def test_dangling_references_reported_per_end():
    report = validate_map(_map([_station("a")], [_track("t", "ghost", "phantom")]))

    track_errors = [e.message for e in report if e.category is Category.TRACK]
    assert track_errors == [
        'Track "t" references non-existent source station "ghost"',
        'Track "t" references non-existent target station "phantom"',
    ]


def test_points_checks():
    stations = [_station("a", 0, 0), _station("b", 10, 10)]
    tracks = [
        _track("short", "a", "b", points=[_pt(0, 0)]),
        _track("off", "a", "b", points=[_pt(1, 0), _pt(5, 5), _pt(10, 11)]),
        _track("nan", "a", "b", points=[_pt(0, 0), _pt(float("nan"), 3), _pt(10, 10)]),
        _track("empty", "a", "b", points=[]),
    ]

    report = validate_map(_map(stations, tracks))
    summary = [(e.related_id, e.severity) for e in report]

    assert summary == [
        ("short", Severity.ERROR),  # fewer than 2 points
        ("short", Severity.WARNING),  # single point cannot end at b
        ("off", Severity.WARNING),
        ("off", Severity.WARNING),
        ("nan", Severity.ERROR),
    ]
    assert "index 1" in report[-1].message
    assert "first point" in report[2].message
    assert "last point" in report[3].message


def test_endpoint_check_skipped_for_dangling_track():
    report = validate_map(_map([_station("a")], [_track("t", "a", "zz", points=[_pt(9, 9), _pt(1, 1)])]))
    assert all("point" not in e.message for e in report)


def test_order_stations_then_tracks_then_network():
    stations = [_station("a"), _station("a"), _station("c", name="")]
    tracks = [_track("t", "a", "a"), _track("t", "a", "q")]

    report = validate_map(_map(stations, tracks))

    categories = [e.category for e in report]
    assert categories == [
        Category.STATION,
        Category.STATION,
        Category.TRACK,
        Category.TRACK,
        Category.TRACK,
        Category.NETWORK,
    ]


def test_validation_is_deterministic_and_read_only():
    stations = [_station("a"), _station("b", name=""), _station("c")]
    tracks = [_track("t1", "a", "b", points=[_pt(3, 3), _pt(0, 0)]), _track("t1", "c", "c")]
    game_map = _map(stations, tracks)
    snapshot = game_map.model_copy(deep=True)

    first = validate_map(game_map)
    second = validate_map(game_map)

    assert first == second
    assert game_map == snapshot


def test_report_accepts_parsed_map():
    game_map = GameMap.model_validate(
        {
            "id": "m",
            "metadata": {
                "name": "n",
                "region": "r",
                "description": "",
                "created": "now",
                "version": "1",
                "seed": 1,
            },
            "railNetwork": {"stations": [], "tracks": []},
        }
    )
    assert validate_map(game_map) == []
