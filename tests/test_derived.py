import pytest

from railmap.derived import (
    audit_derived_attributes,
    auto_detected_services,
    derived_station_update,
    required_platform_count,
    required_station_type,
)
from railmap.models import Coordinates, Severity, Station, StationType, Track, TrainSpeedType
from railmap.store import MapStore


def _track(tid, source, target, speed="LOCAL", bidirectional=True):
    return Track(
        id=tid,
        source=source,
        target=target,
        distance_km=1.0,
        speed_type=speed,
        bidirectional=bidirectional,
    )


def test_mixed_directionality_platform_count():
    tracks = [
        _track("a-b", "a", "b", bidirectional=True),
        _track("c-a", "c", "a", bidirectional=False),
        _track("b-c", "b", "c"),
    ]
    assert required_platform_count(tracks, "a") == 3
    assert required_station_type(3) is StationType.MEDIUM


def test_station_without_tracks_needs_one_platform():
    assert required_platform_count([_track("b-c", "b", "c")], "a") == 1
    assert auto_detected_services([], "a") == []


@pytest.mark.parametrize(
    "platforms, expected",
    [
        (1, StationType.SMALL),
        (2, StationType.SMALL),
        (3, StationType.MEDIUM),
        (7, StationType.MEDIUM),
        (8, StationType.LARGE),
        (20, StationType.LARGE),
    ],
)
def test_station_type_thresholds(platforms, expected):
    assert required_station_type(platforms) is expected


def test_services_from_incident_tracks():
    tracks = [
        _track("1", "a", "b", speed="EXPRESS"),
        _track("2", "c", "a", speed="HIGH_SPEED"),
        _track("3", "a", "d", speed="EXPRESS"),
        _track("4", "b", "c", speed="LOCAL"),
    ]
    assert auto_detected_services(tracks, "a") == [TrainSpeedType.EXPRESS, TrainSpeedType.HIGH_SPEED]


def test_derived_update_applies_through_store():
    store = MapStore()
    store.create_new_map()
    for sid in "abcde":
        store.add_station(Station(id=sid, name=sid, coordinates=Coordinates(x=0, y=0)))
    for other in "bcde":
        store.add_track(_track(f"a-{other}", "a", other, speed="EXPRESS"))

    update = derived_station_update(store.game_map.rail_network.tracks, "a")
    assert update == {"platforms": 8, "type": StationType.LARGE, "services": [TrainSpeedType.EXPRESS]}

    store.update_station("a", update)
    station = store.get_station_by_id("a")
    assert (station.platforms, station.type, station.services) == (8, StationType.LARGE, [TrainSpeedType.EXPRESS])


def test_derived_update_keeps_services_for_isolated_station():
    assert derived_station_update([], "lonely") == {"platforms": 1, "type": StationType.SMALL}


def test_audit_reports_info_only():
    store = MapStore()
    store.create_new_map()
    store.add_station(Station(id="a", name="A", coordinates=Coordinates(x=0, y=0)))
    store.add_station(Station(id="b", name="B", coordinates=Coordinates(x=1, y=0), platforms=2))
    store.add_track(_track("a-b", "a", "b", speed="EXPRESS"))

    findings = audit_derived_attributes(store.game_map)

    assert findings
    assert {f.severity for f in findings} == {Severity.INFO}
    # a: platforms 1 vs 2, services LOCAL vs EXPRESS; b: services only
    assert [f.related_id for f in findings] == ["a", "a", "b"]
