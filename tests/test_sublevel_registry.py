import json
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from cavepregen.config import DATA_DIR_ENV, RegistryConfig, get_data_dir
from cavepregen.errors import RecordError, SublevelNotFoundError, ValidationError
from cavepregen.registry import SublevelRegistry, records_to_sublevels
from factories import make_floor, make_unit


class CountingSource:
    """Sublevel source that records how often it was called."""

    def __init__(self, floors, delay=0.0):
        self.floors = floors
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return dict(self.floors)


@pytest.fixture
def floors(start_room):
    return {
        "SCx7": make_floor(units=[start_room], cave_name="SCx", sublevel=6),
        "gk3": make_floor(units=[start_room], cave_name="GK", sublevel=2),
    }


def test_lazy_population(floors):
    source = CountingSource(floors)
    registry = SublevelRegistry(source)
    assert not registry.is_initialized
    assert source.calls == 0
    registry.get("gk3")
    assert registry.is_initialized
    assert source.calls == 1


def test_lookup_is_case_insensitive(floors):
    registry = SublevelRegistry(CountingSource(floors))
    assert registry.get("scx7") is registry.get("SCX7")
    assert registry.get("GK3").name() == "GK3"
    assert "Scx7" in registry
    assert "bk1" not in registry


def test_repeat_lookups_share_instance(floors):
    source = CountingSource(floors)
    registry = SublevelRegistry(source)
    first = registry.get("scx7")
    registry.ensure_initialized()
    registry.ensure_initialized()
    assert registry.get("scx7") is first
    assert source.calls == 1


def test_unknown_sublevel(floors):
    registry = SublevelRegistry(CountingSource(floors))
    with pytest.raises(SublevelNotFoundError) as excinfo:
        registry.get("BK9")
    assert excinfo.value.name == "BK9"
    assert excinfo.value.key == "bk9"
    assert str(excinfo.value) == "No sublevel named 'BK9'"
    assert registry.find("BK9") is None


def test_not_found_is_key_error(floors):
    registry = SublevelRegistry(CountingSource(floors))
    with pytest.raises(KeyError):
        registry.get("nope")


def test_listing(floors):
    registry = SublevelRegistry(CountingSource(floors))
    assert registry.list_sublevels() == ["gk3", "scx7"]
    assert list(registry) == ["gk3", "scx7"]
    assert len(registry) == 2


def test_concurrent_first_access_initializes_once(floors):
    source = CountingSource(floors, delay=0.05)
    registry = SublevelRegistry(source)
    barrier = threading.Barrier(16)

    def lookup(_):
        barrier.wait()
        return registry.get("SCx7")

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lookup, range(16)))

    assert source.calls == 1
    assert all(result is results[0] for result in results)


def test_concurrent_ensure_initialized(floors):
    source = CountingSource(floors, delay=0.02)
    registry = SublevelRegistry(source)
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: registry.ensure_initialized(), range(32)))
    assert source.calls == 1


def test_failed_initialization_is_not_cached(floors):
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) == 1:
            raise OSError("disk unavailable")
        return floors

    registry = SublevelRegistry(flaky)
    with pytest.raises(OSError):
        registry.get("gk3")
    assert not registry.is_initialized
    assert registry.get("gk3").sublevel == 2
    assert len(attempts) == 2


def test_validation_failures_logged(caplog):
    bad = {"tc1": make_floor(units=[make_unit("no_start", 1, 1, doors=[(0, 0)])], cave_name="TC")}
    registry = SublevelRegistry(CountingSource(bad))
    with caplog.at_level(logging.ERROR, logger="cavepregen.registry.sublevel_registry"):
        assert registry.get("tc1").name() == "TC1"
    assert "CAVE-001" in caplog.text


def test_strict_mode_raises_and_stays_uninitialized():
    bad = {"tc1": make_floor(units=[make_unit("no_start", 1, 1)], cave_name="TC")}
    registry = SublevelRegistry(CountingSource(bad), strict=True)
    with pytest.raises(ValidationError) as excinfo:
        registry.ensure_initialized()
    assert excinfo.value.result.codes() == ["CAVE-001"]
    assert not registry.is_initialized


def test_validation_can_be_disabled():
    bad = {"tc1": make_floor(units=[], cave_name="TC")}
    registry = SublevelRegistry(CountingSource(bad), strict=True, validate=False)
    assert registry.get("TC1").cave_units == []


def test_registry_from_config(tmp_path, cave_records):
    for record in cave_records:
        (tmp_path / f"{record['cave_name']}.json").write_text(json.dumps(record), encoding="utf-8")
    registry = SublevelRegistry.from_config(RegistryConfig(data_dir=tmp_path, strict=True))
    assert registry.list_sublevels() == ["ex1", "tc1", "tc2"]
    floor = registry.get("TC2")
    assert len(floor.cave_units) == 12
    assert floor.is_final_floor


def test_registry_over_in_memory_records(cave_records):
    registry = SublevelRegistry(lambda: records_to_sublevels(cave_records))
    assert registry.get("ex1").cave_name == "Ex"


def test_data_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    assert get_data_dir() == tmp_path
    assert RegistryConfig().data_dir == tmp_path


def test_default_data_dir(monkeypatch):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    assert get_data_dir().parts[-2:] == ("cavepregen", "sublevels")


def test_init_log_names_source(floors, caplog):
    registry = SublevelRegistry(CountingSource(floors), source_name="bundled records")
    with caplog.at_level(logging.INFO, logger="cavepregen.registry.sublevel_registry"):
        registry.ensure_initialized()
    assert "initialized with 2 sublevels from bundled records" in caplog.text


def test_init_log_names_data_dir(tmp_path, cave_records, caplog):
    for record in cave_records:
        (tmp_path / f"{record['cave_name']}.json").write_text(json.dumps(record), encoding="utf-8")
    registry = SublevelRegistry.from_config(RegistryConfig(data_dir=tmp_path))
    with caplog.at_level(logging.INFO, logger="cavepregen.registry.sublevel_registry"):
        registry.ensure_initialized()
    assert f"3 sublevels from {tmp_path}" in caplog.text


def test_names_differing_only_by_case_rejected(start_room):
    other = make_unit("room_other", 2, 2, doors=[(0, 0)], spawn_groups=[7], link=True)
    clashing = {
        "SCx7": make_floor(units=[start_room], cave_name="SCx", sublevel=6),
        "scx7": make_floor(units=[other], cave_name="scx", sublevel=6),
    }
    registry = SublevelRegistry(CountingSource(clashing))
    with pytest.raises(RecordError, match="scx7"):
        registry.ensure_initialized()
    assert not registry.is_initialized


def test_registry_floor_units_expanded_once(cave_records):
    registry = SublevelRegistry(lambda: records_to_sublevels(cave_records))
    floor = registry.get("tc1")
    assert len(floor.cave_units) == 12
    assert len(floor.prepared_units()) == 12
