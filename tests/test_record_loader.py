import json

import pytest

from cavepregen.caveinfo import RoomType
from cavepregen.errors import InvalidRoomTypeError, RecordError
from cavepregen.registry import (
    cave_from_record,
    floor_from_record,
    load_all_sublevels,
    load_cave_file,
    records_to_sublevels,
    unit_from_record,
)
from factories import cave_record, floor_record, labels, unit_record


def _write(tmp_path, filename, data):
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_unit_from_record():
    unit = unit_from_record(unit_record("room_a", 2, 3, room_type=1, doors=[(0, 1), (2, 0)], spawn_groups=[7]))
    assert unit.unit_folder_name == "room_a"
    assert (unit.width, unit.height, unit.rotation) == (2, 3, 0)
    assert unit.room_type is RoomType.ROOM
    assert unit.num_doors == 2
    assert unit.doors[1].waypoint_index == 1
    assert unit.doors[0].num_links == 1
    assert unit.spawn_points[0].position == (10.0, 0.0, -5.0)
    assert unit.has_start_spawnpoint()


def test_unit_num_doors_from_record():
    record = unit_record("u", 1, 1, doors=[(0, 0)])
    record["num_doors"] = 1
    assert unit_from_record(record).num_doors == 1


def test_invalid_room_type_is_fatal():
    with pytest.raises(InvalidRoomTypeError):
        unit_from_record(unit_record("u", 1, 1, room_type=4))


def test_missing_field():
    record = unit_record("u", 1, 1)
    del record["width"]
    with pytest.raises(RecordError, match="width"):
        unit_from_record(record)


def test_missing_door_field():
    record = unit_record("u", 1, 1, doors=[(0, 0)])
    del record["doors"][0]["direction"]
    with pytest.raises(RecordError, match="door 0"):
        unit_from_record(record)


def test_floor_units_are_expanded_and_sorted():
    units = [unit_record("big", 2, 2, doors=[(0, 0), (2, 1)]), unit_record("small", 1, 1, doors=[(0, 0)])]
    floor = floor_from_record(floor_record(3, units), cave_name="TC")
    assert floor.name() == "TC4"
    assert labels(floor.cave_units) == [
        "small@0", "small@1", "small@2", "small@3",
        "big@0", "big@1", "big@2", "big@3",
    ]


def test_floor_entities(cave_records):
    floor = cave_from_record(cave_records[0]).floors[1]
    assert floor.has_geyser
    assert floor.corridor_probability == pytest.approx(0.2)
    assert [t.internal_name for t in floor.teki_info] == ["Kochappy", "Tank"]
    assert floor.teki_info[1].carrying == "be_dama_red"
    assert floor.item_info[0].min_amount == 1
    assert floor.gate_info[0].health == 500.0
    assert floor.cap_info[0].is_candypop() and floor.cap_info[0].is_falling()


def test_last_floor_marked_final(cave_records):
    cave = cave_from_record(cave_records[0])
    assert cave.num_floors == 2
    assert [f.is_final_floor for f in cave.floors] == [False, True]


def test_explicit_final_floor_kept():
    record = cave_record("X", [floor_record(0, [], is_final_floor=True), floor_record(1, [])])
    assert [f.is_final_floor for f in cave_from_record(record).floors] == [True, False]


def test_floor_record_cave_name_overrides():
    floor = floor_from_record(floor_record(0, [], cave_name="Own"), cave_name="Outer")
    assert floor.name() == "Own1"


def test_load_cave_file(tmp_path, cave_records):
    path = _write(tmp_path, "tc.json", cave_records[0])
    assert load_cave_file(path).floors[0].name() == "TC1"


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RecordError):
        load_cave_file(path)


def test_load_all_sublevels(tmp_path, cave_records):
    _write(tmp_path, "tc.json", cave_records[0])
    _write(tmp_path, "ex.json", cave_records[1])
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    sublevels = load_all_sublevels(tmp_path)
    assert sorted(sublevels) == ["ex1", "tc1", "tc2"]


def test_duplicate_sublevels_rejected(tmp_path, cave_records):
    _write(tmp_path, "a.json", cave_records[1])
    _write(tmp_path, "b.json", cave_records[1])
    with pytest.raises(RecordError, match="duplicate"):
        load_all_sublevels(tmp_path)


def test_records_to_sublevels(cave_records):
    assert sorted(records_to_sublevels(cave_records)) == ["ex1", "tc1", "tc2"]


def test_loaded_floor_is_not_expanded_twice(cave_records):
    floor = cave_from_record(cave_records[0]).floors[0]
    assert floor.units_prepared
    assert len(floor.cave_units) == 12
    assert labels(floor.prepared_units()) == labels(floor.cave_units)
    assert sorted(labels(floor.base_units())) == ["cap_c@0", "room_a@0", "way_b@0"]


@pytest.mark.parametrize("field,value", [
    ("width", "wide"),
    ("height", None),
    ("width", [2]),
    ("width", True),
])
def test_bad_unit_number_is_record_error(field, value):
    record = unit_record("u", 1, 1)
    record[field] = value
    with pytest.raises(RecordError, match=field):
        unit_from_record(record)


def test_bad_floor_number_is_record_error():
    with pytest.raises(RecordError, match="cap_probability"):
        floor_from_record(floor_record(0, [], cap_probability="high"), cave_name="TC")


def test_bad_nested_number_is_record_error():
    record = floor_record(0, [])
    record["gate_info"][0]["health"] = "lots"
    with pytest.raises(RecordError, match="health"):
        floor_from_record(record, cave_name="TC")


@pytest.mark.parametrize("floors", [None, {"sublevel": 0}, "TC1"])
def test_floors_must_be_a_list(floors):
    with pytest.raises(RecordError, match="floors"):
        cave_from_record(cave_record("TC", floors))


def test_cave_record_must_be_an_object():
    with pytest.raises(RecordError):
        cave_from_record([floor_record(0, [])])


def test_doors_must_be_a_list():
    record = unit_record("u", 1, 1)
    record["doors"] = {"direction": 0, "side_lateral_offset": 0}
    with pytest.raises(RecordError, match="doors"):
        unit_from_record(record)


def test_load_file_with_bad_value(tmp_path):
    record = cave_record("TC", [floor_record(0, [unit_record("u", 1, 1)])])
    record["floors"][0]["cave_units"][0]["width"] = "1x"
    path = _write(tmp_path, "tc.json", record)
    with pytest.raises(RecordError, match="width"):
        load_cave_file(path)


@pytest.mark.parametrize("field", ["has_geyser", "exit_plugged", "is_final_floor"])
@pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
def test_flags_must_be_booleans(field, value):
    with pytest.raises(RecordError, match=field):
        floor_from_record(floor_record(0, [], **{field: value}), cave_name="TC")


def test_flags_default_to_false():
    floor = floor_from_record(floor_record(0, []), cave_name="TC")
    assert (floor.has_geyser, floor.exit_plugged, floor.is_final_floor) == (False, False, False)
