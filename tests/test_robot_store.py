import copy
import json

import pytest

from cleanbots.adapters.base import DuplicateRobotError
from cleanbots.adapters.robot_store import MongoRobotStore
from cleanbots.robot import Robot
from cleanbots.room import Room


class _FakeCollection:
    def __init__(self):
        self.docs = []

    @staticmethod
    def _matches(doc, query):
        return all(doc.get(key) == value for key, value in (query or {}).items())

    def find_one(self, query=None):
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query=None):
        return iter([copy.deepcopy(d) for d in self.docs if self._matches(d, query)])

    def insert_one(self, doc):
        self.docs.append(copy.deepcopy(doc))

    def delete_one(self, query):
        for position, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[position]
                return

    def update_one(self, query, update):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update["$set"])
                return

    def drop(self):
        self.docs.clear()


class _FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, _FakeCollection())


@pytest.fixture
def store():
    return MongoRobotStore(database=_FakeDatabase())


def _five_rooms(fourth=("Small", "Tile")):
    rooms = [Room(n, "Small", "Tile", "Available") for n in range(1, 6)]
    rooms[3] = Room(4, fourth[0], fourth[1], "Available")
    return rooms


def test_write_and_read_robot(store):
    temp = Robot(1000, "Large", 100, 50, "", "Vacuum", Room(), "Scrub", 0)
    store.write_robot(temp)
    information = store.read_robot(1000)
    assert information.robot_id == temp.robot_id
    assert information.size == temp.size
    assert information.water_level == temp.water_level
    assert information.battery_level == temp.battery_level
    assert information.function_type == temp.function_type
    assert information.error_status == temp.error_status
    assert information.task_status == temp.task_status


def test_write_duplicate_id_raises(store):
    store.write_robot(Robot(379, "Large", 100, 50, "", "Vacuum", Room(), "Scrub", 0))
    with pytest.raises(DuplicateRobotError):
        store.write_robot(Robot(379, "Small", 60, 50, "", "Scrubber", Room(), "Scrub", 0))


def test_delete_then_read_reports_missing(store):
    store.write_robot(Robot(884, "Large", 100, 50, "", "Vacuum", Room(), "Scrub", 0))
    store.delete_robot(884)
    robot = store.read_robot(884)
    assert robot.error_status == "No instance of robot with id"
    assert robot.robot_id == 884


def test_delete_nonexistent_robot(store):
    assert store.delete_robot(884) == "No instance of robot with id 884"


def test_delete_returns_stored_document(store):
    store.write_robot(Robot(884, "Large", 100, 50, "", "Vacuum", Room(), "Scrub", 0))
    document = json.loads(store.delete_robot(884))
    assert document["_id"] == 884
    assert document["size"] == "Large"
    assert store.get_all_ids() == []


def test_update_robot(store):
    temp = Robot(9009, "Large", 50, 100, "", "Vacuum", Room(), "Scrub", 0)
    store.write_robot(temp)
    store.update_robot(9009, 100, 50)
    information = store.read_robot(9009)
    assert information.robot_id == 9009
    assert information.water_level == 100
    assert information.battery_level == 50
    assert information.size == temp.size
    assert information.function_type == temp.function_type
    assert information.error_status == temp.error_status
    assert information.task_status == temp.task_status


def test_get_all_ids(store):
    for robot_id in (1, 2, 3, 4):
        store.write_robot(Robot(robot_id, "Large", 50, 100, "", "Vacuum", Room(), "Scrub", 0))
    assert store.get_all_ids() == [1, 2, 3, 4]


def test_delete_all_robots(store):
    store.write_robot(Robot(1, "Large", 50, 100, "", "Vacuum", Room(), "Scrub", 0))
    store.delete_all_robots()
    assert store.get_all_ids() == []


def test_read_all_robots(store):
    template = Robot(1, "Large", 50, 100, "", "Vacuum", Room(), "Scrub", 0)
    for robot_id in (1, 2, 3, 4):
        store.write_robot(Robot(robot_id, "Large", 50, 100, "", "Vacuum", Room(), "Scrub", 0))
    robots = store.read_all_robots()
    assert [robot.robot_id for robot in robots] == [1, 2, 3, 4]
    for robot in robots:
        assert robot.size == template.size
        assert robot.water_level == template.water_level
        assert robot.battery_level == template.battery_level
        assert robot.function_type == template.function_type
        assert robot.error_status == template.error_status
        assert robot.task_status == template.task_status


def test_read_all_robots_when_empty(store):
    assert store.read_all_robots() == []


def test_read_all_robots_skips_documents_without_task_status(store):
    store.db["robot"].insert_one({"_id": 7, "size": "Small"})
    store.write_robot(Robot(8, "Small", 100, 100, "", "Available", Room(), "Scrub", 0))
    assert [robot.robot_id for robot in store.read_all_robots()] == [8]


def test_write_rooms(store):
    store.write_rooms(_five_rooms())
    rooms = store.read_all_rooms()
    assert [room.room_number for room in rooms] == [1, 2, 3, 4, 5]
    for room in rooms:
        assert room.room_size == "Small"
        assert room.floor_type == "Tile"
        assert room.availability == "Available"


def test_read_room(store):
    store.write_rooms(_five_rooms(("Medium", "Carpet")))
    room = store.read_room(4)
    assert room == Room(4, "Medium", "Carpet", "Available")


def test_read_missing_room(store):
    assert store.read_room(9) == Room(9, "", "", "No Room with id")


def test_update_room_availability(store):
    store.write_rooms(_five_rooms(("Medium", "Carpet")))
    store.update_room_availability(1, "Busy")
    store.update_room_availability(2, "Unavailable")
    assert store.read_room(1) == Room(1, "Small", "Tile", "Busy")
    assert store.read_room(2) == Room(2, "Small", "Tile", "Unavailable")


def test_update_missing_room_is_ignored(store):
    store.write_rooms(_five_rooms())
    store.update_room_availability(9, "Busy")
    assert store.read_room(9).availability == "No Room with id"
    assert all(room.availability == "Available" for room in store.read_all_rooms())


def test_delete_rooms(store):
    store.write_rooms(_five_rooms())
    store.delete_rooms()
    assert store.read_all_rooms() == []