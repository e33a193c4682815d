"""MongoDB storage for robots and rooms."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from cleanbots.adapters.base import DuplicateRobotError
from cleanbots.robot import Robot
from cleanbots.room import Room

logger = logging.getLogger(__name__)

DEFAULT_URI = "mongodb://localhost:27017"
DEFAULT_DB_NAME = "mydb"

MISSING_ROBOT = "No instance of robot with id"
MISSING_ROOM = "No Room with id"


def _robot_from_doc(doc: Mapping[str, Any]) -> Robot:
    return Robot(
        robot_id=doc["_id"],
        size=doc.get("size") or "",
        water_level=doc.get("water_level") or 0,
        battery_level=doc.get("battery level") or 0,
        error_status=doc.get("Error Status") or "",
        task_status=doc.get("Task Status") or "",
        task_room=Room(),
        function_type=doc.get("Function Type") or "",
        task_percent=0,
    )


def _room_from_doc(doc: Mapping[str, Any]) -> Room:
    return Room(
        room_number=doc["Room Id"],
        room_size=doc.get("Room Size") or "",
        floor_type=doc.get("Floor Type") or "",
        availability=doc.get("Availability") or "",
    )


class MongoRobotStore:
    """Keeps robots in the ``robot`` collection and rooms in ``room``.

    Pass ``database`` to use an already open database; otherwise one is
    opened from ``uri`` and ``db_name``.
    """

    def __init__(
        self,
        database: Any = None,
        uri: str = DEFAULT_URI,
        db_name: str = DEFAULT_DB_NAME,
    ) -> None:
        self._client: MongoClient | None = None
        if database is None:
            self._client = MongoClient(uri)
            database = self._client[db_name]
        self.db = database

    # Robots

    def write_robot(self, robot: Robot) -> None:
        """Store a new robot; raise DuplicateRobotError if its id is taken."""
        robots = self.db["robot"]
        if robots.find_one({"_id": robot.robot_id}):
            raise DuplicateRobotError("Duplicate id.")
        try:
            robots.insert_one(
                {
                    "_id": robot.robot_id,
                    "size": robot.size,
                    "water_level": robot.water_level,
                    "battery level": robot.battery_level,
                    "Function Type": robot.function_type,
                    "Error Status": robot.error_status,
                    "Task Status": robot.task_status,
                }
            )
        except PyMongoError:
            logger.exception("could not write robot %s", robot.robot_id)

    def read_robot(self, robot_id: int) -> Robot:
        """Return the stored robot, or a placeholder whose error says it is missing."""
        doc = self.db["robot"].find_one({"_id": robot_id})
        if doc:
            return _robot_from_doc(doc)
        return Robot(robot_id, error_status=MISSING_ROBOT)

    def read_all_robots(self) -> list[Robot]:
        """Return every stored robot that has a task status."""
        return [
            _robot_from_doc(doc)
            for doc in self.db["robot"].find({})
            if doc.get("Task Status") is not None
        ]

    def delete_robot(self, robot_id: int) -> str:
        """Delete a robot and return its document as JSON, or a not-found message."""
        robots = self.db["robot"]
        doc = robots.find_one({"_id": robot_id})
        if not doc:
            return f"{MISSING_ROBOT} {robot_id}"
        information = json.dumps(dict(doc), default=str)
        robots.delete_one({"_id": robot_id})
        return information

    def delete_all_robots(self) -> None:
        """Drop the robot collection."""
        self.db["robot"].drop()

    def update_robot(self, robot_id: int, water_level: int, battery_level: int) -> None:
        """Set a robot's water and battery levels."""
        self.db["robot"].update_one(
            {"_id": robot_id},
            {"$set": {"battery level": battery_level, "water_level": water_level}},
        )

    def get_all_ids(self) -> list[int]:
        """Return the ids of every stored robot, in storage order."""
        return [doc["_id"] for doc in self.db["robot"].find({})]

    # Rooms

    def write_rooms(self, rooms: Iterable[Room]) -> None:
        """Store each room as its own document."""
        collection = self.db["room"]
        for room in rooms:
            try:
                collection.insert_one(
                    {
                        "Room Id": room.room_number,
                        "Room Size": room.room_size,
                        "Floor Type": room.floor_type,
                        "Availability": room.availability,
                    }
                )
            except PyMongoError:
                logger.exception("could not write room %s", room.room_number)

    def update_room_availability(self, room_id: int, availability: str) -> None:
        """Set the availability of a room; rooms that are not stored are ignored."""
        collection = self.db["room"]
        if not collection.find_one({"Room Id": room_id}):
            return
        try:
            collection.update_one(
                {"Room Id": room_id}, {"$set": {"Availability": availability}}
            )
        except PyMongoError:
            logger.exception("could not update availability of room %s", room_id)

    def read_room(self, room_id: int) -> Room:
        """Return the stored room, or an empty one whose availability says it is missing."""
        doc = self.db["room"].find_one({"Room Id": room_id})
        if doc:
            return _room_from_doc(doc)
        return Room(room_id, "", "", MISSING_ROOM)

    def delete_rooms(self) -> None:
        """Drop the room collection."""
        self.db["room"].drop()

    def read_all_rooms(self) -> list[Room]:
        """Return every stored room, in storage order."""
        return [_room_from_doc(doc) for doc in self.db["room"].find({})]