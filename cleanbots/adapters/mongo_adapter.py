"""MongoDB storage for tasks and the error log, on top of robots and rooms."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pymongo.errors import PyMongoError

from cleanbots.adapters.base import Adapter, TaskConflictError
from cleanbots.adapters.robot_store import MongoRobotStore
from cleanbots.robot import Robot
from cleanbots.room import Room

logger = logging.getLogger(__name__)

ONGOING = "Ongoing"
AVAILABLE = "Available"
CANCELLED = "Cancelled"
BUSY = "Busy"


class MongoAdapter(MongoRobotStore, Adapter):
    """The full store: robots, rooms, tasks in ``task`` and errors in ``error``."""

    # Tasks

    def _check_free(self, robot_id: int, room_number: int) -> None:
        if self.db["robot"].find_one({"_id": robot_id, "Task Status": ONGOING}):
            raise TaskConflictError("Robot In Progress of Task")
        if self.db["room"].find_one({"Room Id": room_number, "Availability": BUSY}):
            raise TaskConflictError("Robot In Progress of In Room")

    def _start_task(
        self, robot_id: int, room_number: int, error_status: str, task_percent: int
    ) -> None:
        try:
            self.db["task"].insert_one(
                {
                    "robot_id": robot_id,
                    "Room": room_number,
                    "Error Status": error_status,
                    "Task Status": ONGOING,
                    "Task Percent": task_percent,
                }
            )
            self.db["robot"].update_one(
                {"_id": robot_id}, {"$set": {"Task Status": ONGOING}}
            )
        except PyMongoError:
            logger.exception("could not write task for robot %s", robot_id)
        self.update_room_availability(room_number, BUSY)

    def write_task(self, task: Robot) -> None:
        """Start a task for ``task``'s robot in the room it holds.

        Raises TaskConflictError if the robot already has an ongoing task
        or the room is busy.
        """
        room_number = task.task_room.room_number
        self._check_free(task.robot_id, room_number)
        self._start_task(task.robot_id, room_number, task.error_status, task.task_percent)

    def write_task_for(self, robot_id: int, room_number: int) -> None:
        """Start a task for a stored robot in a stored room.

        Raises TaskConflictError if the robot already has an ongoing task
        or the room is busy.
        """
        self._check_free(robot_id, room_number)
        robot = self.read_robot(robot_id)
        self._start_task(robot_id, room_number, robot.error_status, 0)

    def _task_robot(self, doc: Mapping[str, Any]) -> Robot:
        robot_id = doc["robot_id"]
        info = self.read_robot(robot_id)
        return Robot(
            robot_id=robot_id,
            size=info.size,
            water_level=info.water_level,
            battery_level=info.battery_level,
            error_status=doc.get("Error Status") or "",
            task_status=doc.get("Task Status") or "",
            task_room=self.read_room(doc["Room"]),
            function_type=info.function_type,
            task_percent=doc.get("Task Percent") or 0,
        )

    def read_ongoing_task(self, robot_id: int) -> Robot:
        """Return the robot merged with its ongoing task.

        Without an ongoing task the robot's own record is returned with an
        empty room and no progress.
        """
        doc = self.db["task"].find_one({"robot_id": robot_id, "Task Status": ONGOING})
        if doc:
            return self._task_robot(doc)
        info = self.read_robot(robot_id)
        return Robot(
            robot_id=robot_id,
            size=info.size,
            water_level=info.water_level,
            battery_level=info.battery_level,
            error_status=info.error_status,
            task_status=info.task_status,
            task_room=Room(),
            function_type=info.function_type,
            task_percent=0,
        )

    def read_all_ongoing_tasks(self) -> list[Robot]:
        """Return every ongoing task, in storage order."""
        return [
            self._task_robot(doc)
            for doc in self.db["task"].find({"Task Status": ONGOING})
        ]

    def read_robot_tasks(self, robot_id: int) -> list[Robot]:
        """Return every task, past and present, of one robot."""
        return [
            self._task_robot(doc) for doc in self.db["task"].find({"robot_id": robot_id})
        ]

    def read_all_tasks(self) -> list[Robot]:
        """Return every task, in storage order."""
        return [self._task_robot(doc) for doc in self.db["task"].find({})]

    def _log_error(self, update: Robot) -> None:
        self.db["error"].insert_one(
            {
                "robot_id": update.robot_id,
                "Size": update.size,
                "Water Level": update.water_level,
                "Battery Level": update.battery_level,
                "Function Type": update.function_type,
                "Error Status": update.error_status,
                "Room": update.task_room.room_number,
                "Task Percent": update.task_percent,
            }
        )

    def _set_task(self, update: Robot, task_status: str) -> None:
        self.db["task"].update_one(
            {"robot_id": update.robot_id, "Task Status": ONGOING},
            {
                "$set": {
                    "robot_id": update.robot_id,
                    "Room": update.task_room.room_number,
                    "Error Status": update.error_status,
                    "Task Status": task_status,
                    "Task Percent": update.task_percent,
                }
            },
        )

    def _set_robot(self, update: Robot, task_status: str) -> None:
        self.db["robot"].update_one(
            {"_id": update.robot_id},
            {
                "$set": {
                    "battery level": update.battery_level,
                    "water_level": update.water_level,
                    "Task Status": task_status,
                    "Error Status": update.error_status,
                }
            },
        )

    def update_task_status(self, updates: Iterable[Robot]) -> None:
        """Bring stored tasks, robots and rooms in line with the given robots.

        A robot with an ongoing task has that task closed when it reports an
        error (which is also logged), reaches 100 percent, or is cancelled;
        its room then becomes available. Otherwise the task is updated and
        the room stays busy. Robots without an ongoing task only have their
        own record updated.
        """
        for update in updates:
            task = self.db["task"].find_one(
                {"robot_id": update.robot_id, "Task Status": ONGOING}
            )
            if not task:
                try:
                    self._set_robot(update, update.task_status)
                except PyMongoError:
                    logger.exception("could not update robot %s", update.robot_id)
                continue

            room_number = task["Room"]
            log_error = False
            if update.error_status:
                log_error = True
                task_status, robot_status, availability = CANCELLED, AVAILABLE, AVAILABLE
            elif update.task_percent == 100 or update.task_status == CANCELLED:
                task_status, robot_status, availability = (
                    update.task_status,
                    AVAILABLE,
                    AVAILABLE,
                )
            else:
                task_status, robot_status, availability = (
                    update.task_status,
                    update.task_status,
                    BUSY,
                )

            try:
                if log_error:
                    self._log_error(update)
                self._set_task(update, task_status)
                self._set_robot(update, robot_status)
            except PyMongoError:
                logger.exception("could not update task of robot %s", update.robot_id)

            self.update_room_availability(room_number, availability)

    def delete_all_tasks(self) -> None:
        """Drop the task collection."""
        self.db["task"].drop()

    # Error log

    def get_error_log(self, robot_id: int) -> list[str]:
        """Return one description for each error recorded for the robot."""
        lines = []
        for doc in self.db["error"].find({"robot_id": robot_id}):
            room = self.read_room(doc["Room"])
            lines.append(
                f"Robot Id: {doc['robot_id']}, "
                f"Error Status: {doc.get('Error Status', '')}, "
                f"Task Percent: {doc.get('Task Percent')}, "
                f"Function Type: {doc.get('Function Type', '')}, "
                f"Room Number: {doc['Room']}, "
                f"Room Size: {room.room_size}, "
                f"Room Floor Type: {room.floor_type}"
            )
        return lines

    def delete_error_log(self) -> None:
        """Drop the error collection."""
        self.db["error"].drop()