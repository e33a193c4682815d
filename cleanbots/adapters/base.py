"""The storage interface that the data manager talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from cleanbots.robot import Robot
from cleanbots.room import Room


class DuplicateRobotError(ValueError):
    """A robot with the same id is already stored."""


class TaskConflictError(ValueError):
    """A task cannot start: the robot or the room is already busy."""


class Adapter(ABC):
    """Persistent storage for robots, rooms, tasks and the error log."""

    # Robots

    @abstractmethod
    def write_robot(self, robot: Robot) -> None:
        """Store a new robot; raise DuplicateRobotError if its id is taken."""

    @abstractmethod
    def read_robot(self, robot_id: int) -> Robot:
        """Return the stored robot with this id."""

    @abstractmethod
    def read_all_robots(self) -> list[Robot]:
        """Return every stored robot."""

    @abstractmethod
    def delete_robot(self, robot_id: int) -> str:
        """Delete a robot and describe what was removed."""

    @abstractmethod
    def delete_all_robots(self) -> None:
        """Remove every robot."""

    @abstractmethod
    def update_robot(self, robot_id: int, water_level: int, battery_level: int) -> None:
        """Set a robot's water and battery levels."""

    @abstractmethod
    def get_all_ids(self) -> list[int]:
        """Return the ids of every stored robot."""

    # Rooms

    @abstractmethod
    def write_rooms(self, rooms: Iterable[Room]) -> None:
        """Store each of the given rooms."""

    @abstractmethod
    def update_room_availability(self, room_id: int, availability: str) -> None:
        """Set the availability of a stored room."""

    @abstractmethod
    def read_room(self, room_id: int) -> Room:
        """Return the stored room with this number."""

    @abstractmethod
    def delete_rooms(self) -> None:
        """Remove every room."""

    @abstractmethod
    def read_all_rooms(self) -> list[Room]:
        """Return every stored room."""

    # Tasks

    @abstractmethod
    def write_task(self, task: Robot) -> None:
        """Start a task described by a robot and the room it holds."""

    @abstractmethod
    def write_task_for(self, robot_id: int, room_number: int) -> None:
        """Start a task for a stored robot in a stored room."""

    @abstractmethod
    def read_ongoing_task(self, robot_id: int) -> Robot:
        """Return a robot merged with its ongoing task, if any."""

    @abstractmethod
    def read_all_ongoing_tasks(self) -> list[Robot]:
        """Return every ongoing task."""

    @abstractmethod
    def read_robot_tasks(self, robot_id: int) -> list[Robot]:
        """Return every task, past and present, of one robot."""

    @abstractmethod
    def read_all_tasks(self) -> list[Robot]:
        """Return every task."""

    @abstractmethod
    def update_task_status(self, updates: Iterable[Robot]) -> None:
        """Bring stored tasks, robots and rooms in line with the given robots."""

    @abstractmethod
    def delete_all_tasks(self) -> None:
        """Remove every task."""

    # Error log

    @abstractmethod
    def get_error_log(self, robot_id: int) -> list[str]:
        """Return one line for each error recorded for the robot."""

    @abstractmethod
    def delete_error_log(self) -> None:
        """Remove the whole error log."""