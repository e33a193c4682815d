"""Coordinates the user interface, the simulation and the robot store."""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field, replace
from pathlib import Path

from cleanbots.adapters.base import Adapter
from cleanbots.adapters.mongo_adapter import MongoAdapter
from cleanbots.robot import Robot
from cleanbots.robot_manager import RobotManager
from cleanbots.room import Room
from cleanbots.simulation import TaskExecutor, fix

logger = logging.getLogger(__name__)

DEFAULT_ROOMS_PATH = Path("rooms.txt")
UPDATE_PERIOD = 0.5

_CAPACITY = {"Large": 140, "Medium": 120}
_SMALL_CAPACITY = 100


@dataclass
class RobotData:
    """What the user interface knows about a robot."""

    robot_size: str = ""
    robot_function: str = ""
    robot_id: str = ""


@dataclass
class TaskData:
    """A task request from the user interface: a room and a robot."""

    task_room: str = ""
    task_robot: RobotData = field(default_factory=RobotData)


def load_rooms(path: str | Path) -> list[Room]:
    """Read rooms from a text file.

    Each line is ``number,size,floor type,availability.``; empty lines and
    lines starting with ``#`` are skipped. Raises ValueError if a room
    number is not an integer and OSError if the file cannot be read.
    """
    rooms = []
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if not line or line.startswith("#"):
                continue
            number, _, rest = line.partition(",")
            size, _, rest = rest.partition(",")
            floor_type, _, rest = rest.partition(",")
            availability = rest.split(".", 1)[0]
            rooms.append(Room(int(number), size, floor_type, availability))
    return rooms


class DataManager:
    """Keeps the simulation's robots and the store in step.

    On creation the store is wiped, rooms are loaded from ``rooms_path``
    and written to it, and, if ``start`` is true, the update thread begins
    running the simulation and pushing its state to the store.
    """

    def __init__(
        self,
        adapter: Adapter | None = None,
        rooms_path: str | Path = DEFAULT_ROOMS_PATH,
        start: bool = True,
    ) -> None:
        self.adapter: Adapter = adapter if adapter is not None else MongoAdapter()
        self.robots: list[RobotData] = []
        self.tasks: list[TaskData] = []
        self.ids: list[int] = []
        self.rooms: list[Room] = []
        self.robot_manager = RobotManager()
        self.lock = threading.RLock()
        self.executor = TaskExecutor(self.robot_manager, self.lock)
        self._last_id = 0
        self._stop = threading.Event()
        self._update_thread: threading.Thread | None = None

        self.adapter.delete_all_robots()
        self.adapter.delete_all_tasks()
        self.adapter.delete_rooms()
        self.adapter.delete_error_log()

        self.update_ids()
        self._add_rooms(rooms_path)

        if start:
            self.start_update_thread()

    def _add_rooms(self, path: str | Path) -> None:
        try:
            rooms = load_rooms(path)
        except OSError:
            logger.error("could not open room file %s", path)
            rooms = []
        self.rooms.extend(rooms)
        self.adapter.write_rooms(self.rooms)

    # Update thread

    def _update_loop(self) -> None:
        self.executor.start()
        try:
            while not self._stop.is_set():
                with self.lock:
                    snapshot = copy.deepcopy(list(self.robot_manager))
                    self.adapter.update_task_status(snapshot)
                self._stop.wait(UPDATE_PERIOD)
        finally:
            self.executor.stop()

    def start_update_thread(self) -> None:
        """Start the simulation and the thread that pushes it to the store."""
        if self._update_thread is not None and self._update_thread.is_alive():
            return
        self._stop.clear()
        self._update_thread = threading.Thread(target=self._update_loop, daemon=True)
        self._update_thread.start()

    def stop_update_thread(self) -> None:
        """Stop the update thread and the simulation, waiting for both."""
        self._stop.set()
        if self._update_thread is not None:
            self._update_thread.join()
            self._update_thread = None
        self.executor.stop()

    # Robots

    def _next_available_id(self) -> int:
        candidate = 1
        while candidate in self.ids:
            candidate += 1
        self._last_id = candidate
        return candidate

    def add_robot(self, robot: RobotData) -> Robot:
        """Create a robot from the interface's data, giving it the next free id.

        The id is written back into ``robot``; the new robot is returned.
        """
        with self.lock:
            new_id = self._next_available_id()
            size = robot.robot_size
            capacity = _CAPACITY.get(size, _SMALL_CAPACITY)
            new_robot = Robot(
                new_id,
                size,
                capacity,
                capacity,
                "",
                "Available",
                Room(),
                robot.robot_function,
                0,
            )
            self.adapter.write_robot(new_robot)
            robot.robot_id = str(new_id)
            self.robots.append(robot)
            self.ids.append(new_id)
            self.robot_manager.add_robot(new_robot)
            return new_robot

    def update_ids(self) -> None:
        """Reload the list of used ids from the store."""
        self.ids = self.adapter.get_all_ids()

    def id_string(self) -> str:
        """The id most recently handed out, as text."""
        return str(self._last_id)

    def get_all_robot_info(self, robot_id: int) -> Robot:
        """The stored robot merged with its ongoing task."""
        return self.adapter.read_ongoing_task(robot_id)

    def delete_robot(self, robot_id: int) -> None:
        """Remove a robot from the store, the interface list and the simulation."""
        with self.lock:
            self.adapter.delete_robot(robot_id)
            wanted = str(robot_id)
            for entry in self.robots:
                if entry.robot_id == wanted:
                    self.robots.remove(entry)
                    break
            self.robot_manager.remove_robot_by_id(robot_id)

    def get_available_robots(self) -> list[Robot]:
        """Stored robots whose task status is Available."""
        return [
            robot
            for robot in self.adapter.read_all_robots()
            if robot.task_status == "Available"
        ]

    def delete_all_robots(self) -> None:
        """Stop the update thread and remove every robot from the store."""
        self.stop_update_thread()
        with self.lock:
            self.adapter.delete_all_robots()
            self.robots.clear()

    def fix_robot(self, robot_id: int) -> None:
        """Clear a simulated robot's error; raise LookupError if it is unknown."""
        with self.lock:
            fix(self.robot_manager.find_robot_by_id(robot_id))

    # Tasks

    def add_task(self, task: TaskData) -> None:
        """Start a task for the robot in the room named by ``task``.

        Raises ValueError if the robot id or room number is not a number,
        TaskConflictError if the robot or room is busy and LookupError if
        the robot is not in the simulation.
        """
        self.tasks.append(task)
        robot_id = int(task.task_robot.robot_id)
        room_number = int(task.task_room)
        self.adapter.write_task_for(robot_id, room_number)
        with self.lock:
            robot = self.robot_manager.find_robot_by_id(robot_id)
            robot.task_status = "Ongoing"
            for room in self.rooms:
                if room.room_number == room_number:
                    robot.task_room = replace(room)
                    return

    def get_tasks_table(self) -> list[Robot]:
        """Every ongoing task in the store."""
        return self.adapter.read_all_ongoing_tasks()

    # Rooms

    def get_rooms(self) -> list[Room]:
        """Every room in the store."""
        return self.adapter.read_all_rooms()

    def get_available_rooms(self) -> list[Room]:
        """Stored rooms whose availability is Available."""
        return [
            room for room in self.adapter.read_all_rooms() if room.availability == "Available"
        ]

    def change_room_availability(self, room_id: int, is_available: bool) -> None:
        """Flip a room: an available room becomes Unavailable and the reverse."""
        availability = "Unavailable" if is_available else "Available"
        self.adapter.update_room_availability(room_id, availability)

    # Error log

    def get_error_log(self, robot_id: int) -> list[str]:
        """The stored error descriptions for a robot."""
        return self.adapter.get_error_log(robot_id)

    # Lifetime

    def close(self) -> None:
        """Stop all background work."""
        self.stop_update_thread()

    def __enter__(self) -> DataManager:
        return self

    def __exit__(self, *args) -> None:
        self.close()