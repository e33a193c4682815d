# cleanbots

A small toolkit for running a fleet of simulated cleaning robots and keeping
their state in MongoDB.

## What is in it

- `cleanbots.room.Room` and `cleanbots.robot.Robot`: dataclasses describing a
  room (number, size, floor type, availability) and a robot (id, size, water
  and battery levels, error and task status, task room, function type, task
  percent). `Room()` with no arguments is the empty placeholder room.
- `cleanbots.robot_manager.RobotManager`: an in-memory list of robots with
  `add_robot`, `find_robot_by_id` (raises `LookupError` when the id is
  unknown) and `remove_robot_by_id` (returns whether anything was removed).
  It supports `len()` and iteration.
- `cleanbots.simulation`:
  - `calculate_task_duration(room_size)` and `get_resource_usage(room_size)`
    give the seconds and the water/battery used by one tenth of a task in a
    `"Small"`, `"Medium"` or `"Large"` room (0 for anything else).
  - `check_robot(robot)` tells whether a robot has enough water and battery
    to finish its task.
  - `fix(robot)` clears a robot's error and makes it available, full and at
    0 percent.
  - `calculate_error_status(robot, rng=None)` gives a robot a random failure
    (`"Overheat"`, `"Motor Failure"` or `"Sensor Failure"`, each tried with a
    1 in 1000 chance) and cancels its task.
  - `TaskExecutor(robots, lock=None, interval=10.0, time_scale=1.0, rng=None)`
    runs the task loop over a list or a `RobotManager`. `tick()` runs one
    pass: finished or cancelled tasks are reset, idle robots refill by 10 up
    to their size's capacity (100, 120, or 140 for anything else), robots
    that cannot finish are cancelled, and ongoing tasks advance by 10
    percent in worker threads. `start()` and `stop()` run and end the loop in
    a background thread.
- `cleanbots.threadsafe_queue`: `ThreadsafeQueue`, a FIFO queue with `push`,
  `wait_and_pop(timeout=None)` (raises `TimeoutError` if the wait runs out),
  `try_pop` (returns `None` when empty) and `empty`; and `id_to_str`, which
  gives a printable thread id.
- `cleanbots.adapters.base`: the abstract `Adapter` storage interface and the
  errors `DuplicateRobotError` and `TaskConflictError` (both `ValueError`).
- `cleanbots.adapters.robot_store.MongoRobotStore`: robots in the `robot`
  collection and rooms in the `room` collection.
- `cleanbots.adapters.mongo_adapter.MongoAdapter`: the full `Adapter`, adding
  tasks in the `task` collection and an error log in the `error` collection.
  `write_robot` raises `DuplicateRobotError` for a taken id; `write_task` and
  `write_task_for` raise `TaskConflictError` when the robot already has an
  ongoing task or the room is `"Busy"`.
- `cleanbots.data_manager`: `RobotData`, `TaskData`, `load_rooms(path)` and
  `DataManager`, which assigns robot ids, loads rooms from a text file, hands
  out tasks, and pushes the simulation's state to the store every half
  second on a background thread.

## Installation

```
pip install .
```

The storage layer needs a MongoDB server. By default `MongoAdapter` connects
to `mongodb://localhost:27017` and uses the database `mydb`; pass `uri` and
`db_name`, or an already open `database`, to change that.

## Quick look

```python
from cleanbots.room import Room
from cleanbots.robot import Robot
from cleanbots.robot_manager import RobotManager
from cleanbots.simulation import check_robot, fix

manager = RobotManager()
room = Room(101, "Small", "Tile", "Available")
robot = Robot(1, "Small", 100, 100, "", "Ongoing", room, "Scrub", 0)
manager.add_robot(robot)

print(len(manager), check_robot(manager.find_robot_by_id(1)))
```

Working with the store through the data manager:

```python
from cleanbots.data_manager import DataManager, RobotData, TaskData

with DataManager(rooms_path="rooms.txt") as manager:
    robot = RobotData(robot_size="Large", robot_function="Vacuum")
    manager.add_robot(robot)          # writes the new id into robot.robot_id
    manager.add_task(TaskData(task_room="102", task_robot=robot))
    print(manager.get_tasks_table())
```

Creating a `DataManager` first empties the robot, task, room and error
collections, then writes the rooms from `rooms_path` (default `rooms.txt` in
the current directory; a missing file is logged and no rooms are loaded).
Pass `start=False` to keep the update thread from starting. Leaving the
`with` block, or calling `close()`, stops the background threads.

A rooms file holds one room per line, as `number,size,floor type,availability.`;
empty lines and lines starting with `#` are skipped.

## Demo

With a MongoDB server running locally:

```
cleanbots-demo
```

This starts a task for a sample robot (id 18, in room 3) and then drops the
robot collection; the task record and any room update are left in place.
`--uri` and `--db` choose the server and database. The command exits with
status 1 if the robot or room is already busy.

## What it does not do

There is no graphical or interactive interface: `DataManager` offers the
calls such an interface would make, but nothing here draws screens or reads
user input. The only command is the `cleanbots-demo` demonstration, and all
storage goes through MongoDB; there is no other backend.

## Tests

```
pip install .[test]
pytest
```