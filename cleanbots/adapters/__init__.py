"""Storage for robots, rooms, tasks and the error log, with a MongoDB backend."""