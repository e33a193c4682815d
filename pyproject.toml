[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cleanbots"
version = "0.1.0"
description = "Simulation and MongoDB-backed bookkeeping for a fleet of cleaning robots"
requires-python = ">=3.10"
keywords = ["robots", "simulation", "cleaning", "mongodb", "fleet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "pymongo",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cleanbots-demo = "cleanbots.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cleanbots"]

[tool.pytest.ini_options]
addopts = "-ra"
