[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dominion-node"
version = "0.1.0"
description = "Simulated field unit for a domination-style control point game: two team buttons, two LEDs and a stopwatch per team."
requires-python = ">=3.10"
dependencies = []
keywords = ["airsoft", "domination", "control point", "game", "state machine", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dominion-node = "dominion_node.main:main"

[tool.hatch.build.targets.wheel]
packages = ["dominion_node"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
