[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "npuzzle"
version = "0.1.0"
description = "Solve sliding-tile puzzles with A* search on Manhattan distance and animate the solution in the terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["n-puzzle", "8-puzzle", "15-puzzle", "sliding puzzle", "a-star", "search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
npuzzle = "npuzzle.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["npuzzle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
