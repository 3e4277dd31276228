[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "texttetris"
version = "1.0.0"
description = "A falling-block puzzle game played in the terminal, with a hold slot, ghost piece and a ranked score history file."
requires-python = ">=3.10"
dependencies = []
keywords = ["tetris", "game", "terminal", "puzzle", "console"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Operating System :: Microsoft :: Windows",
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
texttetris = "texttetris.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["texttetris"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
