[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecotetris"
version = "0.1.0"
description = "A recycling-themed falling-block puzzle game where uniform lines of one kind of trash score points"
requires-python = ">=3.10"
keywords = ["tetris", "puzzle", "game", "recycling", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ecotetris = "ecotetris.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ecotetris"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
