[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubcaster"
version = "0.1.0"
description = "A grid-based raycasting engine that loads .cub scene files and renders a first-person view"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "dda", "xpm", "maze", "first-person"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubcaster = "cubcaster.game:main"

[tool.hatch.build.targets.wheel]
packages = ["cubcaster"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
