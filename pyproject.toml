[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "knifegame"
version = "0.1.0"
description = "A top-down arena game of orbiting knives, pickups and AI rivals"
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["game", "arcade", "arena", "pygame", "battle-royale"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
knifegame = "knifegame.app:main"

[tool.hatch.build.targets.wheel]
packages = ["knifegame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
