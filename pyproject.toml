[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chessgame"
version = "0.1.0"
description = "Chess rules engine, UCI game interface with JSON saves, analysis helpers, board geometry and an in-memory multiplayer service"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "game", "fen", "uci", "board"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chessgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
