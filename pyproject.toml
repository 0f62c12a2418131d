[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dragchess"
version = "0.1.0"
description = "Drag-and-drop chess against an alpha-beta search engine, with a full legal move generator"
requires-python = ">=3.10"
keywords = ["chess", "game", "alpha-beta", "pygame", "fen"]
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
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dragchess = "dragchess.app:main"

[tool.hatch.build.targets.wheel]
packages = ["dragchess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
