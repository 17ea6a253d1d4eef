[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "breakinout"
version = "0.1.0"
description = "A brick-breaking arcade game with ghost layers, musical blocks and a level editor"
requires-python = ">=3.10"
keywords = ["game", "arcade", "breakout", "level-editor", "pygame"]
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
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
breakinout = "breakinout.app:main"

[tool.hatch.build.targets.wheel]
packages = ["breakinout"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
