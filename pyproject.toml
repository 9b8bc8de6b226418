[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gardenvalves"
version = "0.1.0"
description = "Scheduled two-zone garden watering and pool warm-up cycles with a small web control panel"
requires-python = ">=3.10"
dependencies = []
keywords = ["garden", "watering", "irrigation", "relay", "schedule", "home automation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Polish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gardenvalves = "gardenvalves.main:main"

[tool.hatch.build.targets.wheel]
packages = ["gardenvalves"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
