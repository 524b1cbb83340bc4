[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robocmd"
version = "0.1.0"
description = "Command-based autonomous routine framework for competition robots"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "autonomous", "command", "scheduler", "competition"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["robocmd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
