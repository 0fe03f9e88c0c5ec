[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flykit"
version = "1.0.0"
description = "Hardware abstraction types, simulator IPC commands, a BNO055 sensor driver and autothrottle state logic for small flight-control stacks"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "embedded",
    "hal",
    "flight-control",
    "autothrottle",
    "bno055",
    "i2c",
    "spi",
    "state-machine",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flykit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
