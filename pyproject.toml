[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "regconv"
version = "1.0.0"
description = "Converters between Modbus register values and MQTT payload values"
requires-python = ">=3.10"
dependencies = []
keywords = ["modbus", "mqtt", "registers", "converter", "iot"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Topic :: Home Automation",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["regconv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
