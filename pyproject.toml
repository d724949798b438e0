[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oolab"
version = "0.1.0"
description = "Object-oriented design exercises: logic circuit simulation, callbacks, emulated sensor nodes, thread coordination and small simulations"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "education",
    "object-oriented design",
    "logic simulator",
    "adder",
    "netlist",
    "threading",
    "callbacks",
    "monty hall",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oolab-logic = "oolab.logic:main"
oolab-adders = "oolab.adders:main"
oolab-netlist = "oolab.netlist:main"
oolab-driving = "oolab.driving:main"
oolab-sensors = "oolab.sensors:main"
oolab-callbacks = "oolab.callbacks:main"
oolab-concurrency = "oolab.concurrency:main"
oolab-world = "oolab.world:main"
oolab-montyhall = "oolab.montyhall:main"

[tool.hatch.build.targets.wheel]
packages = ["oolab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
