[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mipskit"
version = "0.1.0"
description = "Tools for little-endian MIPS COFF programs: NOFF and flat converters, simulated memory and system calls, a directory table, and teaching data structures"
requires-python = ">=3.10"
dependencies = []
keywords = ["mips", "coff", "noff", "object-file", "loader", "stack", "linked-list"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Disassemblers",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mipskit-coff2noff = "mipskit.noff:main"
mipskit-coff2flat = "mipskit.flat:main"
mipskit-stack-demo = "mipskit.stacks:main"
mipskit-bounded-stack-demo = "mipskit.genericstack:main"

[tool.hatch.build.targets.wheel]
packages = ["mipskit"]

[tool.pytest.ini_options]
addopts = "-ra"
