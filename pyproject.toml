[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gbakit"
version = "0.1.0"
description = "Register bitfield types, a 32-bit PCG random number generator, non-blocking locks and SRAM save media access for GBA-style software."
requires-python = ">=3.10"
dependencies = []
keywords = ["gba", "bitfield", "pcg", "random", "save", "sram", "mmio"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gbakit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
