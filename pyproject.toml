[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "csmasim"
version = "0.1.0"
description = "Step-by-step simulation of 1-persistent, non-persistent and p-persistent CSMA on a shared channel"
requires-python = ">=3.10"
dependencies = []
keywords = ["csma", "mac", "simulation", "networking", "collision", "backoff"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
csmasim = "csmasim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["csmasim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
