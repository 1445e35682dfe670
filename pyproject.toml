[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hedgesim"
version = "0.1.0"
description = "Monte Carlo simulation of delta-hedged European option positions under geometric Brownian motion"
requires-python = ">=3.10"
dependencies = [
    "matplotlib",
]
keywords = [
    "finance",
    "options",
    "black-scholes",
    "delta-hedging",
    "monte-carlo",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hedgesim = "hedgesim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hedgesim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
