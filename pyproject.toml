[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "merinobreakout"
version = "0.1.0"
description = "Game logic for a brick-breaking arcade game with power-up barrels, portals, meanies and shareable unlock codes"
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["breakout", "arkanoid", "arcade", "game", "pygame"]
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
    "Topic :: Games/Entertainment :: Arcade",
    "Topic :: Software Development :: Libraries :: pygame",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["merinobreakout*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
