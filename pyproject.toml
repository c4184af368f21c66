[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtype"
version = "0.1.0"
description = "A networked side-scrolling shooter: an entity-component game server over UDP and a pygame client."
requires-python = ">=3.10"
keywords = ["game", "shooter", "ecs", "udp", "multiplayer", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rtype-server = "rtype.server:main"
rtype-client = "rtype.client:main"

[tool.hatch.build.targets.wheel]
packages = ["rtype"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
