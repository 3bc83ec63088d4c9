[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "echoplay"
version = "0.1.0"
description = "Length-prefixed TCP echo client and server, plus the control logic of a small media player"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "echo", "framing", "length-prefix", "asyncio", "media-player", "slider"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
echoplay-client = "echoplay.client:main"
echoplay-server = "echoplay.server:main"

[tool.hatch.build.targets.wheel]
packages = ["echoplay"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
