[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "basekit"
version = "1.0.0"
description = "Threading primitives, timestamps, time zones and a rolling file logger for server programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "threads", "thread-pool", "timezone", "tzif", "timestamp", "blocking-queue"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["basekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
