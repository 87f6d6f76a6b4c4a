[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mmrlogger"
version = "0.1.0"
description = "Buffered, size-rotating file logger with synchronous and background-thread writing"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "logger", "rotation", "asynchronous", "buffered", "benchmark"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mmrlogger-bench = "mmrlogger.main:main"

[tool.hatch.build.targets.wheel]
packages = ["mmrlogger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
