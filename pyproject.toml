[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "log4you"
version = "0.1.3"
description = "Structured logging with time-ordered UUID log IDs, configured from a YAML file."
requires-python = ">=3.10"
keywords = ["logging", "uuid", "uuid7", "tracing", "structured-logging", "yaml"]
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
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
log4you-demo = "log4you.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["log4you"]

[tool.pytest.ini_options]
addopts = "-ra"
