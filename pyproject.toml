[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "airport-inspector"
version = "0.1.0"
description = "Browse airport schedules and yearly or monthly flight workload from a PostgreSQL bookings database"
requires-python = ">=3.10"
keywords = ["airport", "flights", "schedule", "postgresql", "statistics", "database"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
airport-inspector = "airport_inspector.app:main"

[tool.hatch.build.targets.wheel]
packages = ["airport_inspector"]

[tool.pytest.ini_options]
addopts = "-ra"
