[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pizzadispatch"
version = "0.1.0"
description = "Threaded pizza delivery simulation that matches drivers to customers by Manhattan distance, with an event-log verifier"
requires-python = ">=3.10"
dependencies = []
keywords = ["concurrency", "threads", "condition-variables", "simulation", "dispatch", "matching"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pizza-dispatch = "pizzadispatch.delivery:main"
pizza-verify = "pizzadispatch.verifier:main"

[tool.hatch.build.targets.wheel]
packages = ["pizzadispatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
