[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tickmatch"
version = "0.1.0"
description = "Price-time-priority order matching engine with partitioned runtime, replay log and thread-coordination primitives"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "matching-engine",
    "order-book",
    "trading",
    "price-time-priority",
    "ring-buffer",
    "concurrency",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
tickmatch-sim = "tickmatch.simulation:main"
tickmatch-atomics-lab = "tickmatch.atomics_lab:main"
tickmatch-run-all = "tickmatch.run_all:main"

[tool.hatch.build.targets.wheel]
packages = ["tickmatch"]

[tool.hatch.build.targets.sdist]
include = ["tickmatch", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
