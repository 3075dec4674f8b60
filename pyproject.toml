[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "threadlab"
version = "0.1.0"
description = "Thread-safe building blocks, a thread pool, a delayed-task scheduler and small threading demonstrations"
requires-python = ">=3.10"
dependencies = []
keywords = ["threading", "concurrency", "thread pool", "scheduler", "lock", "barrier", "quicksort"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-timeout"]

[project.scripts]
threadlab = "threadlab.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["threadlab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
