[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "riftspire"
version = "0.1.0"
description = "Game engine core: entity-component scenes, camera math, vertex layouts, shader sources and a block-based visual scripting runtime"
requires-python = ">=3.10"
keywords = ["game-engine", "ecs", "visual-scripting", "blocks", "camera", "moba"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["riftspire"]

[tool.hatch.build.targets.sdist]
include = ["riftspire", "tests"]

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
