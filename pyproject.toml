[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tetherplan"
version = "0.1.0"
description = "Catenary, tether and path tools for a tethered ground vehicle and aerial vehicle pair"
requires-python = ">=3.10"
keywords = [
    "catenary",
    "tether",
    "trajectory",
    "path planning",
    "uav",
    "ugv",
    "robotics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
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
dependencies = [
    "numpy",
    "scipy",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tetherplan-catenary = "tetherplan.catenary:main"

[tool.hatch.build.targets.wheel]
packages = ["tetherplan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
