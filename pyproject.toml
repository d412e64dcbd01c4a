[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bayesfilt"
version = "0.10.0"
description = "Building blocks for recursive Bayesian filtering: unscented transforms, sigma points, quaternion and directional statistics, and simple state models."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "bayesian",
    "kalman",
    "unscented",
    "sigma-point",
    "filtering",
    "quaternion",
    "state-estimation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["bayesfilt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
