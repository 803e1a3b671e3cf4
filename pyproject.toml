[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "perfstat"
version = "0.1.0"
description = "Statistical summaries and old/new comparisons of benchmark results"
requires-python = ">=3.10"
dependencies = [
    "scipy",
]
keywords = ["benchmark", "statistics", "performance", "comparison", "units"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["perfstat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
