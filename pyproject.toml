[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "impview"
version = "0.1.0"
description = "Load impedance sweeps, plot magnitude and phase, and compare readings in colour-coded difference matrices."
requires-python = ">=3.10"
dependencies = [
    "matplotlib",
]
keywords = ["impedance", "spectroscopy", "frequency response", "comparison", "visualization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
impview = "impview.app:main"

[tool.hatch.build.targets.wheel]
packages = ["impview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
