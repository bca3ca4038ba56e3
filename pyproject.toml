[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quadkernel"
version = "0.1.0"
description = "A simulated 32-bit hobby kernel that solves integer quadratic equations typed on its keyboard"
requires-python = ">=3.10"
dependencies = []
keywords = ["quadratic", "kernel", "simulation", "gdt", "idt", "keyboard", "text-mode"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
quadkernel = "quadkernel.kernel:main"

[tool.hatch.build.targets.wheel]
packages = ["quadkernel"]

[tool.pytest.ini_options]
addopts = "-ra"
