[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orbitsim"
version = "0.1.0"
description = "Interactive 3D gravity simulation of a small planetary system"
requires-python = ">=3.10"
keywords = ["gravity", "n-body", "orbit", "simulation", "opengl", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Environment :: MacOS X",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
orbitsim = "orbitsim.app:main"

[tool.hatch.build.targets.wheel]
packages = ["orbitsim"]

[tool.pytest.ini_options]
addopts = "-ra"
