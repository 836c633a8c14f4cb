[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskrec"
version = "0.1.0"
description = "Building blocks for desktop recording: RGB to YUV conversion, capture specs files, Ogg Skeleton packets, shortcuts and recording-area checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["screencast", "recording", "yuv", "ogg", "skeleton", "shortcuts"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Capture",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["deskrec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
