[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mediadevkit"
version = "0.1.0"
description = "Media device driver registry, raw frame decoders and a VNC client for video capture"
requires-python = ">=3.10"
keywords = ["video", "capture", "yuv", "frame", "decoder", "vnc", "rfb", "driver"]
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
    "Topic :: Multimedia :: Video :: Capture",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pillow",
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mediadevkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
