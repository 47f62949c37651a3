[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gospeak"
version = "0.1.0"
description = "Speech codec helpers: token bigram models, nearest-centroid encoding, compact codebook JSON and codebook training utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["speech", "codec", "bigram", "kmeans", "centroids", "codebook", "audio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Speech",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gospeak-bigram = "gospeak.bigram:main"

[tool.hatch.build.targets.wheel]
packages = ["gospeak"]

[tool.pytest.ini_options]
addopts = "-ra"
