[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netlab"
version = "0.1.0"
description = "Small socket exercises: distance-vector routing, string reversal over TCP and UDP, two-party chat, ARQ exchanges and broadcast chat"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sockets",
    "tcp",
    "udp",
    "chat",
    "routing",
    "distance-vector",
    "stop-and-wait",
    "go-back-n",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netlab-dvr = "netlab.dvr:main"
netlab-fib = "netlab.fib:main"
netlab-reverse = "netlab.reverse:main"
netlab-chat = "netlab.chat:main"
netlab-arq = "netlab.arq:main"
netlab-broadcast = "netlab.broadcast:main"

[tool.hatch.build.targets.wheel]
packages = ["netlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
