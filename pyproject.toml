[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quantlab"
version = "0.1.0"
description = "Option pricing (closed form, Monte Carlo, Greeks) and a price-time priority limit order book"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["options", "black-scholes", "monte-carlo", "greeks", "order-book", "finance"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
quantlab-options = "quantlab.cli:main"
quantlab-orderbook = "quantlab.orderbook:main"

[tool.hatch.build.targets.wheel]
packages = ["quantlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
