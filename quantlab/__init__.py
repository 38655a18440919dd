"""Option pricing (closed form, Monte Carlo), Greeks and a limit order book."""

__version__ = "0.1.0"
__all__ = ["__version__"]