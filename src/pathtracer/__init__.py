"""Monte Carlo path tracer with light and material importance sampling."""

__version__ = "0.1.0"
