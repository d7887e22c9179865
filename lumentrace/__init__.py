"""Monte Carlo path tracer writing Radiance HDR images."""

__version__ = "0.1.0"