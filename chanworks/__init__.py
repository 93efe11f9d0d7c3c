"""Concurrent tools: memoization, a bank account, pipelines, crawlers, disk usage, thumbnails, a fractal renderer and TCP clients and servers."""

__version__ = "0.1.0"