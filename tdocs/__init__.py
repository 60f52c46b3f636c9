"""TDocs: search technical documentation published behind a JWT."""

__version__ = "1.0.0"
