"""Upload a single file to S3 and print its public URL."""

__version__ = "0.1.0"
