"""ragpipe - document chunking, vector retrieval and answer generation."""

__version__ = "0.1.0"
