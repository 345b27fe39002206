"""orameta - Oracle table metadata extractor."""
__version__ = "0.1.0"
