"""Release note generation and publishing for sibling projects."""

__version__ = "0.1.0"
