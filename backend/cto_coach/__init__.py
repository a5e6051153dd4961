"""CTO Coach: a retrieval-augmented chat assistant over uploaded documents."""

__version__ = "0.1.0"
