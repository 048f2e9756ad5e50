"""Session Feed: turn coding-agent transcript logs into an operator message feed."""

__version__ = "0.1.0"
