"""devsweep - Clear disposable developer caches safely."""

__version__ = "0.1.0"
