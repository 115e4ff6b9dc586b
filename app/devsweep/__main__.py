"""Allow running devsweep as ``python -m devsweep``."""

from devsweep.cli.main import app

if __name__ == "__main__":
    app()
