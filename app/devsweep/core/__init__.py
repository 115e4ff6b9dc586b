"""Core configuration, paths and theming for devsweep."""
