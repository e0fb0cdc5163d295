"""Android source-build preflight and failure diagnostics."""

__version__ = "0.1.0"
