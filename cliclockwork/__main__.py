"""
Main entry point for cliclockwork when run as a module.

Allows running with: python -m cliclockwork
"""

from cliclockwork.cli.main import app

if __name__ == "__main__":
    app()
