"""
CLI entry point for running cacher as a module.

Usage: python -m cacher [OPTIONS] COMMAND [ARGS]...
"""

from cacher.cli.main import cli

if __name__ == "__main__":
    cli()
