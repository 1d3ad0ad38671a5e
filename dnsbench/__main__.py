"""
Entry point for running dnsbench as a module.

Usage: python -m dnsbench [OPTIONS] COMMAND [ARGS]...
"""

from .cli import main

if __name__ == "__main__":
    main()
