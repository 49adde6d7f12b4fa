"""
Main entry point for the adcraft package when executed as a module.

This allows running the package with `python -m adcraft`.
"""

from adcraft.cli import main

if __name__ == '__main__':
    main()
