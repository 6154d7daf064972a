#!/usr/bin/env python3
"""
Convenience entry point for running studioslots directly.

Usage: python studioslots.py [command] [options]
"""

from studioslots.cli.app import app

if __name__ == "__main__":
    app()
