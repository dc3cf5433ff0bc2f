#!/usr/bin/env python3
"""
Convenience entry point for running meetingfinder directly.

Usage: python run_meetingfinder.py [command] [options]
"""

from meetingfinder.cli.app import app

if __name__ == "__main__":
    app()
