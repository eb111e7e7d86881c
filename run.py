#!/usr/bin/env python3
"""
Convenience script to run Service Desk.
"""

import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))


def run_cli():
    """Run the command-line interface."""
    from service_desk.cli import app
    app()


def run_import():
    """Import a JSON batch file once."""
    from service_desk.cli import app
    sys.argv = [sys.argv[0], "import"] + sys.argv[1:]
    app()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python run.py <command>")
        print()
        print("Commands:")
        print("  cli       Run the command-line interface")
        print("  import    Import messages from a JSON file")
        sys.exit(1)

    command = sys.argv[1]
    sys.argv = [sys.argv[0]] + sys.argv[2:]  # Remove command from args

    commands = {
        "cli": run_cli,
        "import": run_import,
    }

    if command not in commands:
        print(f"Unknown command: {command}")
        sys.exit(1)

    commands[command]()
