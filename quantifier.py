#!/usr/bin/env python3
"""
Quantifier: Physical Quantity Algebra

Main entry point for the quantifier application.
This file serves as a thin wrapper that delegates all functionality
to the quantifier_pkg package.

Usage:
    python quantifier.py                        # Interactive REPL
    python quantifier.py "60 cel" --to K        # Convert a quantity
    python quantifier.py "[2 m/s] * [4 s]"      # Arithmetic
    python quantifier.py --list-units           # Show the unit catalog
    python quantifier.py --help                 # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for the quantifier.

    Delegates all functionality to the quantifier_pkg.cli module,
    which handles argument parsing, evaluation and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from quantifier_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import quantifier_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
