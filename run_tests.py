#!/usr/bin/env python3
"""
Test runner for search-gwas.

Thin wrapper around pytest for picking the unit or integration suites.
"""

import os
import sys
import argparse
import subprocess
from pathlib import Path

def parse_args():
    """Parse command-line arguments for the test runner."""
    parser = argparse.ArgumentParser(description="search-gwas Test Runner")

    parser.add_argument("--unit", action="store_true", help="Run unit tests only")
    parser.add_argument("--integration", action="store_true", help="Run integration tests only")
    parser.add_argument("--all", action="store_true", help="Run all tests (default)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--specific", type=str, help="Run a specific test module or function")
    parser.add_argument("--keyword", "-k", type=str, help="Only run tests matching this expression")

    args = parser.parse_args()

    # If no test type is specified, run all tests
    if not (args.unit or args.integration or args.specific):
        args.all = True

    return args

def run_tests(args):
    """Run the tests based on the specified options."""
    cmd = [sys.executable, "-m", "pytest"]

    if args.verbose:
        cmd.append("-v")

    if args.unit:
        cmd.append("tests/unit/")
    elif args.integration:
        cmd.append("tests/integration/")
    elif args.specific:
        cmd.append(args.specific)
    elif args.all:
        cmd.append("tests/")

    if args.keyword:
        cmd.extend(["-k", args.keyword])

    print(f"Running: {' '.join(cmd)}")

    result = subprocess.run(cmd)

    return result.returncode

def main():
    """Main entry point for the test runner."""
    args = parse_args()

    # Ensure we're in the project root directory
    project_root = Path(__file__).parent
    os.chdir(project_root)

    if args.verbose:
        print("Available test modules:")
        for suite in ("unit", "integration"):
            print(f"{suite.capitalize()} tests:")
            for test in sorted(Path("tests", suite).glob("test_*.py")):
                print(f"  - {test.stem}")
        print("")

    return run_tests(args)

if __name__ == "__main__":
    sys.exit(main())
