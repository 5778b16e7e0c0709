#!/usr/bin/env python3
"""
Example 4: Runs from YAML Files

Load each run file in examples/configs/, run it and print the summary.
The same files can be run from the command line:

    python -m pycg examples/configs/rosenbrock.yaml --show-trace

Usage:
    python examples/04_config_file.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pycg.builder import load_and_run


def main():
    config_dir = Path(__file__).parent / "configs"
    for path in sorted(config_dir.glob("*.yaml")):
        print("=" * 60)
        print(f"  {path.name}")
        print("=" * 60)
        print(load_and_run(path))
        print()


if __name__ == "__main__":
    main()
