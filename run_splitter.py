"""
run_splitter.py: CLI Entry Point

This script serves as the command-line interface entry point for the
sprite splitter. It forwards execution to the CLI logic defined in
`src/sprite_splitter/cli.py`.

Usage:
    python run_splitter.py path/to/sheet.png --frame-size 64x64 [options]

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_splitter.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import sprite_splitter.cli as ss_cli

if __name__ == "__main__":
    sys.exit(ss_cli.main())
