"""
CLI for the hand history parser.
Usage: python -m handreplay.parse --in ./histories --out ./hands.jsonl [--config parser.yml] [--verbose]
"""

import sys

from .runner import main

sys.exit(main())
