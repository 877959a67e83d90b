#!/usr/bin/env python3
"""
Main script for running the statistics calculators from a checkout.
"""

# Usage examples:
#   python main.py t-test --mean 105 --sd 15 --n 25 --mu0 100
#   python main.py anova --group "1 2 3" --group "4 5 6" --outdir output
#   python main.py lp --objective 3 2 --constraint "1,1,<=,4" --constraint "2,1,<=,6"

import logging
import os
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from statcalc.cli import main

if __name__ == "__main__":
    sys.exit(main())
