"""Write calculator tables to CSV files.

This module is the output boundary between in-memory results and files a
student can open in a spreadsheet.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List

import pandas as pd

logger = logging.getLogger(__name__)


def save_tables_to_csv(
    tables: Dict[str, pd.DataFrame], output_dir: str = "output"
) -> List[str]:
    """Save named tables as ``<name>.csv`` files.

    Args:
        tables (dict[str, pandas.DataFrame]): Mapping of file stem to table,
            e.g. ``{"anova_table": df}``.
        output_dir (str): Directory to write into; created when missing.

    Returns:
        list[str]: Written paths, in the order of ``tables``.

    Raises:
        ValueError: If a table name is empty or contains a path separator.
    """
    os.makedirs(output_dir, exist_ok=True)

    paths = []
    for name, table in tables.items():
        if not name or os.sep in name or (os.altsep and os.altsep in name):
            raise ValueError(f"Invalid table name {name!r}")
        path = os.path.join(output_dir, f"{name}.csv")
        table.to_csv(path, index=False)
        logger.info("Saved %s to %s", name, path)
        paths.append(path)
    return paths
