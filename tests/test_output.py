import logging
import os

import pandas as pd
import pytest

from statcalc.output import save_tables_to_csv


def test_save_tables_to_csv_writes_each_table(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    out_dir = tmp_path / "nested" / "output"
    tables = {
        "anova_table": pd.DataFrame({"Source": ["Between Groups"], "F": [27.0]}),
        "vertices": pd.DataFrame({"x": [2.0], "y": [2.0]}),
    }

    paths = save_tables_to_csv(tables, output_dir=str(out_dir))

    assert [os.path.basename(p) for p in paths] == ["anova_table.csv", "vertices.csv"]
    assert all(os.path.exists(p) for p in paths)
    reread = pd.read_csv(paths[0])
    assert reread.to_dict("list") == {"Source": ["Between Groups"], "F": [27.0]}
    assert any("Saved anova_table" in rec.message for rec in caplog.records)


@pytest.mark.parametrize("name", ["", "../escape", "a/b"])
def test_save_tables_to_csv_rejects_bad_names(tmp_path, name):
    with pytest.raises(ValueError, match="Invalid table name"):
        save_tables_to_csv({name: pd.DataFrame({"x": [1]})}, output_dir=str(tmp_path))
