import logging

import pandas as pd
import pytest

from statcalc.cli import main


def test_t_test_summary_statistics(capsys):
    code = main(["t-test", "--mean", "105", "--sd", "15", "--n", "25", "--mu0", "100"])
    out = capsys.readouterr().out
    assert code == 0
    assert "one-sample t test (two-sided)" in out
    assert "t = 1.6667" in out
    assert "fail to reject H0" in out


def test_t_test_with_manual_p_value(capsys):
    code = main(
        ["t-test", "--data", "5.1 4.9 5.6 5.8 6.0", "--mu0", "5", "--manual-p", "0.2"]
    )
    assert code == 0
    assert "your p-value 0.2000" in capsys.readouterr().out


def test_ci_mean_from_data(capsys):
    assert main(["ci-mean", "--data", "2,4,4,4,5,5,7,9", "--confidence", "95"]) == 0
    out = capsys.readouterr().out
    assert "95% confidence interval" in out
    assert "t* = 2.3650 (df = 7)" in out


def test_ci_proportion(capsys):
    assert main(["ci-proportion", "--successes", "60", "--n", "100"]) == 0
    assert "z* = 1.9600" in capsys.readouterr().out


def test_z_and_proportion_tests(capsys):
    assert main(["z-test", "--mean", "52", "--mu0", "50", "--sigma", "5", "--n", "25"]) == 0
    assert main(["proportion-test", "--successes", "60", "--n", "100", "--p0", "0.5"]) == 0
    out = capsys.readouterr().out
    assert out.count("z = 2.0000") == 2


def test_two_sample_summary(capsys):
    argv = ["two-sample", "--mean1", "20.1", "--sd1", "3.2", "--n1", "12"]
    argv += ["--mean2", "17.4", "--sd2", "4.5", "--n2", "15", "--equal-variance"]
    assert main(argv) == 0
    assert "two-sample pooled t test" in capsys.readouterr().out


def test_anova_writes_tables(tmp_path, capsys):
    argv = ["--outdir", str(tmp_path), "anova"]
    argv += ["--group", "1 2 3", "--group", "4 5 6", "--group", "7 8 9"]
    assert main(argv) == 0
    assert "F(2, 6) = 27.0000" in capsys.readouterr().out
    table = pd.read_csv(tmp_path / "anova_table.csv")
    assert table["Source"].to_list() == ["Between Groups", "Within Groups", "Total"]
    assert (tmp_path / "group_summary.csv").exists()


def test_regression_and_seasonal(capsys):
    assert main(["regression", "--x", "1 2 3 4 5", "--y", "2 4 5 4 5"]) == 0
    assert main(["seasonal", "--data", "10 20 30 40 12 22 32 42", "--periods", "4"]) == 0
    out = capsys.readouterr().out
    assert "y = 2.2 + 0.6 x" in out
    assert "season 4:" in out


def test_sample_size(capsys):
    argv = ["sample-size", "--parameter", "proportion", "--margin", "0.05", "--p", "0.5"]
    assert main(argv + ["--population", "1000"]) == 0
    out = capsys.readouterr().out
    assert "n0 = 385" in out
    assert "n = 279" in out


def test_lp_writes_vertex_table(tmp_path, capsys):
    argv = ["--outdir", str(tmp_path), "lp", "--objective", "3", "2"]
    argv += ["--constraint", "1,1,<=,4", "--constraint", "2 1 <= 6"]
    assert main(argv) == 0
    assert "objective = 10" in capsys.readouterr().out
    vertices = pd.read_csv(tmp_path / "vertices.csv")
    assert len(vertices) == 4
    assert bool(vertices.loc[0, "Optimal"])


def test_infeasible_lp_exits_with_status_two(caplog):
    caplog.set_level(logging.ERROR)
    argv = ["lp", "--objective", "1", "1", "--constraint", "1,1,=,1", "--constraint", "1,1,=,3"]
    assert main(argv) == 2
    assert any("No feasible solution" in rec.message for rec in caplog.records)


@pytest.mark.parametrize(
    "argv",
    [
        ["t-test", "--data", "1, two, 3", "--mu0", "0"],
        ["t-test", "--mu0", "0"],
        ["lp", "--objective", "1", "1", "--constraint", "1,1,4"],
        ["seasonal", "--data", "1 2 3", "--periods", "4"],
    ],
)
def test_calculator_errors_exit_with_status_two(argv, caplog):
    caplog.set_level(logging.ERROR)
    assert main(argv) == 2
    assert caplog.records


def test_unknown_command_is_an_argparse_error():
    with pytest.raises(SystemExit):
        main(["median"])
