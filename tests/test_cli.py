import logging

import pandas as pd
import pytest

from fwlog_compactor import cli
from fwlog_compactor.logger_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)


def test_check_log_path():
    assert cli.check_log_path("traffic.csv") is None
    assert cli.check_log_path("TRAFFIC.CSV") is None
    assert "csv" in cli.check_log_path("traffic.txt")
    assert cli.check_log_path("") is not None


@pytest.mark.parametrize("text,expected", [("04:52", (4, 52)), ("4:05", (4, 5)), ("23:59", (23, 59))])
def test_check_time_of_day_accepts_hhmm(text, expected):
    value, err = cli.check_time_of_day(text)
    assert err is None
    assert (value.hour, value.minute) == expected


@pytest.mark.parametrize("text", ["24:00", "12:60", "0452", "04:52:00", "noon", ""])
def test_check_time_of_day_rejects(text):
    value, err = cli.check_time_of_day(text)
    assert value is None
    assert err


def test_check_interval():
    assert cli.check_interval(None, None) is None
    assert cli.check_interval("04:52", 4) is None
    assert cli.check_interval("04:52", None) is not None
    assert cli.check_interval(None, 4) is not None
    assert cli.check_interval("04:52", -1) is not None


def test_main_prints_aggregated_table(log_csv, capsys):
    rc = cli.main(["-l", str(log_csv)])
    out = capsys.readouterr().out
    assert rc == cli.EXIT_OK
    assert "Destination Port" in out
    assert "1025 - 4000" in out
    assert "49000 - 50000" in out


def test_main_filters(log_csv, capsys):
    rc = cli.main(["-l", str(log_csv), "-r", "-t", "04:52", "-i", "4"])
    out = capsys.readouterr().out
    assert rc == cli.EXIT_OK
    assert "49000 - 50000" in out
    assert "443" not in out


def test_main_include_mode(log_csv, capsys):
    rc = cli.main(["-l", str(log_csv), "-t", "04:52", "-i", "4", "--window-mode", "include"])
    out = capsys.readouterr().out
    assert rc == cli.EXIT_OK
    assert "1025 - 1025" in out
    assert "ssh" not in out


def test_main_reports_no_data(log_csv, capsys):
    rc = cli.main(["-l", str(log_csv), "-p", "9999"])
    assert rc == cli.EXIT_OK
    assert cli.NO_DATA_MESSAGE in capsys.readouterr().out


def test_main_writes_output_csv(log_csv, tmp_path):
    out_path = tmp_path / "flows.csv"
    rc = cli.main(["-l", str(log_csv), "-p", "22", "443", "-o", str(out_path)])
    assert rc == cli.EXIT_OK
    written = pd.read_csv(out_path, dtype=str)
    assert list(written.columns) == ["Source address", "Destination address", "Application",
                                     "Destination Port", "IP Protocol", "Range"]
    assert written["Range"].tolist() == ["1025 - 4000", "49000 - 50000"]


@pytest.mark.parametrize("argv", [
    ["-l", "traffic.txt"],
    ["-l", "traffic.csv", "-t", "04:52"],
    ["-l", "traffic.csv", "-i", "4"],
    ["-l", "traffic.csv", "-t", "4pm", "-i", "4"],
    ["-l", "traffic.csv", "-t", "04:52", "-i", "-3"],
])
def test_main_rejects_bad_arguments(argv, capsys):
    assert cli.main(argv) == cli.EXIT_USAGE
    assert "error" in capsys.readouterr().err


def test_main_missing_file(tmp_path):
    assert cli.main(["-l", str(tmp_path / "absent.csv")]) == cli.EXIT_PIPELINE_ERROR


def test_main_schema_error(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("Generate Time,Source address\n01/02/2024 04:52,10.0.0.1\n")
    assert cli.main(["-l", str(path)]) == cli.EXIT_PIPELINE_ERROR


def test_main_parse_error(tmp_path, log_frame):
    log_frame.loc[1, "Generate Time"] = "2024-02-01T04:54"
    path = tmp_path / "bad.csv"
    log_frame.to_csv(path, index=False)
    assert cli.main(["-l", str(path)]) == cli.EXIT_PIPELINE_ERROR


def test_render_table_empty():
    assert cli.render_table([]) == cli.NO_DATA_MESSAGE


def _latin1_log(tmp_path, log_frame):
    log_frame.loc[0, "Application"] = "café"
    path = tmp_path / "latin1.csv"
    path.write_bytes(log_frame.to_csv(index=False).encode("latin-1"))
    return path


def test_main_non_utf8_log_exits_with_error(tmp_path, log_frame):
    path = _latin1_log(tmp_path, log_frame)
    assert cli.main(["-l", str(path)]) == cli.EXIT_PIPELINE_ERROR


def test_main_reads_declared_encoding(tmp_path, log_frame, capsys):
    path = _latin1_log(tmp_path, log_frame)
    rc = cli.main(["-l", str(path), "--encoding", "latin-1"])
    assert rc == cli.EXIT_OK
    assert "café" in capsys.readouterr().out


def test_main_unknown_encoding(log_csv):
    assert cli.main(["-l", str(log_csv), "-e", "no-such-codec"]) == cli.EXIT_PIPELINE_ERROR


def test_main_unwritable_output(log_csv, tmp_path):
    out_path = tmp_path / "missing-dir" / "flows.csv"
    assert cli.main(["-l", str(log_csv), "-o", str(out_path)]) == cli.EXIT_PIPELINE_ERROR
    assert not out_path.exists()
