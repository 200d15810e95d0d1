from datetime import time

import pandas as pd
import pytest

from fwlog_compactor.dto import REQUIRED_COLUMNS, RawRecord


def make_record(
    *,
    at="04:52",
    src="10.0.0.1",
    dst="10.0.0.2",
    app="HTTP",
    sport=1025,
    dport=443,
    proto="tcp",
):
    hh, mm = at.split(":")
    return RawRecord(
        generate_time=time(int(hh), int(mm)),
        source_address=src,
        destination_address=dst,
        application=app,
        source_port=sport,
        destination_port=dport,
        ip_protocol=proto,
    )


@pytest.fixture
def record():
    return make_record


def log_rows():
    """A small export, as strings, the way the firewall writes it."""
    return [
        ["01/02/2024 04:50", "10.0.0.1", "10.0.0.2", "HTTP", "4000", "443", "tcp", "allow"],
        ["01/02/2024 04:54", "10.0.0.1", "10.0.0.2", "HTTP", "1025", "443", "udp", "allow"],
        ["01/02/2024 05:10", "10.0.0.3", "10.0.0.9", "ssh", "50000", "22", "tcp", "allow"],
        ["02/02/2024 05:11", "10.0.0.3", "10.0.0.9", "ssh", "49000", "22", "tcp", "deny"],
        ["02/02/2024 06:00", "10.0.0.4", "10.0.0.53", "dns", "5353", "53", "udp", "allow"],
    ]


@pytest.fixture
def log_frame():
    return pd.DataFrame(log_rows(), columns=list(REQUIRED_COLUMNS) + ["Action"])


@pytest.fixture
def log_csv(tmp_path, log_frame):
    path = tmp_path / "traffic.csv"
    log_frame.to_csv(path, index=False)
    return path
