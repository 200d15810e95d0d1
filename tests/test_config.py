from datetime import time

import pytest

from fwlog_compactor import FilterOptions, NoWindow, TimeWindow, ValidationError, build_options
from fwlog_compactor.config import build_window


def test_defaults_disable_every_stage():
    opts = FilterOptions()
    assert opts.remove_infra_port is False
    assert opts.destination_ports is None
    assert isinstance(opts.window, NoWindow)


def test_destination_ports_collapse_to_set():
    opts = FilterOptions.build(destination_ports=[53, 88, 53])
    assert opts.destination_ports == frozenset({53, 88})


def test_window_accepts_hhmm_text():
    window = build_window("04:52", 4)
    assert isinstance(window, TimeWindow)
    assert window.start == time(4, 52)
    assert window.mode == "exclude"


def test_window_from_mapping_uses_kind_tag():
    opts = FilterOptions.build(window={"kind": "window", "start": "04:52", "length_minutes": 4})
    assert isinstance(opts.window, TimeWindow)
    assert FilterOptions.build(window={"kind": "none"}).window == NoWindow()


def test_options_are_frozen():
    opts = build_options(remove_infra_port=True)
    with pytest.raises(Exception):
        opts.remove_infra_port = False


def test_validation_error_is_value_error():
    with pytest.raises(ValueError) as exc:
        FilterOptions.build(destination_ports=[65536])
    assert isinstance(exc.value, ValidationError)
    assert "destination_ports" in str(exc.value)
