"""Unit tests for configuration dataclasses."""

from __future__ import annotations

import dataclasses

import pytest

from subcue.config import DecoderConfig, OutputConfig, OutputOptions, UIConfig


def test_output_options_factories() -> None:
    assert OutputOptions.all_cues() == OutputOptions(None, False)
    assert OutputOptions.only_cues_after(5) == OutputOptions(5, False)
    assert OutputOptions.cues_after_then_remaining_before(5) == OutputOptions(5, True)


def test_output_options_are_frozen() -> None:
    options = OutputOptions.all_cues()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.start_time_us = 1  # type: ignore[misc]


def test_decoder_config_defaults() -> None:
    config = DecoderConfig()

    assert config.format_name is None
    assert config.encoding is None
    assert config.offset == 0
    assert config.length is None
    assert config.output_options == OutputOptions.all_cues()


def test_output_and_ui_config_defaults() -> None:
    assert OutputConfig().output_format == "json"
    assert OutputConfig().keep_styles
    assert UIConfig() == UIConfig(verbose=False, quiet=False)
