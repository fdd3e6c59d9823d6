"""Tests for SimulationConfig validation."""

import math

import numpy as np
import pytest

from qam_blocks import InvalidConfiguration, SimulationConfig


class TestSimulationConfig:

    def test_defaults_are_valid(self):
        config = SimulationConfig().validate()
        assert config.levels == 4
        assert config.bits_per_symbol == 4
        assert config.symbol_count == 250

    def test_symbols_from_bits_round_down(self):
        config = SimulationConfig(modulation_order=64, num_bits=100)
        assert config.symbol_count == 16

    def test_fixed_symbol_count_overrides_bits(self):
        config = SimulationConfig(num_bits=3, num_symbols=500)
        assert config.validate().symbol_count == 500

    @pytest.mark.parametrize("M", [2, 8, 9, 32, 100])
    def test_rejects_bad_order(self, M):
        with pytest.raises(InvalidConfiguration, match="power of 4"):
            SimulationConfig(modulation_order=M).validate()

    def test_rejects_zero_symbols_from_bits(self):
        with pytest.raises(InvalidConfiguration, match="zero symbols"):
            SimulationConfig(modulation_order=256, num_bits=7).validate()

    def test_rejects_zero_fixed_symbols(self):
        with pytest.raises(InvalidConfiguration):
            SimulationConfig(num_symbols=0).validate()

    def test_rejects_negative_waveform(self):
        with pytest.raises(InvalidConfiguration):
            SimulationConfig(waveform_length=-1).validate()

    @pytest.mark.parametrize("snr_db", [math.nan, -math.inf])
    def test_rejects_bad_snr(self, snr_db):
        with pytest.raises(InvalidConfiguration):
            SimulationConfig(snr_db=snr_db).validate()

    def test_accepts_negative_and_infinite_snr(self):
        SimulationConfig(snr_db=-5).validate()
        SimulationConfig(snr_db=math.inf).validate()

    def test_invalid_configuration_is_value_error(self):
        assert issubclass(InvalidConfiguration, ValueError)

    def test_seeded_rng(self):
        a = SimulationConfig(seed=3).make_rng().random(4)
        b = SimulationConfig(seed=3).make_rng().random(4)
        np.testing.assert_array_equal(a, b)

    def test_accepts_huge_snr(self):
        SimulationConfig(snr_db=4000.0).validate()

    def test_rejects_snr_with_infinite_noise(self):
        with pytest.raises(InvalidConfiguration, match="too low"):
            SimulationConfig(snr_db=-4000.0).validate()
