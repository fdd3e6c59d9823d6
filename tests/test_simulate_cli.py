"""Tests for the command-line driver and figure output."""

import os

import matplotlib.pyplot as plt
import pytest

import simulate
from qam_blocks import SimulationConfig, run_simulation, simulate_error_curve
from qam_blocks.plotting import plot_constellation, plot_error_curve, plot_waveform, save_figures


def test_main_prints_report(capsys):
    code = simulate.main(["-M", "16", "--snr-db", "20", "--num-symbols", "200",
                          "--seed", "1", "--no-plots"])
    out = capsys.readouterr().out
    assert code == 0
    assert "16-QAM at SNR 20 dB" in out
    assert "BER estimate" in out


def test_main_rejects_bad_order(capsys):
    code = simulate.main(["-M", "8", "--no-plots"])
    assert code == 2
    assert "power of 4" in capsys.readouterr().err


def test_main_rejects_zero_symbols(capsys):
    code = simulate.main(["-M", "256", "--num-bits", "4", "--no-plots"])
    assert code == 2
    assert "zero symbols" in capsys.readouterr().err


def test_main_rejects_malformed_sweep(capsys):
    assert simulate.main(["--sweep", "a,b", "--no-plots"]) == 2


def test_main_sweep_writes_figures(tmp_path, capsys):
    code = simulate.main(["-M", "4", "--snr-db", "0", "--num-symbols", "200", "--seed", "3",
                          "--sweep", "-5,0,5", "--trials", "2", "--output-dir", str(tmp_path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Error rate vs SNR" in out
    assert sorted(os.listdir(tmp_path)) == [
        "constellation_M4_SNR0.png",
        "error_curve_M4.png",
        "waveform_M4_SNR0.png",
    ]


def test_plot_helpers_draw_on_given_axes(rng):
    config = SimulationConfig(modulation_order=16, snr_db=10.0, num_symbols=100)
    result = run_simulation(config, rng)
    curve = simulate_error_curve(config, [0.0, 30.0], trials=1, rng=rng)

    fig, axes = plt.subplots(1, 3)
    assert plot_constellation(result, axes[0]) is axes[0]
    assert len(axes[0].collections) == 2
    assert plot_waveform(result, axes[1]) is axes[1]
    assert len(axes[1].lines[0].get_ydata()) == 50
    assert plot_error_curve(curve, axes[2]) is axes[2]
    plt.close(fig)


def test_save_figures_without_curve(tmp_path, rng):
    result = run_simulation(SimulationConfig(num_symbols=20), rng)
    paths = save_figures(result, str(tmp_path / "out"))
    assert len(paths) == 2
    assert all(os.path.exists(p) for p in paths)


def test_main_huge_snr(capsys):
    code = simulate.main(["--snr-db", "4000", "--num-symbols", "100", "--seed", "2", "--no-plots"])
    assert code == 0
    assert "BER ~ 0.00000" in capsys.readouterr().out


def test_main_rejects_snr_with_infinite_noise(capsys):
    assert simulate.main(["--snr-db", "-4000", "--no-plots"]) == 2
    assert "too low" in capsys.readouterr().err


def test_save_figures_closes_figure_on_failure(tmp_path, rng, monkeypatch):
    result = run_simulation(SimulationConfig(num_symbols=20), rng)

    def broken_waveform(result, ax=None):
        raise RuntimeError("drawing failed")

    monkeypatch.setattr("qam_blocks.plotting.plot_waveform", broken_waveform)
    open_before = plt.get_fignums()
    with pytest.raises(RuntimeError):
        save_figures(result, str(tmp_path))
    assert plt.get_fignums() == open_before
