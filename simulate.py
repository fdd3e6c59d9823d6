"""
Square M-QAM over AWGN Simulation / 方形M-QAM加性高斯白噪声信道仿真

Transmission chain from random bits to error-rate estimate.
从随机比特到误码率估计的传输链路仿真。
"""

import argparse
import sys
import time
from typing import List, Optional

from qam_blocks import SimulationConfig, run_simulation, simulate_error_curve


def parse_snr_list(text: str) -> List[float]:
    return [float(x) for x in text.split(',') if x.strip()]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Square M-QAM over AWGN: constellation, waveform and BER estimate"
    )
    p.add_argument("-M", "--modulation-order", type=int, default=16,
                   help="Constellation size, a power of 4 (4, 16, 64, 256, ...)")
    p.add_argument("--snr-db", type=float, default=10.0, help="SNR in dB (may be negative)")
    p.add_argument("--num-bits", type=int, default=1000,
                   help="Bit budget; symbols = floor(bits / log2(M))")
    p.add_argument("--num-symbols", type=int, default=None,
                   help="Fixed number of symbols (overrides --num-bits)")
    p.add_argument("--waveform-length", type=int, default=50,
                   help="Number of received I-values in the waveform plot")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    p.add_argument("--sweep", type=str, default=None,
                   help="Comma-separated SNRs in dB for an error-rate curve, e.g. -5,0,5,10")
    p.add_argument("--trials", type=int, default=20, help="Runs averaged per SNR in the sweep")
    p.add_argument("--output-dir", type=str, default="generated", help="Directory for PNG figures")
    p.add_argument("--no-plots", action="store_true", help="Skip writing figures")
    return p


def print_report(result) -> None:
    metrics = result.to_dict()
    print(f"\nMetrics Summary / 性能指标摘要:")
    print(f"  {'Parameter':<35} {'Value':>15}")
    print(f"  {'-'*35} {'-'*15}")
    print(f"  {'Modulation order (M)':<35} {metrics['modulation_order']:>15d}")
    print(f"  {'SNR':<35} {metrics['snr_db']:>12.2f} dB")
    print(f"  {'Symbols':<35} {metrics['num_symbols']:>15d}")
    print(f"  {'Noise std per axis':<35} {metrics['noise_std']:>15.4f}")
    print(f"  {'Off-grid decisions (= errors)':<35} {metrics['out_of_range']:>15d}")
    print(f"  {'BER estimate (symbol errors)':<35} {result.format_ber():>15}")
    print(f"  {'SER (off-grid snapped to edge)':<35} {metrics['ser_nearest_point']:>15.5f}")
    print(f"  {'BER (bit-level)':<35} {metrics['bit_error_rate']:>15.5f}")
    print(f"  {'SER (theory)':<35} {metrics['ser_theory']:>15.2e}")
    print(f"\n{result.summary()}")


def print_curve(curve) -> None:
    print(f"\nError rate vs SNR / 误码率-信噪比:")
    print(f"  {'SNR (dB)':>10} {'BER est.':>12} {'BER bits':>12} {'SER theory':>12}")
    for snr_db, ser, ber, theory in zip(curve['snr_db'], curve['ber_estimate'],
                                        curve['bit_error_rate'], curve['ser_theory']):
        print(f"  {snr_db:>10.1f} {ser:>12.5f} {ber:>12.5f} {theory:>12.2e}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = SimulationConfig(
        modulation_order=args.modulation_order,
        snr_db=args.snr_db,
        num_bits=args.num_bits,
        num_symbols=args.num_symbols,
        waveform_length=args.waveform_length,
        seed=args.seed,
    )

    print("Square M-QAM Simulation / 方形M-QAM仿真")
    print("=" * 60)
    print("Random bits → QAM Mapping → AWGN Channel → Decision → BER")
    print("随机比特 → QAM映射 → AWGN信道 → 判决 → 误码率")

    try:
        config.validate()
        sweep = parse_snr_list(args.sweep) if args.sweep else None
    except ValueError as e:  # InvalidConfiguration or a malformed --sweep
        print(f"Error / 错误: {e}", file=sys.stderr)
        return 2

    rng = config.make_rng()

    start_time = time.time()
    result = run_simulation(config, rng)
    print(f"  Completed in / 耗时: {time.time() - start_time:.3f} seconds / 秒")
    print_report(result)

    curve = None
    if sweep:
        print(f"\nRunning SNR sweep ({args.trials} trials per point) / 运行信噪比扫描...")
        try:
            curve = simulate_error_curve(config, sweep, trials=args.trials, rng=rng)
        except ValueError as e:
            print(f"Error / 错误: {e}", file=sys.stderr)
            return 2
        print_curve(curve)

    if not args.no_plots:
        from qam_blocks.plotting import save_figures
        for path in save_figures(result, args.output_dir, curve=curve):
            print(f"  Saved / 已保存: {path}")

    print("\n" + "=" * 60)
    print("Simulation completed / 仿真完成")
    return 0


if __name__ == "__main__":
    sys.exit(main())
