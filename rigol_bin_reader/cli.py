from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .errors import RigolBinError
from .export import write_csv
from .ingest.readers_bin import RigolBinReader, RigolBinReaderConfig
from .presentation.summary import DETAILED, NORMAL, QUIET, print_summary


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="rigol-bin",
        description=(
            "Decode a Rigol DHO800 binary waveform file (*.bin), print a summary and "
            "optionally plot the channels or export them as CSV/PNG."
        ),
    )

    p.add_argument("file", help="Rigol .bin waveform file")
    p.add_argument("-q", "--quiet", action="store_true", help="Do not print the summary.")
    p.add_argument("--details", action="store_true", help="Include model, sample rate and version.")
    p.add_argument("--plot", action="store_true", help="Plot all channels against time.")
    p.add_argument(
        "--png",
        metavar="FILE",
        help="Optional: save the plot as PNG (implies --plot).",
    )
    p.add_argument(
        "--csv",
        metavar="FILE",
        help="Optional: write t plus one column per channel as CSV. File must not exist.",
    )
    p.add_argument(
        "--no-show",
        action="store_true",
        help="Do not open a plot window (for automated runs).",
    )
    p.add_argument("--workers", type=int, default=1, help="Threads used to decode channels.")
    p.add_argument(
        "--check-file-size",
        action="store_true",
        help="Warn when the header's file size differs from the real file size.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="More output (debug logging).")

    return p.parse_args(argv)


def _verbosity(args: argparse.Namespace) -> int:
    if args.quiet:
        return QUIET
    if args.details:
        return DETAILED
    return NORMAL


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = RigolBinReaderConfig(
            check_file_size=args.check_file_size,
            max_workers=args.workers,
        )
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        decoded = RigolBinReader(config).read(Path(args.file))
    except RigolBinError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)

    print_summary(decoded, _verbosity(args))

    if args.csv:
        try:
            write_csv(Path(args.csv), decoded)
            print(f"Wrote CSV: {args.csv} (N={decoded.n_pts}, channels={decoded.n_channels})")
        except FileExistsError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(2)

    if not (args.plot or args.png):
        return

    import matplotlib.pyplot as plt

    from .presentation.plots import plot_channels

    fig = plot_channels(decoded)

    if args.png:
        try:
            Path(args.png).parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(args.png, dpi=150)
            print(f"Wrote PNG: {args.png}")
        except OSError as e:
            print(f"ERROR: could not write PNG: {e}", file=sys.stderr)
            sys.exit(2)

    if args.no_show:
        plt.close(fig)
        return

    plt.show()


if __name__ == "__main__":
    main()
