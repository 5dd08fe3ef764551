#!/usr/bin/env python3
from __future__ import annotations
import argparse
import sys
from datetime import datetime

import yaml

from c4scan.core.config import load_cfg, merge_cfg
from c4scan.core.contracts import RED
from c4scan.core.errors import C4ScanError
from c4scan.io.debug import FileSink, NullSink, WindowSink
from c4scan.io.ingest import load_image
from c4scan.pipeline import analyze


# --- Simple log-to-file wrapper ---
class Tee:
    def __init__(self, *streams):
        self.streams = streams
    def write(self, data):
        for s in self.streams:
            s.write(data)
            s.flush()
    def flush(self):
        for s in self.streams:
            s.flush()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Read a Connect Four board from a photo and print the best move.")
    ap.add_argument("image", help="Path to the photo (any format OpenCV can read).")
    ap.add_argument("--config", default=None, help="YAML config; defaults are used for anything it leaves out.")
    ap.add_argument("--depth", type=int, default=None, help="Search depth (overrides search.max_depth).")
    ap.add_argument("--debug", action="store_true", help="Print diagnostics from every stage.")
    ap.add_argument("--out_dir", default=None, help="Save intermediate images into this directory.")
    ap.add_argument("--show", action="store_true", help="Show intermediate images in OpenCV windows.")
    ap.add_argument("--no_resize", action="store_true", help="Process the photo at its own size.")
    ap.add_argument("--log", action="store_true", help="Also write all output to solve_<timestamp>.log.")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log = None
    old_out, old_err = sys.stdout, sys.stderr
    if args.log:
        logfile = f"solve_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        log = open(logfile, "w")
        sys.stdout = Tee(old_out, log)
        sys.stderr = Tee(old_err, log)
        print(f"[logging] Writing output to: {logfile}")

    try:
        try:
            cfg = load_cfg(args.config) if args.config else merge_cfg(None)
        except FileNotFoundError as e:
            print(f"[ERR] Config not found: {e.filename}", file=sys.stderr)
            return 2
        except (yaml.YAMLError, ValueError) as e:
            print(f"[ERR] Bad config {args.config}: {e}", file=sys.stderr)
            return 1
        if args.debug:
            cfg["debug"] = True
        if args.no_resize:
            cfg["work_size"] = None

        if args.out_dir:
            sink = FileSink(args.out_dir)
        elif args.show:
            sink = WindowSink()
        else:
            sink = NullSink()

        try:
            img = load_image(args.image)
            report = analyze(img, cfg, sink=sink, max_depth=args.depth)
        except FileNotFoundError as e:
            print(f"[ERR] {e}", file=sys.stderr)
            return 2
        except C4ScanError as e:
            print(f"[ERR] {type(e).__name__}: {e}", file=sys.stderr)
            return 1

        print(report.board.pretty())
        print("It is Red's turn." if report.player == RED else "It is Yellow's turn.")
        # Columns are reported 1-based for people, matching the numbers under the board
        print(f"best move is: {report.column + 1}")
        print(f"(depth={report.depth}, score={report.score}, nodes={report.nodes})")
        return 0
    finally:
        if log is not None:
            sys.stdout, sys.stderr = old_out, old_err
            log.close()


if __name__ == "__main__":
    sys.exit(main())
