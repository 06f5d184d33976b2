from __future__ import annotations

import argparse
import sys


def _parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="potsim", description="Potential simulator")
    ap.add_argument("--catalog", default=None, help="Path or http(s) URL of potential.json (default: bundled / $POTSIM_CATALOG)")
    ap.add_argument("--data-dir", default=None, help="Directory for saved state and presets (default: $POTSIM_DATA_DIR or app data dir)")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    from potsim.ui.main_window import run_app

    run_app(catalog_source=args.catalog, data_dir=args.data_dir)


if __name__ == "__main__":
    main()
