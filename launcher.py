"""Launcher entrypoint for the packaged savings calculator."""

from __future__ import annotations

import argparse
import os
import pathlib
import sys


def _bundle_root() -> pathlib.Path:
    if getattr(sys, "frozen", False):
        return pathlib.Path(getattr(sys, "_MEIPASS"))
    return pathlib.Path(__file__).resolve().parent


def _runtime_root() -> pathlib.Path:
    if getattr(sys, "frozen", False):
        return pathlib.Path(sys.executable).resolve().parent
    return pathlib.Path(__file__).resolve().parent


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="onropepro-savings", description="Run the OnRopePro savings calculator.")
    parser.add_argument("--port", type=int, default=None, help="Port for the Streamlit server.")
    parser.add_argument("--storage-root", default=None, help="Folder for runtime diagnostics (ROI_STORAGE_ROOT).")
    parser.add_argument("--headless", action="store_true", help="Do not open a browser window.")
    return parser.parse_args(argv)


def streamlit_argv(app_path: pathlib.Path, port: int | None = None, headless: bool = False) -> list[str]:
    args = [
        "streamlit",
        "run",
        str(app_path),
        f"--server.headless={'true' if headless else 'false'}",
        "--browser.gatherUsageStats=false",
    ]
    if port is not None:
        args.append(f"--server.port={int(port)}")
    return args


def main(argv: list[str] | None = None) -> None:
    opts = _parse_args(argv)
    app_path = _bundle_root() / "app.py"

    # Runtime logs (.local_store) live beside the executable unless a storage root is given.
    os.chdir(_runtime_root())
    if opts.storage_root:
        os.environ["ROI_STORAGE_ROOT"] = opts.storage_root

    os.environ.setdefault("STREAMLIT_BROWSER_GATHER_USAGE_STATS", "false")

    from streamlit.web import cli as stcli

    sys.argv = streamlit_argv(app_path, port=opts.port, headless=opts.headless)
    raise SystemExit(stcli.main())


if __name__ == "__main__":
    main()
