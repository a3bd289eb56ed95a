#!/usr/bin/env python3
"""
Stockroom - Inventory catalog with bulk import
===============================================

Serve the API:        python main.py
One-off import:       python main.py import items.csv [--group NAME] [--no-auto-asset-id]

See config.py for all environment-variable tunables.
"""

import argparse
import logging
import sys

from flask import Flask, jsonify

import config
from db import init_db
from api import api_bp


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


def _import_file(path: str, group: str, auto_increment: bool) -> int:
    """Run one import from the command line; returns the exit code."""
    from import_engine import run_import, ImportEngineError, ImportValidationError

    init_db(config.DB_URL)
    with open(path, "rb") as fh:
        content = fh.read()

    try:
        completed = run_import(content, group=group, auto_increment_asset_id=auto_increment)
    except ImportValidationError as exc:
        report = exc.report
        print(f"  Done with errors: {report.completed} imported, "
              f"{report.skipped} skipped / {report.total_rows} rows")
        for err in report.errors[:10]:
            print(f"    Row {err['row']}: {err['reason']}")
        return 1
    except ImportEngineError as exc:
        print(f"  Import failed: {exc}")
        return 2

    print(f"  Done: {completed} rows imported into group {group!r}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog="stockroom")
    sub = parser.add_subparsers(dest="command")

    imp = sub.add_parser("import", help="import a CSV/TSV file")
    imp.add_argument("file")
    imp.add_argument("--group", default=config.DEFAULT_GROUP)
    imp.add_argument("--no-auto-asset-id", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    if args.command == "import":
        sys.exit(_import_file(args.file, args.group,
                              config.AUTO_INCREMENT_ASSET_ID and not args.no_auto_asset_id))

    print("=" * 56)
    print("  Stockroom - Inventory Catalog")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    print(f"\n  http://{config.HOST}:{config.PORT}/api/v1")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
