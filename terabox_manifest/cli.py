"""
Command-line interface for the TeraBox share manifest service.

    terabox-manifest resolve https://www.1024tera.com/s/1abc --mode eager
    terabox-manifest directory /Movies --js-token T --shorturl abc
    terabox-manifest serve --port 3000
"""

import argparse
import getpass
import json
import sys

from tqdm import tqdm

from terabox_manifest.api import create_app
from terabox_manifest.auth import SessionProvider
from terabox_manifest.config import (
    DEFAULT_EMAIL,
    DEFAULT_MODE,
    DEFAULT_PASSWORD,
    DEFAULT_PORT,
    SHARE_URL_RE,
)
from terabox_manifest.errors import TeraboxError
from terabox_manifest.logging_setup import log, setup_logging
from terabox_manifest.tree import ListMode, TreeController


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List every file in a TeraBox share with direct download links.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials can also be provided via the TERABOX_EMAIL and\n"
            "TERABOX_PASSWORD env vars. If the password is missing you will\n"
            "be prompted for it."
        ),
    )
    parser.add_argument(
        "--email", default=DEFAULT_EMAIL,
        help="Account email (overrides TERABOX_EMAIL env var)",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="Account password (overrides TERABOX_PASSWORD env var)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_resolve = sub.add_parser("resolve", help="Print the manifest of a share link")
    p_resolve.add_argument("link", help="Share URL")
    p_resolve.add_argument(
        "--mode", choices=[m.value for m in ListMode], default=DEFAULT_MODE,
        help=f"eager walks every sub-directory, lazy stops at the top level "
             f"(default: {DEFAULT_MODE})",
    )
    p_resolve.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar of directories listed",
    )

    p_dir = sub.add_parser("directory", help="Print one directory of a share")
    p_dir.add_argument("path", help="Server-side directory path")
    p_dir.add_argument("--js-token", required=True, help="jsToken from a previous resolve")
    p_dir.add_argument("--shorturl", required=True, help="shorturl from a previous resolve")

    p_serve = sub.add_parser("serve", help="Run the HTTP API locally")
    p_serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    p_serve.add_argument(
        "--port", type=int, default=DEFAULT_PORT,
        help=f"Listen port (default: {DEFAULT_PORT}, or the PORT env var)",
    )
    p_serve.add_argument(
        "--mode", choices=[m.value for m in ListMode], default=DEFAULT_MODE,
        help=f"Listing mode served on /api (default: {DEFAULT_MODE})",
    )
    return parser.parse_args(argv)


def _run_with_progress(controller: TreeController, link: str, mode: str):
    bar = tqdm(desc="Listing", unit="dir", dynamic_ncols=True)

    def on_directory(listed: int, pending: int) -> None:
        bar.total = listed + pending
        bar.update(listed - bar.n)
        bar.set_postfix(queued=pending)

    controller.on_directory = on_directory
    try:
        return controller.resolve(link, mode)
    finally:
        bar.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug)

    if not args.email:
        log.error("No account email: pass --email or set TERABOX_EMAIL")
        return 1
    if not args.password:
        args.password = getpass.getpass("TeraBox password: ")

    controller = TreeController(SessionProvider(args.email, args.password))

    if args.command == "serve":
        app = create_app(controller=controller, mode=args.mode)
        log.info("Serving on http://%s:%d (mode=%s)", args.host, args.port, args.mode)
        app.run(host=args.host, port=args.port)
        return 0

    try:
        if args.command == "resolve":
            if not SHARE_URL_RE.match(args.link):
                log.warning("%s does not look like a share link", args.link)
            if args.progress:
                manifest = _run_with_progress(controller, args.link, args.mode)
            else:
                manifest = controller.resolve(args.link, args.mode)
        else:
            manifest = controller.list_directory(args.path, args.js_token, args.shorturl)
    except TeraboxError as exc:
        log.error("%s", exc)
        print(json.dumps(exc.to_dict(), indent=2))
        return 1

    print(json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
