#!/usr/bin/env python3

import argparse
import logging
import sys
from pathlib import Path

from flask import Flask, render_template, request
from flask_wtf import CSRFProtect
from jinja2 import StrictUndefined, TemplateError
from waitress import serve
from werkzeug.middleware.proxy_fix import ProxyFix

from pagewiki.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_THREADS,
    build_config,
)
from pagewiki.logger import setup_logger
from pagewiki.limiter import init_limiter
from pagewiki.storage.page_store import FilePageStore
from pagewiki.website.filters import wikify
from pagewiki.website.renderer import PageRenderer
from pagewiki.website.wiki_router import create_wiki_route

APP_LOGGER_NAME = "wiki_app"


class Wiki:
    def __init__(self, config=None, store=None):
        self.config = build_config(config)
        self.app = Flask(
__name__,
            template_folder=self.config["WIKI_TEMPLATE_DIR"],
            )

        self.init_attributes()
        self.init_store(store)
        self.limiter = init_limiter(self.app)
        CSRFProtect(self.app)

        self.init_template_filters()
        # Fails here, before any request, if view.html or edit.html is missing or broken
        self.renderer = PageRenderer(self.app)

        self.app.register_blueprint(
            create_wiki_route(self.store, self.renderer, self.app.logger)
        )

        self.set_routes()
        self.app.logger.info("Wiki initialized")

    def init_attributes(self):
        self.app.config.update(self.config)
        self.app.secret_key = self.get_secret()
        if self.config["WIKI_PROXY_FIX"]:
            self.app.wsgi_app = ProxyFix(self.app.wsgi_app, x_for=1, x_proto=1, x_host=1)
        self.app = setup_logger(self.app)

        self.app.url_map.merge_slashes = False
        self.app.jinja_env.undefined = StrictUndefined

        self.template_dir = Path(self.config["WIKI_TEMPLATE_DIR"])
        self.data_dir = Path(self.config["WIKI_DATA_DIR"]).resolve()

    def get_secret(self):
        if self.config["SECRET_KEY"]:
            return self.config["SECRET_KEY"]
        # Only signs CSRF tokens, so a per-process key is enough
        import secrets
        return secrets.token_hex(32)

    def init_store(self, store=None):
        if store is not None:
            self.store = store
            return
        if not self.data_dir.is_dir():
            raise NotADirectoryError(f"Data directory {self.data_dir} does not exist")
        self.store = FilePageStore(self.data_dir)
        self.app.logger.info(f"Storing pages in {self.data_dir}")

    def init_template_filters(self):
        @self.app.template_filter("wikify")
        def wikify_filter(text):
            """Render page text for display, as markdown when enabled"""
            return wikify(text, render_markdown=self.app.config["WIKI_RENDER_MARKDOWN"])

    def set_routes(self):
        @self.app.before_request
        def before_request():
            # ProxyFix rewrites remote_addr when WIKI_PROXY_FIX is on
            self.app.logger.debug(
                f"Request from {request.remote_addr} - {request.method} {request.path}"
            )

        @self.app.errorhandler(404)
        def not_found_error(e):
            return render_template("404.html"), 404

        @self.app.errorhandler(500)
        def internal_error(e):
            self.app.logger.error(f"Internal server error: {e}")
            return render_template("500.html"), 500


def create_app(config=None, store=None):
    return Wiki(config=config, store=store).app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Serve a file-backed wiki")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Interface to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="TCP port to listen on")
    parser.add_argument("--threads", type=int, default=DEFAULT_THREADS, help="Waitress worker threads")
    parser.add_argument("--data-dir", help="Directory holding the <title>.txt page files")
    parser.add_argument("--template-dir", help="Directory holding view.html and edit.html")
    parser.add_argument("--log-dir", help="Directory for rotating log files")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG or INFO")
    parser.add_argument(
        "--markdown",
        action="store_true",
        default=None,
        help="Render page bodies as markdown on the view page",
    )
    parser.add_argument(
        "--csrf",
        action="store_true",
        default=None,
        help="Require a CSRF token on page saves",
    )
    parser.add_argument(
        "--proxy-fix",
        action="store_true",
        default=None,
        help="Trust X-Forwarded-* headers from one reverse proxy",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    log = logging.getLogger(APP_LOGGER_NAME)

    try:
        wiki = Wiki(config={
            "WIKI_DATA_DIR": args.data_dir,
            "WIKI_TEMPLATE_DIR": args.template_dir,
            "WIKI_LOG_DIR": args.log_dir,
            "WIKI_LOG_LEVEL": args.log_level,
            "WIKI_RENDER_MARKDOWN": args.markdown,
            "WTF_CSRF_ENABLED": args.csrf,
            "WIKI_PROXY_FIX": args.proxy_fix,
        })
    except (OSError, TemplateError) as e:
        log.critical(f"Wiki failed to start: {e}")
        sys.exit(1)

    wiki.app.logger.info(f"Listening on {args.host}:{args.port}")
    try:
        serve(wiki.app, host=args.host, port=args.port, threads=args.threads)
    except OSError as e:
        wiki.app.logger.critical(f"Listener on {args.host}:{args.port} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
