#!/usr/bin/env python3
"""
server.py

Usage:
  export PORT=4500        # optional, defaults to 3000
  python server.py [--port 4500] [--directory /srv/site]

Serves basic.html from the serving directory for every request, whatever
the path or method. If the file can't be read the client gets a 500 with a
plain-text body and the error is printed to stderr.
"""
import os
import sys
import argparse
import functools
import http.server
from pathlib import Path
from typing import NamedTuple

DEFAULT_PORT = 3000
DOCUMENT_NAME = "basic.html"
ERROR_BODY = b"Internal Server Error"


class ServerConfig(NamedTuple):
    port: int
    directory: Path

    @property
    def document_path(self) -> Path:
        return self.directory / DOCUMENT_NAME


def resolve_port(raw):
    """Turn a PORT value into a port number, falling back to DEFAULT_PORT."""
    if raw is None or not str(raw).strip():
        return DEFAULT_PORT
    try:
        port = int(str(raw).strip())
    except ValueError:
        port = -1
    if not 0 <= port <= 65535:
        print(f"Warning: ignoring invalid port {raw!r}, using {DEFAULT_PORT}", file=sys.stderr)
        return DEFAULT_PORT
    return port


def load_config(argv=None, environ=None) -> ServerConfig:
    if environ is None:
        environ = os.environ
    parser = argparse.ArgumentParser(description="Serve basic.html for every request.")
    parser.add_argument("--port", default=environ.get("PORT"), help=f"Port to listen on (env PORT, default {DEFAULT_PORT})")
    parser.add_argument("--directory", default=str(Path(__file__).resolve().parent),
                        help=f"Directory containing {DOCUMENT_NAME} (default: this script's directory)")
    args = parser.parse_args(argv)
    return ServerConfig(port=resolve_port(args.port), directory=Path(args.directory).resolve())


class DocumentHandler(http.server.BaseHTTPRequestHandler):
    def __init__(self, *args, document_path=None, **kwargs):
        self.document_path = document_path
        super().__init__(*args, **kwargs)

    def serve_document(self):
        self.discard_body()
        try:
            with open(self.document_path, "rb") as f:
                body = f.read()
        except OSError as e:
            print(e, file=sys.stderr)
            self.respond(500, "text/plain", ERROR_BODY)
            return
        self.respond(200, "text/html", body)

    def discard_body(self):
        # Closing with unread request bytes makes the kernel reset the connection.
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = 0
        if length > 0:
            self.rfile.read(length)

    def respond(self, status, content_type, body):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    # Every verb gets the same document; BaseHTTPRequestHandler looks up do_<METHOD>.
    def __getattr__(self, name):
        if name.startswith("do_"):
            return self.serve_document
        raise AttributeError(name)


def create_server(config: ServerConfig):
    handler = functools.partial(DocumentHandler, document_path=config.document_path)
    return http.server.ThreadingHTTPServer(("", config.port), handler)


def serve(config: ServerConfig):
    with create_server(config) as httpd:
        print(f"Server running at http://localhost:{httpd.server_address[1]}/", flush=True)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")


def main(argv=None):
    serve(load_config(argv))


if __name__ == "__main__":
    main()
