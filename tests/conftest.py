import threading

import pytest

import server


@pytest.fixture
def site(tmp_path):
    """Run a server over tmp_path on an ephemeral port; yields (base_url, directory)."""
    httpd = server.create_server(server.ServerConfig(port=0, directory=tmp_path))
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}", tmp_path
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join(timeout=5)
