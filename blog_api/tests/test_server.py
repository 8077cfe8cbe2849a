import socket
import unittest

import httpx

from blog_api import dependencies, server
from blog_api.config import get_settings
from blog_api.server import close_server, run_server


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class ServerLifecycleTests(unittest.TestCase):
    def setUp(self):
        self.port = _free_port()
        self.base_url = f"http://127.0.0.1:{self.port}"

    def tearDown(self):
        close_server()

    def test_run_and_close_server(self):
        run_server(get_settings().test_database_url, host="127.0.0.1", port=self.port)

        created = httpx.post(
            f"{self.base_url}/blog-posts",
            json={
                "title": "Hello",
                "content": "World",
                "author": {"firstName": "Grace", "lastName": "Hopper"},
            },
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["author"], "Grace Hopper")

        listed = httpx.get(f"{self.base_url}/blog-posts")
        self.assertEqual(listed.status_code, 200)
        self.assertEqual(len(listed.json()), 1)

        close_server()
        self.assertIsNone(dependencies._db_client)
        with self.assertRaises(httpx.TransportError):
            httpx.get(f"{self.base_url}/blog-posts", timeout=1)

    def test_run_server_twice_fails(self):
        run_server(get_settings().test_database_url, host="127.0.0.1", port=self.port)
        with self.assertRaises(RuntimeError):
            run_server(get_settings().test_database_url, port=_free_port())

    def test_close_server_without_running_is_noop(self):
        close_server()
        self.assertIsNone(server._server)


if __name__ == "__main__":
    unittest.main()
