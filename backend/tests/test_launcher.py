"""Tests for the desktop launcher helpers."""

import socket

from launcher import find_free_port, wait_for_port


class TestPorts:
    def test_free_port_is_bindable(self):
        port = find_free_port()
        assert 0 < port < 65536
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))

    def test_wait_for_listening_port(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 0))
            s.listen(1)
            assert wait_for_port(s.getsockname()[1], attempts=5)

    def test_wait_gives_up(self):
        port = find_free_port()
        assert not wait_for_port(port, attempts=2, delay=0.01)
