from weekend.utilities import network


class FakeSocket:
    def __init__(self, *args, address=None):
        self.address = address
        self.connected_to = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def connect(self, target):
        if self.address is None:
            raise OSError("Network is unreachable")
        self.connected_to = target

    def getsockname(self):
        return (self.address, 54321)


def test_local_ip_uses_probe_host(monkeypatch):
    sockets = []

    def make_socket(*args):
        sock = FakeSocket(address="192.168.1.20")
        sockets.append(sock)
        return sock

    monkeypatch.setattr(network.socket, "socket", make_socket)
    assert network.get_local_ip("10.0.0.1") == "192.168.1.20"
    assert sockets[0].connected_to == ("10.0.0.1", 80)


def test_local_ip_falls_back_to_loopback(monkeypatch):
    monkeypatch.setattr(network.socket, "socket", lambda *args: FakeSocket())
    assert network.get_local_ip() == "127.0.0.1"


def test_banner_urls_for_wildcard_host(monkeypatch):
    monkeypatch.setattr(network, "get_local_ip", lambda probe_host: "192.168.1.20")
    assert network.banner_urls(8000, host="0.0.0.0") == ["http://localhost:8000", "http://192.168.1.20:8000"]


def test_banner_urls_without_lan_route(monkeypatch):
    monkeypatch.setattr(network, "get_local_ip", lambda probe_host: "127.0.0.1")
    assert network.banner_urls(8000, host="0.0.0.0") == ["http://localhost:8000"]


def test_banner_urls_for_bound_host():
    assert network.banner_urls(9000, host="10.1.2.3") == ["http://localhost:9000", "http://10.1.2.3:9000"]
    assert network.banner_urls(9000, host="127.0.0.1") == ["http://localhost:9000"]
