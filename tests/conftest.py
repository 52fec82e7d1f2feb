"""Configuration pytest pour le client WebSocket Bitfinex."""

import os
import sys
import threading
import pytest
from unittest.mock import Mock, patch
from pathlib import Path

# Ajouter le répertoire src au path pour les imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from exceptions import WebSocketConnectionError  # noqa: E402
from interfaces.transport_interface import TransportInterface  # noqa: E402


class FakeTransport(TransportInterface):
    """Transport scripté : rejoue des trames puis lève une erreur de lecture."""

    def __init__(self, frames=None, final_error=None, fail_send=False):
        self.frames = list(frames or [])
        self.final_error = final_error or WebSocketConnectionError("connexion fermée par le serveur")
        self.fail_send = fail_send
        self.sent = []
        self.closed = False

    def send(self, message):
        if self.fail_send:
            raise WebSocketConnectionError("écriture impossible")
        self.sent.append(message)

    def recv(self):
        if self.closed:
            raise WebSocketConnectionError("transport fermé")
        if self.frames:
            item = self.frames.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        raise self.final_error

    def close(self):
        self.closed = True


class FakeTransportFactory:
    """Remplace connect_transport ; mémorise les appels et le transport créé."""

    def __init__(self, transport=None, error=None):
        self.transport = transport or FakeTransport()
        self.error = error
        self.calls = []

    def __call__(self, url, tls_skip_verify=False):
        self.calls.append((url, tls_skip_verify))
        if self.error:
            raise self.error
        return self.transport


class GatedTransportFactory(FakeTransportFactory):
    """Factory dont le handshake reste bloqué jusqu'à release.set()."""

    def __init__(self, transport=None):
        super().__init__(transport)
        self.entered = threading.Event()
        self.release = threading.Event()

    def __call__(self, url, tls_skip_verify=False):
        self.entered.set()
        self.release.wait(timeout=5)
        return super().__call__(url, tls_skip_verify)


@pytest.fixture
def mock_logger():
    return Mock()


@pytest.fixture
def make_transport():
    """Fabrique un couple (transport scripté, factory) pour les clients."""
    def _make(frames=None, **kwargs):
        transport = FakeTransport(frames, **kwargs)
        return transport, FakeTransportFactory(transport)
    return _make


@pytest.fixture
def gated_factory():
    """Factory bloquée en plein handshake (transport scripté sans trames)."""
    factory = GatedTransportFactory()
    yield factory
    factory.release.set()


@pytest.fixture
def mock_env_vars():
    """Mock des variables d'environnement pour les tests."""
    with patch.dict(os.environ, {
        'BITFINEX_API_KEY': 'test_api_key',
        'BITFINEX_API_SECRET': 'test_api_secret',
        'BITFINEX_WS_URL': 'wss://api.bitfinex.com/ws',
        'WS_TLS_SKIP_VERIFY': 'false',
        'LOG_LEVEL': 'INFO',
    }):
        yield
