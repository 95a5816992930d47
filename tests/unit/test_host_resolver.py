"""Tests for host name resolution adapters."""

import socket

import pytest

from samplemetric.adapters.host import SocketHostResolver, StaticHostResolver
from samplemetric.core.exceptions import HostResolutionError, SampleMetricError

pytestmark = [pytest.mark.tier(1), pytest.mark.tra("Adapter.Host.Resolve")]


class TestSocketHostResolver:
    """Tests for SocketHostResolver."""

    def test_returns_local_host_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The resolver returns the name reported by the OS."""
        monkeypatch.setattr(socket, "gethostname", lambda: "injector-7")
        monkeypatch.setattr(socket, "gethostbyname", lambda name: "10.0.0.7")

        assert SocketHostResolver().resolve() == "injector-7"

    def test_unresolvable_name_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A name without an address raises HostResolutionError."""

        def fail(name: str) -> str:
            raise socket.gaierror(-2, "Name or service not known")

        monkeypatch.setattr(socket, "gethostname", lambda: "ghost")
        monkeypatch.setattr(socket, "gethostbyname", fail)

        with pytest.raises(HostResolutionError, match="injector host name") as excinfo:
            SocketHostResolver().resolve()

        assert isinstance(excinfo.value.__cause__, socket.gaierror)
        assert isinstance(excinfo.value, SampleMetricError)


class TestStaticHostResolver:
    """Tests for StaticHostResolver."""

    def test_returns_configured_name(self) -> None:
        """The configured name is returned, trimmed."""
        assert StaticHostResolver("  load-gen-2 ").resolve() == "load-gen-2"

    def test_blank_name_raises(self) -> None:
        """A blank name cannot identify an injector."""
        with pytest.raises(HostResolutionError):
            StaticHostResolver(" ")
