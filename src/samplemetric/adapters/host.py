"""Host name resolution adapters."""

import socket

from samplemetric.core.exceptions import HostResolutionError


class SocketHostResolver:
    """HostResolverPort backed by the operating system resolver.

    The host name must resolve to an address, otherwise the document
    cannot name its injector and HostResolutionError is raised.
    """

    def resolve(self) -> str:
        """Return the local host name."""
        # @tra: Adapter.Host.Resolve
        try:
            name = socket.gethostname()
            socket.gethostbyname(name)
        except OSError as exc:
            raise HostResolutionError(
                f"unable to determine injector host name: {exc}"
            ) from exc
        return name


class StaticHostResolver:
    """HostResolverPort returning a fixed, preconfigured name."""

    def __init__(self, name: str) -> None:
        if not name.strip():
            raise HostResolutionError("static host name must not be blank")
        self._name = name.strip()

    def resolve(self) -> str:
        return self._name
