"""Connection options shared by commands that introspect a live endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from cli.groups import connection_group
from kibel_client.transport import GraphqlTransport, endpoint_from_origin
from runtime_models.adapters import CLIENT_SETTINGS_ADAPTER

if TYPE_CHECKING:
    import httpx

    from cli.config_models import ConnectionConfig
    from runtime_models.client import ClientSettingsRuntime


@dataclass(frozen=True)
class ConnectionOptions:
    """Origin, token and timeout for live introspection."""

    origin: Annotated[
        str | None,
        Parameter(
            name="--origin",
            help="Service origin, e.g. https://example.kibe.la.",
            env_var="KIBELA_ORIGIN",
            group=connection_group,
        ),
    ] = None
    token: Annotated[
        str | None,
        Parameter(
            name="--token",
            help="Access token sent as a bearer token.",
            env_var="KIBELA_ACCESS_TOKEN",
            show_default=False,
            group=connection_group,
        ),
    ] = None
    endpoint: Annotated[
        str | None,
        Parameter(
            name="--endpoint",
            help="GraphQL endpoint (default: <origin>/api/v1).",
            group=connection_group,
        ),
    ] = None
    timeout_secs: Annotated[
        float | None,
        Parameter(
            name="--timeout-secs",
            help="Request timeout in seconds (default: 5).",
            group=connection_group,
        ),
    ] = None

    def settings(self, defaults: ConnectionConfig) -> ClientSettingsRuntime:
        """Validate options, filling gaps from config defaults.

        Returns
        -------
        ClientSettingsRuntime
            Validated connection settings.

        Raises
        ------
        pydantic.ValidationError
            Raised when origin or token is missing or malformed.
        """
        payload: dict[str, object] = {
            "origin": self.origin or defaults.origin or "",
            "token": self.token or "",
            "endpoint": self.endpoint or defaults.endpoint,
        }
        timeout = self.timeout_secs if self.timeout_secs is not None else defaults.timeout_secs
        if timeout is not None:
            payload["timeout_secs"] = timeout
        return CLIENT_SETTINGS_ADAPTER.validate_python(payload)


def open_transport(
    settings: ClientSettingsRuntime,
    *,
    http_client: httpx.Client | None = None,
) -> GraphqlTransport:
    """Return a transport bound to the settings' endpoint.

    Returns
    -------
    GraphqlTransport
        Transport owning its HTTP client unless ``http_client`` is given.
    """
    endpoint = settings.endpoint or endpoint_from_origin(settings.origin)
    return GraphqlTransport(
        endpoint,
        settings.token,
        timeout=settings.timeout_secs,
        client=http_client,
    )


__all__ = ["ConnectionOptions", "open_transport"]
