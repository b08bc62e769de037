from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import model_validator

from gora.core import Configuration, FrozenDataModel
from gora.core.config import parse_int
from gora.core.exceptions import BadRequestError

from ._constants import (
    DEFAULT_HOST,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PORT,
    DEFAULT_SCHEME,
    DEFAULT_SOCKET_TIMEOUT,
    PROP_API_KEY_ID,
    PROP_API_KEY_SECRET,
    PROP_AUTHENTICATION_TYPE,
    PROP_AUTHORIZATION_TOKEN,
    PROP_HOST,
    PROP_MAX_RETRIES,
    PROP_PASSWORD,
    PROP_PORT,
    PROP_SCHEME,
    PROP_SOCKET_TIMEOUT,
    PROP_USERNAME,
)


CREDENTIAL_FIELDS = (
    "username",
    "password",
    "authorization_token",
    "api_key_id",
    "api_key_secret",
)


class AuthenticationType(str, Enum):
    NONE = "NONE"
    BASIC = "BASIC"
    TOKEN = "TOKEN"
    APIKEY = "APIKEY"


class ElasticsearchParameters(FrozenDataModel):
    """Connection parameters."""

    hosts: list[str] = [DEFAULT_HOST]
    """Host names or addresses."""

    port: int = DEFAULT_PORT
    """HTTP port, used for hosts without explicit port."""

    scheme: str = DEFAULT_SCHEME
    """http or https."""

    authentication_type: AuthenticationType = AuthenticationType.NONE
    """Authentication type."""

    username: str | None = None
    password: str | None = None
    authorization_token: str | None = None
    api_key_id: str | None = None
    api_key_secret: str | None = None

    socket_timeout: int = DEFAULT_SOCKET_TIMEOUT
    """Request timeout in seconds."""

    max_retries: int = DEFAULT_MAX_RETRIES
    """Retries on connection failures."""

    @model_validator(mode="after")
    def _check_credentials(self) -> ElasticsearchParameters:
        if not self.hosts:
            raise ValueError("At least one host is required")
        if self.scheme not in ("http", "https"):
            raise ValueError(f"Unsupported scheme {self.scheme}")
        required = {
            AuthenticationType.NONE: (),
            AuthenticationType.BASIC: ("username", "password"),
            AuthenticationType.TOKEN: ("authorization_token",),
            AuthenticationType.APIKEY: ("api_key_id", "api_key_secret"),
        }[self.authentication_type]
        missing = [name for name in required if not getattr(self, name)]
        if missing:
            raise ValueError(
                f"{self.authentication_type.value} authentication "
                f"requires {', '.join(missing)}"
            )
        unused = [
            name
            for name in CREDENTIAL_FIELDS
            if name not in required and getattr(self, name)
        ]
        if unused:
            raise ValueError(
                f"{self.authentication_type.value} authentication "
                f"does not accept {', '.join(unused)}"
            )
        return self

    @property
    def host(self) -> str:
        return self.hosts[0]

    def get_host(self) -> str:
        return self.host

    def get_authentication_type(self) -> AuthenticationType:
        return self.authentication_type

    def get_username(self) -> str | None:
        return self.username

    def get_password(self) -> str | None:
        return self.password

    @staticmethod
    def load(
        properties: Mapping[str, Any] | None,
        conf: Configuration | None = None,
    ) -> ElasticsearchParameters:
        """Load parameters.

        Each value is taken from the properties when present,
        then from the configuration, then from the defaults.

        Args:
            properties:
                Data store properties.
            conf:
                Configuration holding default values.

        Returns:
            Connection parameters.

        Raises:
            BadRequestError:
                Invalid or incomplete parameters.
        """
        properties = properties or dict()
        conf = conf or Configuration(values={})

        def _get(key: str, default: Any = None) -> Any:
            value = properties.get(key)
            if value is None or value == "":
                value = conf.get(key)
            if value is None or value == "":
                return default
            return value.strip() if isinstance(value, str) else value

        hosts = _get(PROP_HOST, DEFAULT_HOST)
        if isinstance(hosts, str):
            hosts = [h.strip() for h in hosts.split(",") if h.strip()]
        try:
            authentication_type = AuthenticationType(
                str(_get(PROP_AUTHENTICATION_TYPE, "NONE")).upper()
            )
            return ElasticsearchParameters(
                hosts=hosts,
                port=parse_int(_get(PROP_PORT), DEFAULT_PORT),
                scheme=str(_get(PROP_SCHEME, DEFAULT_SCHEME)).lower(),
                authentication_type=authentication_type,
                username=_get(PROP_USERNAME),
                password=_get(PROP_PASSWORD),
                authorization_token=_get(PROP_AUTHORIZATION_TOKEN),
                api_key_id=_get(PROP_API_KEY_ID),
                api_key_secret=_get(PROP_API_KEY_SECRET),
                socket_timeout=parse_int(
                    _get(PROP_SOCKET_TIMEOUT), DEFAULT_SOCKET_TIMEOUT
                ),
                max_retries=parse_int(
                    _get(PROP_MAX_RETRIES), DEFAULT_MAX_RETRIES
                ),
            )
        except ValueError as e:
            raise BadRequestError(
                f"Invalid Elasticsearch parameters: {e}"
            ) from e

    def get_urls(self) -> list[str]:
        urls = []
        for host in self.hosts:
            if "://" in host:
                urls.append(host)
            elif ":" in host:
                urls.append(f"{self.scheme}://{host}")
            else:
                urls.append(f"{self.scheme}://{host}:{self.port}")
        return urls

    def to_client_args(self) -> dict[str, Any]:
        args: dict[str, Any] = {
            "hosts": self.get_urls(),
            "request_timeout": self.socket_timeout,
            "max_retries": self.max_retries,
            "retry_on_timeout": True,
        }
        if self.authentication_type == AuthenticationType.BASIC:
            args["basic_auth"] = (self.username, self.password)
        elif self.authentication_type == AuthenticationType.TOKEN:
            args["bearer_auth"] = self.authorization_token
        elif self.authentication_type == AuthenticationType.APIKEY:
            args["api_key"] = (self.api_key_id, self.api_key_secret)
        return args
