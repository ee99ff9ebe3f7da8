"""Configuration model — immutable endpoint and timeout settings."""

from __future__ import annotations

import dataclasses

DEFAULT_API_URL = "https://api.dropboxapi.com"
DEFAULT_CONTENT_URL = "https://content.dropboxapi.com"


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    """Endpoints and transport timeouts for a client.

    :param api_url: Base URL for RPC endpoints (check, move, copy).
    :param content_url: Base URL for content endpoints (upload, download).
    :param timeout: Overall per-request timeout in seconds for blocking transports.
    :param connect_timeout: Connect timeout in seconds for non-blocking transports.
    :param user_agent: Optional ``User-Agent`` header value.
    """

    api_url: str = DEFAULT_API_URL
    content_url: str = DEFAULT_CONTENT_URL
    timeout: float = 10.0
    connect_timeout: float = 100.0
    user_agent: str | None = None

    def __post_init__(self) -> None:
        for field in ("api_url", "content_url"):
            value = getattr(self, field)
            if not value or not value.strip():
                raise ValueError(f"{field} must be a non-empty string")
            object.__setattr__(self, field, value.rstrip("/"))
        for field in ("timeout", "connect_timeout"):
            if getattr(self, field) <= 0:
                raise ValueError(f"{field} must be positive, got {getattr(self, field)!r}")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> ClientConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Mapping whose keys are a subset of the field names.
        :raises TypeError: If ``data`` carries unknown keys.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown client config keys {unknown}. Known keys: {sorted(known)}"
            raise TypeError(msg)

        kwargs: dict[str, object] = {}
        for key in ("api_url", "content_url"):
            if key in data:
                kwargs[key] = str(data[key])
        for key in ("timeout", "connect_timeout"):
            if key in data:
                kwargs[key] = float(data[key])  # type: ignore[arg-type]
        if data.get("user_agent") is not None:
            kwargs["user_agent"] = str(data["user_agent"])
        return cls(**kwargs)  # type: ignore[arg-type]
