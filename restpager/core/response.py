"""Page response model."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, ConfigDict, Field


class Response(BaseModel):
    """One fetched page, as returned by the transport.

    Headers keep the case the server sent. Instances are never mutated;
    trimming produces a new instance through ``with_content``.
    """

    headers: dict[str, str] = Field(default_factory=dict)
    content: str = ""
    status_code: int = 200
    requested_url: str = ""

    model_config = ConfigDict(frozen=True)

    def header(self, name: str) -> str | None:
        """Look up a header value, returning None when it is missing."""
        if not name:
            return None
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def int_header(self, name: str) -> int | None:
        """Header value as an int, None when missing or unparsable."""
        value = self.header(name)
        if value is None:
            return None
        try:
            return int(value.strip())
        except ValueError:
            return None

    def with_content(self, content: str) -> Response:
        return self.model_copy(update={"content": content})

    def query_param(self, name: str) -> str | None:
        """First value of a query parameter of the requested URL."""
        if not self.requested_url:
            return None
        values = parse_qs(urlsplit(self.requested_url).query).get(name)
        return values[0] if values else None
