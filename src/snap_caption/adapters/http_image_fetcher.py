"""Image download client."""

from dataclasses import dataclass

import httpx

from snap_caption.services.captions import ImageFetcher


@dataclass
class HttpxImageFetcher(ImageFetcher):
    """Downloads images over HTTP, following at most one redirect."""

    http_client: httpx.AsyncClient
    timeout: float = 20.0

    @classmethod
    def create(cls, timeout: float = 20.0) -> "HttpxImageFetcher":
        """Create a fetcher with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(follow_redirects=True, max_redirects=1),
            timeout=timeout,
        )

    async def fetch(self, url: str) -> tuple[bytes, str | None]:
        """Download the URL and return body plus content type."""
        response = await self.http_client.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content, response.headers.get("content-type")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
