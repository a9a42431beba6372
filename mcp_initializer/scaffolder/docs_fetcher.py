"""Best-effort download of reference documentation into a project.

Two groups of documents are fetched into ``docs/external/``:

1. *Essential* documents that every project gets: the MCP compatibility
   reference plus the SDK README for the chosen technology.
2. Caller-supplied URLs, each written under a name derived from the URL.

Every download is independent.  A timeout, connection problem or non-2xx
status is logged and recorded as a failed ``FetchOutcome``; it never stops
the remaining downloads and never raises out of :meth:`DocumentationFetcher.fetch`.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx
from pydantic import BaseModel, Field

from mcp_initializer.config import FetchConfig
from mcp_initializer.errors import ExternalFetchFailure
from mcp_initializer.utils import ensure_dir, print_info, print_success, print_warning, write_file

FALLBACK_FILENAME = "documentation"


class FetchOutcome(BaseModel):
    """Result of one documentation download."""

    url: str
    filename: str
    path: Optional[Path] = Field(default=None, description="Written file, on success")
    size: int = Field(default=0, description="Bytes written")
    error: Optional[str] = Field(default=None, description="Failure reason, on failure")
    essential: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class EssentialDoc:
    url: str
    filename: str
    description: str


def filename_from_url(url: str) -> str:
    """Derive a stable file name from *url*.

    Uses the last non-empty path segment (or ``documentation``) and appends
    ``.txt`` when the name has no extension.

    Examples::

        filename_from_url("https://x.io/api/openapi.json") -> "openapi.json"
        filename_from_url("https://x.io/guide/") -> "guide.txt"
        filename_from_url("https://x.io") -> "documentation.txt"
        filename_from_url("not a url") -> "documentation.txt"
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError):
        return f"{FALLBACK_FILENAME}.txt"
    if not parsed.scheme:
        return f"{FALLBACK_FILENAME}.txt"

    segments = [segment for segment in parsed.path.split("/") if segment]
    name = segments[-1] if segments else FALLBACK_FILENAME
    return name if "." in name else f"{name}.txt"


class DocumentationFetcher:
    """Downloads essential and caller-supplied documentation.

    An ``httpx.AsyncClient`` may be injected (tests pass one backed by
    ``httpx.MockTransport``); otherwise a client is opened per ``fetch`` call.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or FetchConfig()
        self.client = client

    # -- Public API --------------------------------------------------------

    def essential_documents(self, technology: str | None) -> list[EssentialDoc]:
        docs = [
            EssentialDoc(
                url=self.config.compatibility_doc_url,
                filename=self.config.compatibility_doc_filename,
                description="MCP client compatibility matrix",
            )
        ]
        sdk_url = self.config.sdk_readme_urls.get(technology or "")
        if sdk_url:
            label = "TypeScript" if technology == "typescript" else technology.capitalize()
            docs.append(
                EssentialDoc(
                    url=sdk_url,
                    filename=f"{technology}-sdk-README.md",
                    description=f"{label} SDK documentation",
                )
            )
        return docs

    async def fetch(
        self,
        technology: str | None,
        urls: list[str] | tuple[str, ...] | None,
        docs_dir: str | Path,
    ) -> list[FetchOutcome]:
        """Fetch essential docs, then every URL in *urls*, into *docs_dir*.

        Returns one ``FetchOutcome`` per attempted document, in request order.
        Only a failure to create *docs_dir* itself propagates.
        """
        target = Path(docs_dir)
        await asyncio.to_thread(ensure_dir, target)

        outcomes: list[FetchOutcome] = []
        async with self._client_scope() as client:
            for doc in self.essential_documents(technology):
                print_info(f"Downloading {doc.description}: {doc.url}")
                outcomes.append(
                    await self._fetch_one(
                        client,
                        doc.url,
                        target / doc.filename,
                        self.config.essential_timeout,
                        essential=True,
                    )
                )

            for url in urls or ():
                outcomes.append(
                    await self._fetch_one(
                        client,
                        url,
                        target / filename_from_url(url),
                        self.config.user_timeout,
                    )
                )
        return outcomes

    # -- Internal ----------------------------------------------------------

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(follow_redirects=True) as client:
            yield client

    async def _fetch_one(
        self,
        client: httpx.AsyncClient,
        url: str,
        destination: Path,
        timeout: float,
        *,
        essential: bool = False,
    ) -> FetchOutcome:
        try:
            response = await client.get(url, timeout=timeout)
            response.raise_for_status()
            body = response.content
            await write_file(destination, body)
        except httpx.TimeoutException:
            failure = ExternalFetchFailure(url, f"timed out after {timeout:g}s")
        except httpx.HTTPStatusError as exc:
            failure = ExternalFetchFailure(url, f"HTTP {exc.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            failure = ExternalFetchFailure(url, str(exc) or exc.__class__.__name__)
        except OSError as exc:
            failure = ExternalFetchFailure(url, f"could not write {destination.name}: {exc}")
        except Exception as exc:  # noqa: BLE001
            failure = ExternalFetchFailure(url, f"unexpected error: {exc}")
        else:
            print_success(f"✓ Downloaded {destination.name}")
            return FetchOutcome(
                url=url,
                filename=destination.name,
                path=destination,
                size=len(body),
                essential=essential,
            )

        print_warning(str(failure))
        return FetchOutcome(
            url=url,
            filename=destination.name,
            error=failure.reason,
            essential=essential,
        )
