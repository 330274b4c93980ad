"""
e-Gov Law API client.

One coroutine per endpoint, plus request() for a raw round trip. Each call
is a single independent round trip: build the URL, fetch, parse the XML,
check the Result envelope, then decode ApplData into a domain entity.
Nothing is retried, cached or shared between calls, so calls may run
concurrently.
"""
import asyncio
import uuid
from datetime import datetime
from typing import Callable, FrozenSet, Optional, Tuple, Union

from bs4.element import Tag

from elaws.domain.elaws_value_objects import (
    ResultCode,
    LawType,
    LawIdentifier,
    ArticlesQuery,
)
from elaws.domain.elaws_entities import (
    Result,
    Lawlists,
    Lawdata,
    Articles,
    Updatelawlists,
)
from elaws.domain.elaws_ports import FetcherPort
from elaws.infrastructure.async_fetcher import AsyncFetcher
from elaws.infrastructure.elaws_request_builder import ElawsRequestBuilder, DateLike
from elaws.infrastructure.adapters.elaws_errors import (
    ElawsTransportError,
    ElawsApiError,
)
from elaws.infrastructure.adapters.elaws_parser import (
    parse_xml,
    parse_response,
    parse_lawlists,
    parse_lawdata,
    parse_articles,
    parse_updatelawlists,
)
from elaws.infrastructure.cli.elaws_config import ElawsConfig
from elaws.infrastructure.logging.elaws_logger import ElawsLogger, LogContext


NORMAL_ONLY: FrozenSet[int] = frozenset({ResultCode.NORMAL})
# Articles answers MULTIPLE_CANDIDATES when an appendix table title is ambiguous.
ARTICLES_ACCEPTED: FrozenSet[int] = frozenset({ResultCode.NORMAL, ResultCode.MULTIPLE_CANDIDATES})


class ElawsClient:
    """
    Async client for the e-Gov Law API (Version 1).

    Usage:
        async with ElawsClient() as client:
            lawdata = await client.get_law("322AC0000000067")
            articles = await client.get_articles(
                LawNum("昭和二十二年法律第六十七号"), ArticleQuery("1")
            )
    """

    def __init__(
        self,
        config: Optional[ElawsConfig] = None,
        fetcher: Optional[FetcherPort] = None,
        logger: Optional[ElawsLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            config: Endpoint and HTTP settings; defaults to ElawsConfig()
            fetcher: Transport; defaults to an AsyncFetcher owned by the client
            logger: Structured logger; defaults to ElawsLogger("client")
            clock: Returns the current aware datetime, used to reject future
                update dates
        """
        self._config = config or ElawsConfig()
        self._owns_fetcher = fetcher is None
        self._fetcher = fetcher or AsyncFetcher(
            timeout=self._config.timeout,
            user_agent=self._config.user_agent,
        )
        self._builder = ElawsRequestBuilder(self._config.api_root, clock=clock)
        self._logger = logger or ElawsLogger("client")

    @property
    def config(self) -> ElawsConfig:
        return self._config

    @property
    def request_builder(self) -> ElawsRequestBuilder:
        return self._builder

    async def list_laws(self, law_type: LawType = LawType.ALL) -> Lawlists:
        """Fetch the law name list (法令名一覧取得)."""
        url = self._builder.lawlists(law_type)
        data = await self._request("lawlists", url, NORMAL_ONLY)
        return parse_lawlists(data)

    async def get_law(self, law_num_or_id: Union[str, LawIdentifier]) -> Lawdata:
        """
        Fetch the full text of a law (法令取得).

        Args:
            law_num_or_id: Law number or law ID; both use the same URL shape
        """
        url = self._builder.lawdata(law_num_or_id)
        data = await self._request("lawdata", url, NORMAL_ONLY)
        return parse_lawdata(data)

    async def get_articles(self, law: LawIdentifier, query: ArticlesQuery) -> Articles:
        """
        Fetch article, paragraph or appendix table contents (条文内容取得).

        Laws whose law number is shared with another law can only be
        fetched by LawId here.

        Args:
            law: LawNum or LawId
            query: ArticleQuery, ParagraphQuery, ArticleParagraphQuery or
                AppdxTableQuery

        Returns:
            Articles; appdx_table_title_lists is set when the appendix table
            title matched several candidates
        """
        url = self._builder.articles(law, query)
        data = await self._request("articles", url, ARTICLES_ACCEPTED)
        return parse_articles(data)

    async def list_updated_laws(self, date: DateLike) -> Updatelawlists:
        """
        Fetch the laws updated on date (更新法令一覧取得).

        Raises:
            ElawsDateTooEarlyError: date before 2020-11-24 JST
            ElawsFutureDateError: date later than now
        """
        url = self._builder.updatelawlists(date)
        data = await self._request("updatelawlists", url, NORMAL_ONLY)
        return parse_updatelawlists(data)

    async def request(self, url: str, operation: str = "request") -> Tuple[Result, Optional[Tag]]:
        """
        Run one round trip against a full API URL.

        The status code is not checked here.

        Returns:
            The decoded Result and the ApplData element (None when absent)

        Raises:
            ElawsTransportError: No response, or a non-2xx status
            ElawsXMLParseError: The body is not well-formed XML
            ElawsDecodeError: DataRoot or Result is missing
        """
        ctx = LogContext(
            correlation_id=uuid.uuid4().hex[:12],
            component=self._logger.component,
        ).with_extra(url=url)

        with self._logger.timed_operation(operation, ctx):
            response = await self._fetcher.fetch(url)
            if not response.ok:
                status_code = getattr(response, "status_code", 0)
                raise ElawsTransportError(
                    f"HTTP {status_code} from {url}",
                    response=response,
                    status_code=status_code,
                    url=url,
                )

            # Full law texts can be several megabytes.
            document = await asyncio.to_thread(parse_xml, response.content)
            result, data = parse_response(document)
            self._logger.debug(
                f"Result code {int(result.code)} for {operation}",
                ctx,
                envelope_message=result.message,
            )
            return result, data

    async def _request(self, operation: str, url: str, accepted: FrozenSet[int]) -> Optional[Tag]:
        """Run one round trip and return the ApplData element of an accepted response."""
        result, data = await self.request(url, operation)
        if result.code not in accepted:
            raise ElawsApiError(result.message, code=result.code)
        return data

    async def close(self) -> None:
        """Close the transport if the client created it."""
        if self._owns_fetcher and isinstance(self._fetcher, AsyncFetcher):
            await self._fetcher.close()

    async def __aenter__(self) -> "ElawsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
