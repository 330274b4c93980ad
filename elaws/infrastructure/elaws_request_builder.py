"""
Request URI construction for the e-Gov Law API.

Builds the endpoint path for each operation:
- lawlists/{法令種別}
- lawdata/{法令番号 | 法令ID}
- articles;{lawNum | lawId};{article | paragraph | article;paragraph | appdxTable}
- updatelawlists/{YYYYMMDD}
"""
from datetime import date, datetime
from typing import Callable, Optional, Union

from elaws.domain.elaws_value_objects import (
    JST,
    LawType,
    LawNum,
    LawId,
    LawIdentifier,
    ArticlesQuery,
    ARTICLES_QUERY_TYPES,
)
from elaws.infrastructure.adapters.elaws_errors import (
    ElawsInvalidParameterError,
    ElawsDateTooEarlyError,
    ElawsFutureDateError,
)


# First update date served by the updatelawlists API.
MIN_UPDATE_DATE = datetime(2020, 11, 24, tzinfo=JST)

DateLike = Union[date, datetime]


def to_jst(value: DateLike) -> datetime:
    """
    Normalise a date or datetime to an aware datetime in JST.

    A plain date is midnight JST; a naive datetime is read as JST;
    an aware datetime is converted.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=JST)
        return value.astimezone(JST)
    return datetime(value.year, value.month, value.day, tzinfo=JST)


def encode_date(value: DateLike) -> str:
    """Return the JST calendar date of value as YYYYMMDD."""
    return to_jst(value).strftime("%Y%m%d")


class ElawsRequestBuilder:
    """Builds request URLs below an API root such as https://elaws.e-gov.go.jp/api/1."""

    def __init__(self, api_root: str, clock: Optional[Callable[[], datetime]] = None):
        self.api_root = api_root.rstrip("/")
        self._clock = clock or (lambda: datetime.now(JST))

    def lawlists(self, law_type: LawType = LawType.ALL) -> str:
        """
        Build the Law List URL.

        Only LawType.ALL is accepted, although the API also serves the
        other law types.

        Raises:
            ElawsInvalidParameterError: For any other law type
        """
        if law_type != LawType.ALL:
            raise ElawsInvalidParameterError(
                f"Unsupported law type {law_type!r}: only LawType.ALL is available"
            )
        return f"{self.api_root}/lawlists/{int(law_type)}"

    def lawdata(self, law_num_or_id: Union[str, LawIdentifier]) -> str:
        """Build the Law Data URL for a law number or a law ID."""
        if isinstance(law_num_or_id, (LawNum, LawId)):
            value = law_num_or_id.value
        else:
            value = law_num_or_id
        if not value:
            raise ElawsInvalidParameterError("A law number or law ID is required")
        return f"{self.api_root}/lawdata/{value}"

    def articles(self, law: LawIdentifier, query: ArticlesQuery) -> str:
        """
        Build the Articles URL.

        Parameters become key=value segments joined by ';', the law
        identifier first and the query fields in their declared order.
        """
        if not isinstance(law, (LawNum, LawId)):
            raise ElawsInvalidParameterError(f"Expected LawNum or LawId, got {type(law).__name__}")
        if not isinstance(query, ARTICLES_QUERY_TYPES):
            raise ElawsInvalidParameterError(f"Unsupported articles query: {type(query).__name__}")
        params = (law.to_param(),) + query.to_params()
        segments = ";".join(f"{key}={value}" for key, value in params)
        return f"{self.api_root}/articles;{segments}"

    def updatelawlists(self, value: DateLike, now: Optional[datetime] = None) -> str:
        """
        Build the Update Law List URL.

        now defaults to the builder's clock. A naive now is read as JST.

        Raises:
            ElawsDateTooEarlyError: If value is before 2020-11-24 JST
            ElawsFutureDateError: If value is after the current time
        """
        when = to_jst(value)
        if when < MIN_UPDATE_DATE:
            raise ElawsDateTooEarlyError(when)
        if when > to_jst(now or self._clock()):
            raise ElawsFutureDateError(when)
        return f"{self.api_root}/updatelawlists/{encode_date(when)}"
