"""
e-Gov Law API Value Objects

Enumerations and value objects for the e-Gov Law API (Version 1).
All value objects are immutable (frozen dataclasses) with no identity
beyond their values.

Integer codes sent by the API may grow server-side, so enumerations are
decoded leniently: a known value becomes the enum member, an unknown one
is kept as the raw integer.
"""
from dataclasses import dataclass
from datetime import timedelta, timezone
from enum import IntEnum
from typing import Tuple, Type, TypeVar, Union


JST = timezone(timedelta(hours=9), "JST")


class ResultCode(IntEnum):
    """
    Processing result code (処理結果コード).

    Set in the Code item of every response envelope.
    """
    NORMAL = 0
    # Also used when nothing matched, or when a law number matches several laws.
    ERROR = 1
    # Articles API only: several appendix tables matched the requested title.
    MULTIPLE_CANDIDATES = 2


class LawType(IntEnum):
    """
    Law type (法令種別) used as the Law List parameter.
    """
    ALL = 1
    CONSTITUTION_AND_ACTS = 2
    CABINET_AND_IMPERIAL_ORDERS = 3
    MINISTERIAL_ORDINANCES_AND_RULES = 4


class EnforcementFlg(IntEnum):
    """Enforcement status of an updated law (未施行)."""
    IN_FORCE = 0
    NOT_YET_IN_FORCE = 1


class AuthFlg(IntEnum):
    """Whether the responsible division has confirmed the data (所管課確認中)."""
    CONFIRMED = 0
    PENDING = 1


E = TypeVar("E", bound=IntEnum)


def decode_lenient(enum_cls: Type[E], value: int) -> Union[E, int]:
    """
    Map an integer onto enum_cls, keeping unknown values as plain ints.

    Args:
        enum_cls: IntEnum subclass describing the known vocabulary
        value: Integer read from the wire

    Returns:
        The matching member, or value itself when it is not a member
    """
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class LawNum:
    """
    Law number (法令番号), e.g. 昭和二十二年法律第六十七号.

    Laws sharing a duplicated number cannot be fetched by LawNum
    through the Articles API; use LawId for those.
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("LawNum cannot be empty")

    def to_param(self) -> Tuple[str, str]:
        return ("lawNum", self.value)


@dataclass(frozen=True)
class LawId:
    """Law ID (法令ID), e.g. 322AC0000000067."""
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("LawId cannot be empty")

    def to_param(self) -> Tuple[str, str]:
        return ("lawId", self.value)


LawIdentifier = Union[LawNum, LawId]


@dataclass(frozen=True)
class ArticleQuery:
    """Fetch one article (条)."""
    article: str

    def __post_init__(self):
        if not self.article:
            raise ValueError("article cannot be empty")

    def to_params(self) -> Tuple[Tuple[str, str], ...]:
        return (("article", self.article),)


@dataclass(frozen=True)
class ParagraphQuery:
    """Fetch one paragraph (項) of a law without articles."""
    paragraph: str

    def __post_init__(self):
        if not self.paragraph:
            raise ValueError("paragraph cannot be empty")

    def to_params(self) -> Tuple[Tuple[str, str], ...]:
        return (("paragraph", self.paragraph),)


@dataclass(frozen=True)
class ArticleParagraphQuery:
    """Fetch a paragraph under an article (条配下の項)."""
    article: str
    paragraph: str

    def __post_init__(self):
        if not self.article or not self.paragraph:
            raise ValueError("article and paragraph cannot be empty")

    def to_params(self) -> Tuple[Tuple[str, str], ...]:
        return (("article", self.article), ("paragraph", self.paragraph))


@dataclass(frozen=True)
class AppdxTableQuery:
    """
    Fetch an appendix table (別表).

    The title is matched by prefix. A title that is too long can make the
    server answer with a "Request Rejected" HTML page; shorten it and retry.
    """
    appdx_table: str

    def __post_init__(self):
        if not self.appdx_table:
            raise ValueError("appdx_table cannot be empty")

    def to_params(self) -> Tuple[Tuple[str, str], ...]:
        return (("appdxTable", self.appdx_table),)


ArticlesQuery = Union[ArticleQuery, ParagraphQuery, ArticleParagraphQuery, AppdxTableQuery]

ARTICLES_QUERY_TYPES = (ArticleQuery, ParagraphQuery, ArticleParagraphQuery, AppdxTableQuery)
