"""
e-Gov Law API client.

Typed async client for the Japanese e-Gov Law API (Version 1):
law lists, full law texts, article contents and updated law lists.
"""
from elaws.domain.elaws_value_objects import (
    ResultCode,
    LawType,
    EnforcementFlg,
    AuthFlg,
    LawNum,
    LawId,
    ArticleQuery,
    ParagraphQuery,
    ArticleParagraphQuery,
    AppdxTableQuery,
)
from elaws.domain.elaws_entities import (
    Result,
    Lawlists,
    LawNameListInfo,
    Lawdata,
    Articles,
    Updatelawlists,
    LawNameListInfo2,
)
from elaws.infrastructure.adapters.elaws_errors import (
    ElawsError,
    ElawsInvalidParameterError,
    ElawsDateRangeError,
    ElawsDateTooEarlyError,
    ElawsFutureDateError,
    ElawsTransportError,
    ElawsXMLParseError,
    ElawsApiError,
    ElawsDecodeError,
)
from elaws.infrastructure.cli.elaws_config import ElawsConfig
from elaws.infrastructure.elaws_client import ElawsClient

__version__ = "0.1.0"

__all__ = [
    "ResultCode",
    "LawType",
    "EnforcementFlg",
    "AuthFlg",
    "LawNum",
    "LawId",
    "ArticleQuery",
    "ParagraphQuery",
    "ArticleParagraphQuery",
    "AppdxTableQuery",
    "Result",
    "Lawlists",
    "LawNameListInfo",
    "Lawdata",
    "Articles",
    "Updatelawlists",
    "LawNameListInfo2",
    "ElawsError",
    "ElawsInvalidParameterError",
    "ElawsDateRangeError",
    "ElawsDateTooEarlyError",
    "ElawsFutureDateError",
    "ElawsTransportError",
    "ElawsXMLParseError",
    "ElawsApiError",
    "ElawsDecodeError",
    "ElawsConfig",
    "ElawsClient",
]
