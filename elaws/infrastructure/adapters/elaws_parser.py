"""
Parser for e-Gov Law API responses.

Checks well-formedness, locates the Result envelope and the ApplData
payload under DataRoot, and decodes each payload into a domain entity.

Required scalar fields are read from direct children and must exist.
Optional and repeated fields are probed; repeated fields keep document order.
"""
import re
from datetime import datetime
from typing import Optional, Tuple, Union

from bs4 import BeautifulSoup
from bs4.element import Tag
from lxml import etree

from elaws.domain.elaws_value_objects import (
    JST,
    ResultCode,
    LawType,
    EnforcementFlg,
    AuthFlg,
    decode_lenient,
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
    ElawsXMLParseError,
    ElawsDecodeError,
)


_YYYYMMDD = re.compile(r"[0-9]{8}")


def parse_xml(content: Union[str, bytes]) -> BeautifulSoup:
    """
    Parse a response body as XML.

    Args:
        content: Raw response body

    Returns:
        Parsed document

    Raises:
        ElawsXMLParseError: If the body is not well-formed XML. The lxml
            syntax error is attached as parser_error.
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    parser = etree.XMLParser(resolve_entities=False, huge_tree=True)
    try:
        etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise ElawsXMLParseError(f"Malformed XML response: {e}", parser_error=e, xml_sample=data) from e
    return BeautifulSoup(data, "xml")


def parse_response(document: BeautifulSoup) -> Tuple[Result, Optional[Tag]]:
    """
    Split a response document into its envelope and payload.

    Args:
        document: Output of parse_xml

    Returns:
        Tuple of (Result, ApplData element or None)

    Raises:
        ElawsDecodeError: If DataRoot or its Result envelope is missing
    """
    root = document.find("DataRoot")
    if root is None:
        raise ElawsDecodeError("Missing <DataRoot> in response", tag="DataRoot")
    envelope = _require_child(root, "Result")
    data = root.find("ApplData", recursive=False)
    return parse_result(envelope), data


def parse_result(element: Tag) -> Result:
    """Decode the Result envelope (Code, Message)."""
    return Result(
        code=decode_lenient(ResultCode, _require_int(element, "Code")),
        message=_require_text(element, "Message"),
    )


def parse_yyyymmdd(text: str) -> datetime:
    """
    Decode an 8-digit YYYYMMDD string to midnight JST.

    Raises:
        ElawsDecodeError: If text is not a valid 8-digit date
    """
    value = text.strip()
    if not _YYYYMMDD.fullmatch(value):
        raise ElawsDecodeError(f"Invalid date, expected YYYYMMDD: {text!r}")
    try:
        return datetime(int(value[0:4]), int(value[4:6]), int(value[6:8]), tzinfo=JST)
    except ValueError as e:
        raise ElawsDecodeError(f"Invalid date: {text!r}") from e


def parse_lawlists(element: Tag) -> Lawlists:
    """Decode a Law List ApplData element."""
    _require_element(element, "ApplData")
    infos = element.find_all("LawNameListInfo", recursive=False)
    return Lawlists(
        category=decode_lenient(LawType, _require_int(element, "Category")),
        law_name_list_info=tuple(parse_law_name_list_info(info) for info in infos),
    )


def parse_law_name_list_info(info: Tag) -> LawNameListInfo:
    """Decode one LawNameListInfo entry of a Law List."""
    return LawNameListInfo(
        law_id=_require_text(info, "LawId"),
        law_name=_require_text(info, "LawName"),
        law_no=_require_text(info, "LawNo"),
        promulgation_date=parse_yyyymmdd(_require_text(info, "PromulgationDate")),
    )


def parse_lawdata(element: Tag) -> Lawdata:
    """Decode a Law Data ApplData element."""
    _require_element(element, "ApplData")
    return Lawdata(
        law_id=_require_text(element, "LawId"),
        law_num=_require_text(element, "LawNum"),
        law_full_text=_require_text(element, "LawFullText"),
        # Only emitted when the full text contains images.
        image_data=_optional_text(element, "ImageData"),
    )


def parse_articles(element: Tag) -> Articles:
    """Decode an Articles ApplData element."""
    _require_element(element, "ApplData")

    titles = None
    title_lists = element.find("AppdxTableTitleLists", recursive=False)
    if title_lists is not None:
        titles = tuple(
            title.get_text()
            for title in title_lists.find_all("AppdxTableTitle", recursive=False)
        )

    return Articles(
        law_id=_require_text(element, "LawId"),
        law_num=_require_text(element, "LawNum"),
        article=_require_text(element, "Article"),
        paragraph=_require_text(element, "Paragraph"),
        appdx_table=_require_text(element, "AppdxTable"),
        law_contents=_require_text(element, "LawContents"),
        appdx_table_title_lists=titles,
        image_data=_optional_text(element, "ImageData"),
    )


def parse_updatelawlists(element: Tag) -> Updatelawlists:
    """Decode an Update Law List ApplData element."""
    _require_element(element, "ApplData")
    infos = element.find_all("LawNameListInfo", recursive=False)
    return Updatelawlists(
        date=parse_yyyymmdd(_require_text(element, "Date")),
        law_name_list_info=tuple(parse_law_name_list_info2(info) for info in infos) or None,
    )


def parse_law_name_list_info2(info: Tag) -> LawNameListInfo2:
    """Decode one LawNameListInfo entry of an Update Law List."""
    return LawNameListInfo2(
        law_type_name=decode_lenient(LawType, _require_int(info, "LawTypeName")),
        law_no=_require_text(info, "LawNo"),
        law_name=_require_text(info, "LawName"),
        law_name_kana=_require_text(info, "LawNameKana"),
        old_law_name=_require_text(info, "OldLawName"),
        promulgation_date=parse_yyyymmdd(_require_text(info, "PromulgationDate")),
        amend_name=_require_text(info, "AmendName"),
        amend_no=_require_text(info, "AmendNo"),
        amend_promulgation_date=_require_text(info, "AmendPromulgationDate"),
        enforcement_date=_require_text(info, "EnforcementDate"),
        enforcement_comment=_require_text(info, "EnforcementComment"),
        law_id=_require_text(info, "LawId"),
        law_url=_require_text(info, "LawUrl"),
        enforcement_flg=decode_lenient(EnforcementFlg, _require_int(info, "EnforcementFlg")),
        auth_flg=decode_lenient(AuthFlg, _require_int(info, "AuthFlg")),
    )


def _require_element(element: Optional[Tag], name: str) -> None:
    if element is None:
        raise ElawsDecodeError(f"Missing <{name}> in response", tag=name)


def _require_child(element: Tag, tag: str) -> Tag:
    child = element.find(tag, recursive=False)
    if child is None:
        raise ElawsDecodeError(f"Missing <{tag}> in <{element.name}>", tag=tag, parent=element.name)
    return child


def _require_text(element: Tag, tag: str) -> str:
    return _require_child(element, tag).get_text()


def _optional_text(element: Tag, tag: str) -> Optional[str]:
    child = element.find(tag, recursive=False)
    return child.get_text() if child is not None else None


def _require_int(element: Tag, tag: str) -> int:
    text = _require_text(element, tag)
    try:
        return int(text.strip())
    except ValueError as e:
        raise ElawsDecodeError(
            f"<{tag}> in <{element.name}> is not an integer: {text!r}",
            tag=tag,
            parent=element.name,
        ) from e
