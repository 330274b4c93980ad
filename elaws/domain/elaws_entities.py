"""
e-Gov Law API Domain Entities

Records decoded from the ApplData element of each API response.
All entities are immutable (frozen dataclasses); sequences are tuples
kept in document order.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Optional, Tuple, Dict, Any, Union

from elaws.domain.elaws_value_objects import (
    ResultCode,
    LawType,
    EnforcementFlg,
    AuthFlg,
)


def _enum_value(value: Union[IntEnum, int]) -> int:
    return int(value)


@dataclass(frozen=True)
class Result:
    """
    Processing result (処理結果) envelope.

    Present in every response, independent of the payload.
    """
    code: Union[ResultCode, int]
    message: str

    @property
    def is_normal(self) -> bool:
        return self.code == ResultCode.NORMAL

    def to_dict(self) -> Dict[str, Any]:
        return {"code": _enum_value(self.code), "message": self.message}


@dataclass(frozen=True)
class LawNameListInfo:
    """
    Entry of the law name list matching the requested law type.
    """
    law_id: str
    law_name: str
    law_no: str
    promulgation_date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "law_id": self.law_id,
            "law_name": self.law_name,
            "law_no": self.law_no,
            "promulgation_date": self.promulgation_date.isoformat(),
        }


@dataclass(frozen=True)
class Lawlists:
    """Law name list (法令名一覧)."""
    category: Union[LawType, int]
    law_name_list_info: Tuple[LawNameListInfo, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": _enum_value(self.category),
            "law_name_list_info": [info.to_dict() for info in self.law_name_list_info],
        }


@dataclass(frozen=True)
class Lawdata:
    """
    Full text of one law (法令取得).

    image_data is the pict folder, zipped and base64 encoded. The API only
    emits it when the full text contains images.
    """
    law_id: str
    law_num: str
    law_full_text: str
    image_data: Optional[str] = None

    @property
    def has_images(self) -> bool:
        return self.image_data is not None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "law_id": self.law_id,
            "law_num": self.law_num,
            "law_full_text": self.law_full_text,
        }
        if self.image_data is not None:
            result["image_data"] = self.image_data
        return result


@dataclass(frozen=True)
class Articles:
    """
    Contents of the requested article, paragraph or appendix table (条文内容).

    appdx_table_title_lists holds the candidate appendix table titles, in
    the order the API lists them, when the request matched several.
    """
    law_id: str
    law_num: str
    article: str
    paragraph: str
    appdx_table: str
    law_contents: str
    appdx_table_title_lists: Optional[Tuple[str, ...]] = None
    image_data: Optional[str] = None

    @property
    def has_candidates(self) -> bool:
        return self.appdx_table_title_lists is not None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "law_id": self.law_id,
            "law_num": self.law_num,
            "article": self.article,
            "paragraph": self.paragraph,
            "appdx_table": self.appdx_table,
            "law_contents": self.law_contents,
        }
        if self.appdx_table_title_lists is not None:
            result["appdx_table_title_lists"] = list(self.appdx_table_title_lists)
        if self.image_data is not None:
            result["image_data"] = self.image_data
        return result


@dataclass(frozen=True)
class LawNameListInfo2:
    """
    Entry of the updated law list matching the requested update date.
    """
    law_type_name: Union[LawType, int]
    law_no: str
    law_name: str
    law_name_kana: str
    old_law_name: str
    promulgation_date: datetime
    amend_name: str
    amend_no: str
    amend_promulgation_date: str
    enforcement_date: str
    enforcement_comment: str
    law_id: str
    law_url: str
    enforcement_flg: Union[EnforcementFlg, int]
    auth_flg: Union[AuthFlg, int]

    @property
    def is_in_force(self) -> bool:
        return self.enforcement_flg == EnforcementFlg.IN_FORCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "law_type_name": _enum_value(self.law_type_name),
            "law_no": self.law_no,
            "law_name": self.law_name,
            "law_name_kana": self.law_name_kana,
            "old_law_name": self.old_law_name,
            "promulgation_date": self.promulgation_date.isoformat(),
            "amend_name": self.amend_name,
            "amend_no": self.amend_no,
            "amend_promulgation_date": self.amend_promulgation_date,
            "enforcement_date": self.enforcement_date,
            "enforcement_comment": self.enforcement_comment,
            "law_id": self.law_id,
            "law_url": self.law_url,
            "enforcement_flg": _enum_value(self.enforcement_flg),
            "auth_flg": _enum_value(self.auth_flg),
        }


@dataclass(frozen=True)
class Updatelawlists:
    """Updated law list (更新法令一覧) for one update date."""
    date: datetime
    law_name_list_info: Optional[Tuple[LawNameListInfo2, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"date": self.date.isoformat()}
        if self.law_name_list_info is not None:
            result["law_name_list_info"] = [info.to_dict() for info in self.law_name_list_info]
        return result
