"""
Tests for e-Gov Law API Request Builder
"""
import pytest
from datetime import date, datetime, timedelta, timezone

ROOT = "https://elaws.e-gov.go.jp/api/1"


def _builder(now=None):
    from elaws.infrastructure.elaws_request_builder import ElawsRequestBuilder
    from elaws.domain.elaws_value_objects import JST
    fixed_now = now or datetime(2024, 6, 1, 12, 0, tzinfo=JST)
    return ElawsRequestBuilder(ROOT, clock=lambda: fixed_now)


class TestLawlists:
    """Tests for lawlists URLs."""

    def test_all_laws(self):
        """LawType.ALL maps to /lawlists/1."""
        from elaws.domain.elaws_value_objects import LawType
        assert _builder().lawlists(LawType.ALL) == f"{ROOT}/lawlists/1"

    def test_default_is_all(self):
        """Default law type is ALL."""
        assert _builder().lawlists() == f"{ROOT}/lawlists/1"

    def test_other_law_types_rejected(self):
        """Other law types are not exposed."""
        from elaws.domain.elaws_value_objects import LawType
        from elaws.infrastructure.adapters.elaws_errors import ElawsInvalidParameterError
        with pytest.raises(ElawsInvalidParameterError):
            _builder().lawlists(LawType.CONSTITUTION_AND_ACTS)

    def test_trailing_slash_on_root(self):
        """A trailing slash on the root is dropped."""
        from elaws.infrastructure.elaws_request_builder import ElawsRequestBuilder
        assert ElawsRequestBuilder(ROOT + "/").lawlists() == f"{ROOT}/lawlists/1"


class TestLawdata:
    """Tests for lawdata URLs."""

    def test_law_id_string(self):
        """A law ID string is the path segment."""
        assert _builder().lawdata("322AC0000000067") == f"{ROOT}/lawdata/322AC0000000067"

    def test_law_num_string(self):
        """A law number string has the same shape."""
        url = _builder().lawdata("昭和二十二年法律第六十七号")
        assert url == f"{ROOT}/lawdata/昭和二十二年法律第六十七号"

    def test_identifier_objects(self):
        """LawNum and LawId are unwrapped."""
        from elaws.domain.elaws_value_objects import LawNum, LawId
        assert _builder().lawdata(LawId("322AC0000000067")).endswith("/lawdata/322AC0000000067")
        assert _builder().lawdata(LawNum("番号")).endswith("/lawdata/番号")

    def test_empty_rejected(self):
        """Empty identifier is rejected."""
        from elaws.infrastructure.adapters.elaws_errors import ElawsInvalidParameterError
        with pytest.raises(ElawsInvalidParameterError):
            _builder().lawdata("")


class TestArticles:
    """Tests for articles URLs."""

    def test_article_only(self):
        """article=3 segment."""
        from elaws.domain.elaws_value_objects import LawId, ArticleQuery
        url = _builder().articles(LawId("322AC0000000067"), ArticleQuery("3"))
        assert url == f"{ROOT}/articles;lawId=322AC0000000067;article=3"

    def test_article_and_paragraph(self):
        """article=3;paragraph=2 keeps declared order."""
        from elaws.domain.elaws_value_objects import LawNum, ArticleParagraphQuery
        url = _builder().articles(LawNum("昭和二十二年法律第六十七号"), ArticleParagraphQuery("3", "2"))
        assert url == f"{ROOT}/articles;lawNum=昭和二十二年法律第六十七号;article=3;paragraph=2"
        assert url.endswith("article=3;paragraph=2")

    def test_paragraph_only(self):
        """paragraph=2 segment."""
        from elaws.domain.elaws_value_objects import LawId, ParagraphQuery
        url = _builder().articles(LawId("X"), ParagraphQuery("2"))
        assert url == f"{ROOT}/articles;lawId=X;paragraph=2"

    def test_appdx_table(self):
        """appdxTable segment."""
        from elaws.domain.elaws_value_objects import LawId, AppdxTableQuery
        url = _builder().articles(LawId("X"), AppdxTableQuery("別表第一"))
        assert url == f"{ROOT}/articles;lawId=X;appdxTable=別表第一"

    def test_invalid_query_rejected(self):
        """Objects outside the four shapes are rejected."""
        from elaws.domain.elaws_value_objects import LawId
        from elaws.infrastructure.adapters.elaws_errors import ElawsInvalidParameterError
        with pytest.raises(ElawsInvalidParameterError):
            _builder().articles(LawId("X"), {"article": "3", "appdxTable": "別表"})

    def test_invalid_identifier_rejected(self):
        """A bare string is not a law identifier here."""
        from elaws.domain.elaws_value_objects import ArticleQuery
        from elaws.infrastructure.adapters.elaws_errors import ElawsInvalidParameterError
        with pytest.raises(ElawsInvalidParameterError):
            _builder().articles("322AC0000000067", ArticleQuery("3"))


class TestEncodeDate:
    """Tests for encode_date and to_jst."""

    def test_plain_date(self):
        """A date encodes as YYYYMMDD."""
        from elaws.infrastructure.elaws_request_builder import encode_date
        assert encode_date(date(2020, 11, 24)) == "20201124"

    def test_aware_datetime_converted_to_jst(self):
        """2020-11-24 15:00 UTC is 2020-11-25 in JST."""
        from elaws.infrastructure.elaws_request_builder import encode_date
        assert encode_date(datetime(2020, 11, 24, 15, 0, tzinfo=timezone.utc)) == "20201125"

    def test_naive_datetime_read_as_jst(self):
        """Naive datetimes are interpreted in JST."""
        from elaws.infrastructure.elaws_request_builder import to_jst
        value = to_jst(datetime(2021, 1, 2, 23, 30))
        assert value.utcoffset() == timedelta(hours=9)
        assert value.day == 2


class TestUpdatelawlists:
    """Tests for updatelawlists URLs and range checks."""

    def test_valid_date(self):
        """A date inside the range yields the YYYYMMDD segment."""
        assert _builder().updatelawlists(date(2024, 4, 1)) == f"{ROOT}/updatelawlists/20240401"

    def test_first_day_inclusive(self):
        """2020-11-24 JST midnight is accepted."""
        from elaws.domain.elaws_value_objects import JST
        url = _builder().updatelawlists(datetime(2020, 11, 24, tzinfo=JST))
        assert url.endswith("/updatelawlists/20201124")

    def test_too_early(self):
        """2020-11-23 is rejected as too early."""
        from elaws.infrastructure.adapters.elaws_errors import ElawsDateTooEarlyError
        with pytest.raises(ElawsDateTooEarlyError):
            _builder().updatelawlists(date(2020, 11, 23))

    def test_too_early_by_one_second(self):
        """One second before the first instant is rejected."""
        from elaws.domain.elaws_value_objects import JST
        from elaws.infrastructure.adapters.elaws_errors import ElawsDateTooEarlyError
        with pytest.raises(ElawsDateTooEarlyError):
            _builder().updatelawlists(datetime(2020, 11, 23, 23, 59, 59, tzinfo=JST))

    def test_now_is_accepted(self):
        """The current instant itself is accepted."""
        from elaws.domain.elaws_value_objects import JST
        now = datetime(2024, 6, 1, 12, 0, tzinfo=JST)
        assert _builder(now).updatelawlists(now).endswith("/updatelawlists/20240601")

    def test_future(self):
        """A date after now is rejected as future."""
        from elaws.domain.elaws_value_objects import JST
        from elaws.infrastructure.adapters.elaws_errors import ElawsFutureDateError
        now = datetime(2024, 6, 1, 12, 0, tzinfo=JST)
        with pytest.raises(ElawsFutureDateError):
            _builder(now).updatelawlists(now + timedelta(seconds=1))

    def test_tomorrow_plain_date(self):
        """Tomorrow's date is in the future."""
        from elaws.infrastructure.adapters.elaws_errors import ElawsFutureDateError
        with pytest.raises(ElawsFutureDateError):
            _builder().updatelawlists(date(2024, 6, 2))

    def test_default_clock(self):
        """Without a clock, the real current time is used."""
        from elaws.infrastructure.elaws_request_builder import ElawsRequestBuilder
        from elaws.infrastructure.adapters.elaws_errors import ElawsFutureDateError
        builder = ElawsRequestBuilder(ROOT)
        with pytest.raises(ElawsFutureDateError):
            builder.updatelawlists(datetime.now(timezone.utc) + timedelta(days=2))

    def test_explicit_now_overrides_clock(self):
        """An explicit now takes precedence over the clock."""
        from elaws.domain.elaws_value_objects import JST
        from elaws.infrastructure.adapters.elaws_errors import ElawsFutureDateError
        with pytest.raises(ElawsFutureDateError):
            _builder().updatelawlists(date(2024, 4, 1), now=datetime(2024, 3, 31, tzinfo=JST))

    def test_naive_clock_read_as_jst(self):
        """A clock returning naive datetimes is compared in JST."""
        from elaws.domain.elaws_value_objects import JST
        from elaws.infrastructure.elaws_request_builder import ElawsRequestBuilder
        from elaws.infrastructure.adapters.elaws_errors import ElawsFutureDateError
        builder = ElawsRequestBuilder(ROOT, clock=lambda: datetime(2024, 6, 1, 12, 0))
        assert builder.updatelawlists(date(2024, 4, 1)) == f"{ROOT}/updatelawlists/20240401"
        with pytest.raises(ElawsFutureDateError):
            builder.updatelawlists(datetime(2024, 6, 1, 12, 1, tzinfo=JST))
