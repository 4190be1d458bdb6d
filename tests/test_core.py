from __future__ import annotations

from postgrest.exceptions import APIError

from fragfeed.core.db_errors import is_unique_violation
from fragfeed.core.pagination import paginate
from fragfeed.core.search import ilike_pattern
from fragfeed.modules.counters.service import CounterService


def test_ilike_pattern_escapes_wildcards() -> None:
    assert ilike_pattern("gg") == "%gg%"
    assert ilike_pattern("100%_\\") == "%100\\%\\_\\\\%"
    assert ilike_pattern("a*b") == "%a_b%"


def test_unique_violation_detection() -> None:
    assert is_unique_violation(APIError({"message": "dup", "code": "23505"}))
    assert not is_unique_violation(APIError({"message": "fk", "code": "23503"}))
    assert not is_unique_violation(ValueError("23505"))


def test_paginate(fake_db) -> None:
    fake_db.insert_rows("posts", [{"subject": str(i)} for i in range(3)])
    query = fake_db.table("posts").select("*").order("created_at")

    rows, is_done, next_offset = paginate(query, 2, 0)
    assert [r["subject"] for r in rows] == ["0", "1"]
    assert (is_done, next_offset) == (False, 2)

    rows, is_done, next_offset = paginate(fake_db.table("posts").select("*").order("created_at"), 2, 2)
    assert [r["subject"] for r in rows] == ["2"]
    assert (is_done, next_offset) == (True, None)


def test_counters_never_go_negative(fake_db) -> None:
    counters = CounterService(fake_db)
    assert counters.count("upvote:p") == 0
    assert counters.inc("upvote:p") == 1
    assert counters.inc("upvote:p") == 2
    assert counters.dec("upvote:p") == 1
    assert counters.dec("downvote:p") == 0
    assert counters.count_many(["upvote:p", "downvote:p", "comment_count:p"]) == {
        "upvote:p": 1,
        "downvote:p": 0,
        "comment_count:p": 0,
    }
