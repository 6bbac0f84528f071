import pytest

from app.dbops.models import GrantPrivilege
from app.grants.overlaps import explain_overlap, find_overlaps, overlaps


def _grant(access_type="SELECT", database=None, table=None, column=None,
           user="alice", role=None, grant_option=False):
    return GrantPrivilege(
        access_type=access_type,
        database_name=database,
        table_name=table,
        column_name=column,
        grantee_user_name=user if role is None else None,
        grantee_role_name=role,
        grant_option=grant_option,
    )


@pytest.mark.parametrize(
    "candidate, existing, expected",
    [
        ("tes*", "test*", False),
        ("test*", "tes*", True),
        ("test*", "test", False),
        ("test", "test*", False),
        ("test", None, True),
        (None, "test", False),
        ("test", "test", True),
        ("other", "test", False),
    ],
)
def test_database_scope(candidate, existing, expected):
    assert overlaps(_grant(database=candidate), _grant(database=existing)) is expected


def test_table_scope_follows_database_rule():
    assert overlaps(_grant(database="db", table="events"), _grant(database="db"))
    assert not overlaps(_grant(database="db"), _grant(database="db", table="events"))
    assert overlaps(_grant(database="db", table="events_2024*"), _grant(database="db", table="events_*"))


def test_column_scope():
    assert overlaps(_grant(database="db", table="t", column="c"), _grant(database="db", table="t"))
    assert not overlaps(_grant(database="db", table="t"), _grant(database="db", table="t", column="c"))
    assert not overlaps(
        _grant(database="db", table="t", column="a"), _grant(database="db", table="t", column="b"),
    )


def test_grantee_must_match_exactly():
    assert not overlaps(_grant(user="alice"), _grant(user="bob"))
    assert not overlaps(_grant(role="alice"), _grant(user="alice"))
    assert overlaps(_grant(role="readers"), _grant(role="readers"))


def test_group_membership_only_widens():
    assert overlaps(_grant("ALTER UPDATE", "db"), _grant("ALTER TABLE", "db"))
    assert not overlaps(_grant("ALTER TABLE", "db"), _grant("ALTER UPDATE", "db"))
    assert overlaps(_grant("SELECT"), _grant("ALL"))
    assert not overlaps(_grant("SELECT"), _grant("INSERT"))


def test_find_overlaps_keeps_order():
    existing = [
        _grant("INSERT"),
        _grant("SELECT", database="db"),
        _grant("SELECT"),
    ]
    assert find_overlaps(_grant("SELECT", database="db", table="t"), existing) == existing[1:]


def test_explain_same_privilege():
    assert explain_overlap(_grant(database="db", table="t"), _grant(database="db", table="t")) == (
        '- Privilege "SELECT" is already granted on table "t" in the "db" database to user "alice"'
    )


def test_explain_broader_privilege_for_role():
    candidate = _grant("ALTER DELETE", "db", "t", role="writers", grant_option=True)
    existing = _grant("ALTER TABLE", "db", role="writers")
    assert explain_overlap(candidate, existing) == (
        '- Broader privilege "ALTER TABLE" (which includes "ALTER DELETE") is already granted '
        'on all tables in the "db" database to role "writers" without grant option'
    )


def test_explain_quotes_names():
    text = explain_overlap(_grant(database='we"ird'), _grant(database='we"ird'))
    assert 'in the "we\\"ird" database' in text
