from app.querybuilder.field import Field
from app.querybuilder.where import AndWhere, IsNull, WhereDiffers, WhereEquals


def test_where_equals_quotes_strings():
    assert WhereEquals("name", "te'st").clause() == "`name` = 'te\\'st'"


def test_where_equals_renders_numbers_bare():
    assert WhereEquals("precedence", 3).clause() == "`precedence` = 3"


def test_where_differs():
    assert WhereDiffers("type", "users_xml").clause() == "`type` <> 'users_xml'"


def test_is_null():
    assert IsNull("database").clause() == "`database` IS NULL"


def test_and_where_shapes():
    a = WhereEquals("a", "1")
    b = WhereEquals("b", 2)
    assert AndWhere().clause() == "()"
    assert AndWhere(a).clause() == "(`a` = '1')"
    assert AndWhere(a, b).clause() == "(`a` = '1' AND `b` = 2)"
    assert AndWhere(AndWhere(a, b), IsNull("c")).clause() == "((`a` = '1' AND `b` = 2) AND `c` IS NULL)"


def test_field():
    assert Field("name").sql() == "`name`"
    assert Field("access_type").to_string().sql() == "toString(`access_type`) AS `access_type`"


def test_where_renders_null_and_bools_as_sql_literals():
    assert WhereEquals("grant_option", True).clause() == "`grant_option` = true"
    assert WhereEquals("grant_option", False).clause() == "`grant_option` = false"
    assert WhereDiffers("column", None).clause() == "`column` <> NULL"
