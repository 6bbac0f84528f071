import pytest

from app.grants.reference import GrantValidationError, load_reference, parse_reference, validate_grant

SAMPLE = "\n".join([
    "SELECT\t[]\tCOLUMN\tALL",
    "ALTER UPDATE\t['UPDATE']\tCOLUMN\tALTER TABLE",
    "ALTER TABLE\t[]\t\\N\tALTER",
    "ALTER\t[]\t\\N\tALL",
    "KILL QUERY\t[]\tGLOBAL\tALL",
    "ALL\t['ALL PRIVILEGES']\t\\N\t\\N",
    "",
])


@pytest.fixture
def sample():
    return parse_reference(SAMPLE)


def test_parse_reference(sample):
    assert sample.aliases == {"UPDATE": "ALTER UPDATE", "ALL PRIVILEGES": "ALL"}
    assert sample.members("ALL") == ("SELECT", "ALTER", "KILL QUERY")
    assert sample.members("ALTER TABLE") == ("ALTER UPDATE",)
    assert sample.members("SELECT") == ()
    assert sample.scopes["KILL QUERY"] == "GLOBAL"
    assert "ALTER TABLE" not in sample.scopes
    assert sample.canonical("UPDATE") == "ALTER UPDATE"
    assert sample.canonical("SELECT") == "SELECT"


def test_reference_is_read_only(sample):
    with pytest.raises(TypeError):
        sample.aliases["X"] = "Y"


def test_bundled_reference_loads_once():
    ref = load_reference()
    assert ref is load_reference()
    assert ref.is_known("SELECT")
    assert ref.canonical("ALL PRIVILEGES") == "ALL"
    assert "SELECT" in ref.members("ALL")


@pytest.mark.parametrize(
    "args",
    [
        ("ALTER TABLE", None, None, None),
        ("SELECT", "db", None, None),
        ("SELECT", "db", "t", "c"),
        ("KILL QUERY", None, None, None),
        ("ALTER TABLE", "db", "t", None),
        ("SHOW FLUX CAPACITORS", "db", None, None),
    ],
)
def test_valid_grants(sample, args):
    validate_grant(*args, reference=sample)


@pytest.mark.parametrize(
    "args, message",
    [
        (("UPDATE", "db", None, None), '"UPDATE" is an alias for "ALTER UPDATE". Please use "ALTER UPDATE" instead'),
        (("KILL QUERY", "db", None, None), "'database' must be null"),
        (("SELECT", None, None, None), "'database' must be set when privilege is \"SELECT\""),
        (("SELECT", "db", None, "c"), "'table' must be set when 'column' is set"),
        (("ALTER TABLE", None, "t", None), "'database' must be set when 'table' is set"),
    ],
)
def test_invalid_grants(sample, args, message):
    with pytest.raises(GrantValidationError) as exc_info:
        validate_grant(*args, reference=sample)
    assert message in str(exc_info.value)


def test_bundled_scopes():
    with pytest.raises(GrantValidationError, match="'database' must be set"):
        validate_grant("CREATE VIEW", None, None, None)
    with pytest.raises(GrantValidationError, match="currently unsupported"):
        validate_grant("CREATE NAMED COLLECTION", "db", None, None)
    validate_grant("CREATE VIEW", "db", None, None)
