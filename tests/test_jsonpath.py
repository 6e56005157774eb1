import pytest

from linkbot.errors import UpstreamContractViolation
from linkbot.utils.jsonpath import parse_json, require


DATA = {"items": [{"snippet": {"title": "T", "views": 3, "live": False}}]}


def test_require_walks_keys_and_indices():
    assert require(DATA, "items", 0, "snippet", "title", kind=str) == "T"
    assert require(DATA, "items", kind=list) == DATA["items"]


@pytest.mark.parametrize(
    ("path", "kind", "detail"),
    [
        (("items", 1, "snippet"), object, "$.items[1]: index out of range"),
        (("items", 0, "missing"), object, "$.items[0].missing: missing field"),
        (("items", "snippet"), object, "$.items.snippet: parent is not an object"),
        (("items", 0, "snippet", "title"), int, "expected int, got str"),
        (("items", 0, "snippet", "live"), int, "expected number, got bool"),
    ],
)
def test_require_reports_the_broken_path(path, kind, detail):
    with pytest.raises(UpstreamContractViolation, match="youtube") as exc_info:
        require(DATA, *path, kind=kind, service="youtube")
    assert detail in exc_info.value.detail


def test_parse_json_rejects_garbage():
    with pytest.raises(UpstreamContractViolation):
        parse_json("<html>oops</html>", "xkcd")
    assert parse_json('{"a": 1}') == {"a": 1}
