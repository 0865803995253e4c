from werkzeug.datastructures import MultiDict

from common.forms import get_bool


def test_get_bool_handles_various_types():
    assert get_bool({}, "flag", default=True) is True
    assert get_bool({"flag": "on"}, "flag", default=False) is True
    assert get_bool({"flag": "OFF"}, "flag", default=True) is False
    assert get_bool({"flag": 0}, "flag", default=True) is False
    assert get_bool(None, "flag") is False


def test_get_bool_reads_query_args():
    args = MultiDict([("download", "1")])
    assert get_bool(args, "download") is True
    assert get_bool(MultiDict(), "download") is False
