import pytest

from plugins.page_splitter.core import (
    ConfigurationError,
    ErrorKind,
    SplitConfiguration,
    SplitError,
    validate_configuration,
)


def test_missing_file_is_reported_first():
    issue = validate_configuration(SplitConfiguration(document=None, ranges=""))
    assert issue is not None
    assert issue.kind is ErrorKind.MISSING_FILE
    assert issue.message == "Please upload a PDF file"


def test_blank_ranges_are_rejected():
    issue = validate_configuration(SplitConfiguration(document=b"%PDF-", ranges="   "))
    assert issue is not None
    assert issue.kind is ErrorKind.MISSING_RANGES


@pytest.mark.parametrize("ranges", ["1-", "a-5", "1,,2", "1;2", "-1", "01-"])
def test_malformed_ranges_are_rejected(ranges):
    issue = validate_configuration(SplitConfiguration(document=b"%PDF-", ranges=ranges))
    assert issue is not None
    assert issue.kind is ErrorKind.INVALID_FORMAT
    assert "1-5,8,10-12" in issue.message


@pytest.mark.parametrize("ranges", ["1-5,8,10-12", " 1 - 5 , 8 ", "5-1", "007"])
def test_well_formed_ranges_pass(ranges):
    assert validate_configuration(SplitConfiguration(document=b"%PDF-", ranges=ranges)) is None


def test_validation_error_can_be_raised():
    issue = validate_configuration(SplitConfiguration(document=None))
    assert isinstance(issue, ConfigurationError)
    with pytest.raises(SplitError):
        raise issue
