import pytest
import requests

from page_flowchart.errors import (
    classify_error,
    ExtractionError,
    FetchTimeoutError,
    FlowchartFormatError,
    NavigationError,
    NetworkError,
)


@pytest.mark.parametrize("error, expected", [
    (FetchTimeoutError("slow"), "TIMEOUT_ERROR"),
    (requests.Timeout("slow"), "TIMEOUT_ERROR"),
    (requests.ConnectTimeout("slow connect"), "TIMEOUT_ERROR"),
    (NavigationError("404", status_code=404), "NAVIGATION_ERROR"),
    (requests.HTTPError("500"), "NAVIGATION_ERROR"),
    (NetworkError("dns"), "NETWORK_ERROR"),
    (requests.ConnectionError("refused"), "NETWORK_ERROR"),
    (ExtractionError("empty"), "EXTRACTOR_ERROR"),
    (FlowchartFormatError("bad json"), "FORMAT_ERROR"),
    (ValueError("other"), "UNKNOWN_ERROR"),
])
def test_classify_error(error, expected):
    assert classify_error(error, "test").type == expected


def test_details_contain_context_and_status():
    info = classify_error(NavigationError("HTTP 404", status_code=404), "crawl")

    assert info.to_dict() == {
        "type": "NAVIGATION_ERROR",
        "message": "HTTP 404",
        "details": {"context": "crawl", "status_code": 404},
    }


def test_empty_message_uses_class_name():
    assert classify_error(ExtractionError(), "crawl").message == "ExtractionError"


def test_error_is_logged(caplog):
    with caplog.at_level("ERROR"):
        classify_error(NetworkError("refused"), "crawl")
    assert "[NETWORK_ERROR] crawl: refused" in caplog.text
