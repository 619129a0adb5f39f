"""Unit tests for the payment description correlation format."""

import pytest

from app.core.exceptions import ParseError
from app.services.correlation_codec import DescriptionCorrelationCodec

codec = DescriptionCorrelationCodec()


def test_encode_lists_ids_and_document_ids():
    text = codec.encode([1372, 67], ["monthly-a", "monthly-b"])
    assert text == "1372,67 (DocumentID: monthly-a, monthly-b)"


def test_encode_without_document_ids():
    assert codec.encode([5]) == "5 (DocumentID: N/A)"
    assert codec.encode([5], [None, ""]) == "5 (DocumentID: N/A)"


def test_encode_requires_ids():
    with pytest.raises(ValueError):
        codec.encode([])


def test_decode_reads_only_the_head():
    assert codec.decode("1372,67 (DocumentID: monthly-a, monthly-b)") == [1372, 67]


def test_decode_tolerates_surrounding_whitespace():
    assert codec.decode("  12 ") == [12]
    assert codec.decode("\n7,8 (DocumentID: N/A)\n") == [7, 8]


def test_decode_keeps_order_and_duplicates():
    assert codec.decode("9,3,9") == [9, 3, 9]


def test_decode_of_encoded_text():
    ids = [4, 8, 15, 16, 23, 42]
    assert codec.decode(codec.encode(ids, ["custom-x"])) == ids


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "   ",
        "abc (DocumentID: N/A)",
        "1,,2",
        "12, 13",
        "1,-2",
        "+3",
        "1,2a",
        "²",
        "٣",
        "99999999999999999999999 (DocumentID: x)",
        "2147483648",
    ],
)
def test_decode_rejects_malformed_text(text):
    with pytest.raises(ParseError):
        codec.decode(text)


def test_decode_accepts_largest_billing_id():
    assert codec.decode("2147483647 (DocumentID: N/A)") == [2147483647]
