"""Tests for masking utility functions."""

from clinic.utils.masking import mask_email, mask_phone


class TestMaskPhone:
    """Tests for phone masking."""

    def test_keeps_last_three_digits(self):
        assert mask_phone("01091003965") == "********965"

    def test_short_number(self):
        assert mask_phone("123") == "***"

    def test_empty(self):
        assert mask_phone("") == ""
        assert mask_phone(None) == ""


class TestMaskEmail:
    """Tests for email masking."""

    def test_mask_standard_email(self):
        assert mask_email("patient@example.com") == "p***@example.com"

    def test_mask_invalid_email_no_at(self):
        assert mask_email("notanemail") == "***"

    def test_mask_empty_email(self):
        assert mask_email("") == ""
