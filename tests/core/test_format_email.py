"""Email Formatting — tests for the verification email renderer."""

from datetime import timedelta

from sefask.core.format_email import VERIFICATION_SUBJECT, render_verification_email


def test_render_includes_code_name_and_ttl():
    email = render_verification_email("Ada", "042137")
    assert email.subject == VERIFICATION_SUBJECT
    assert "042137" in email.html
    assert "Dear Ada," in email.html
    assert "15 minutes" in email.text


def test_render_escapes_first_name_in_html():
    email = render_verification_email("<script>", "111111")
    assert "<script>" not in email.html
    assert "&lt;script&gt;" in email.html
    assert "Dear <script>," in email.text


def test_render_uses_custom_ttl():
    assert "5 minutes" in render_verification_email("A", "1", timedelta(minutes=5)).text
