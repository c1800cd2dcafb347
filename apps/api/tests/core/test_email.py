"""
Tests for the Resend email transport.
"""

from unittest.mock import patch

import pytest

from kinderadmin.core import email


def test_render_escapes_html():
    html = email.render_notification_html("<b>Hola</b>", "Línea 1\n<script>x</script>")

    assert "&lt;b&gt;Hola&lt;/b&gt;" in html
    assert "Línea 1<br>&lt;script&gt;x&lt;/script&gt;" in html
    assert "<script>" not in html


@pytest.mark.asyncio
async def test_without_api_key_logs_and_succeeds():
    with patch.object(email.resend, "api_key", None), patch.object(
        email.resend.Emails, "send"
    ) as send:
        assert await email.send_email(["a@test.com"], "Hola", "<p>Hola</p>") is True

    send.assert_not_called()


@pytest.mark.asyncio
async def test_sends_through_resend():
    with patch.object(email.resend, "api_key", "re_test"), patch.object(
        email.resend.Emails, "send", return_value={"id": "email-1"}
    ) as send:
        ok = await email.send_notification_email(["a@test.com"], "Hola", "Texto")

    assert ok is True
    params = send.call_args.args[0]
    assert params["to"] == ["a@test.com"]
    assert "bcc" not in params
    assert params["subject"] == "Hola"
    assert "Texto" in params["html"]


@pytest.mark.asyncio
async def test_several_recipients_are_batched_in_bcc():
    recipients = [f"g{i}@test.com" for i in range(120)]

    with patch.object(email.resend, "api_key", "re_test"), patch.object(
        email.resend.Emails, "send", return_value={"id": "email-1"}
    ) as send:
        ok = await email.send_notification_email(recipients, "Aviso", "Texto")

    assert ok is True
    batches = [c.args[0] for c in send.call_args_list]
    assert [len(params["bcc"]) for params in batches] == [50, 50, 20]
    assert all(params["to"] == [email.settings.email_from] for params in batches)
    assert [addr for params in batches for addr in params["bcc"]] == recipients


@pytest.mark.asyncio
async def test_failed_batch_stops_bulk_send():
    recipients = [f"g{i}@test.com" for i in range(120)]

    with patch.object(email.resend, "api_key", "re_test"), patch.object(
        email.resend.Emails,
        "send",
        side_effect=[{"id": "email-1"}, RuntimeError("rejected")],
    ) as send:
        ok = await email.send_notification_email(recipients, "Aviso", "Texto")

    assert ok is False
    assert send.call_count == 2


@pytest.mark.asyncio
async def test_resend_error_returns_false():
    with patch.object(email.resend, "api_key", "re_test"), patch.object(
        email.resend.Emails, "send", side_effect=RuntimeError("quota")
    ):
        assert await email.send_email(["a@test.com"], "Hola", "<p>Hola</p>") is False
