from portfolio.shared.logging.sensitive_filter import sanitize_message, sanitize_record


def test_masks_email_local_part() -> None:
    assert sanitize_message("session.login: ok email=alice@example.com") == (
        "session.login: ok email=***@example.com"
    )


def test_masks_passwords_and_user_blobs() -> None:
    assert "hunter2" not in sanitize_message("password=hunter2 confirm=hunter2")
    assert "pass1" not in sanitize_message('users={"a@x.com": "pass1"}')


def test_sanitize_record_rewrites_message() -> None:
    record = {"message": "contact from bob@example.org"}

    assert sanitize_record(record) is True
    assert record["message"] == "contact from ***@example.org"
