from __future__ import annotations

import bcrypt
import pytest

from apps.check_password.main import EXIT_MALFORMED_HASH, run

KNOWN_HASH = "$2b$12$7hoRZfJrRKD2nIm2vHLs7OBETy.LWenXXMLKf99W8M4PUwO6KB7fu"


def test_verify_reports_false_for_known_non_matching_password(
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = run(["verify", KNOWN_HASH, "--password", "password"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "false"


def test_verify_reports_true_for_matching_password(capsys: pytest.CaptureFixture[str]) -> None:
    stored = bcrypt.hashpw(b"password123", bcrypt.gensalt(rounds=4)).decode("ascii")

    exit_code = run(["verify", stored, "--password", "password123"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "true"


def test_verify_malformed_hash_exits_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["verify", "$2b$xx$broken", "--password", "password"])

    captured = capsys.readouterr()
    assert exit_code == EXIT_MALFORMED_HASH
    assert captured.out == ""
    assert "malformed hash" in captured.err
    assert "password" not in captured.err


def test_verify_prompts_when_password_flag_is_omitted(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    stored = bcrypt.hashpw(b"prompted-secret", bcrypt.gensalt(rounds=4)).decode("ascii")
    monkeypatch.setattr("getpass.getpass", lambda prompt: "prompted-secret")

    exit_code = run(["verify", stored])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "true"


def test_hash_command_prints_verifiable_hash(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["hash", "--password", "new-password", "--cost", "4"])

    printed = capsys.readouterr().out.strip()
    assert exit_code == 0
    assert printed.startswith("$2b$04$")
    assert bcrypt.checkpw(b"new-password", printed.encode("ascii"))


def test_hash_command_prompts_when_password_flag_is_omitted(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("getpass.getpass", lambda prompt: "prompted-secret")

    exit_code = run(["hash", "--cost", "4"])

    printed = capsys.readouterr().out.strip()
    assert exit_code == 0
    assert bcrypt.checkpw(b"prompted-secret", printed.encode("ascii"))


@pytest.mark.parametrize(
    "argv",
    [
        ["verify", "password123", KNOWN_HASH],
        ["hash", "password123", "--cost", "4"],
    ],
)
def test_positional_plaintext_is_rejected_as_usage_error(
    argv: list[str],
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        run(argv)

    assert exc_info.value.code == 2
    assert "unrecognized arguments" in capsys.readouterr().err
