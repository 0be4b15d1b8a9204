import pathlib

import pytest

from click.testing import CliRunner

from bwords import cli, config


HELLO = "fund inch jazz jazz jowl yell tent loud leaf"


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path) -> None:
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "missing.toml")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_encode(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["encode", "00"])
    assert result.exit_code == 0
    assert result.output == "able tied also webs lung\n"

    result = runner.invoke(cli.bwords, ["encode", "--style", "minimal", "48656c6c6f"])
    assert result.exit_code == 0
    assert result.output == "fdihjzjzjlylttldlf\n"


def test_encode_stdin(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["encode", "--input-format", "raw"], input=b"Hello")
    assert result.exit_code == 0
    assert result.output == HELLO + "\n"

    result = runner.invoke(cli.bwords, ["encode", "--style", "uri"], input="00\n")
    assert result.exit_code == 0
    assert result.output == "able-tied-also-webs-lung\n"


def test_encode_invalid_hex(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["encode", "zz"])
    assert result.exit_code == 1
    assert "ERROR: Failed to parse hex string." in result.output


def test_decode(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["decode", *HELLO.split()])
    assert result.exit_code == 0
    assert result.output == "48656c6c6f\n"

    result = runner.invoke(cli.bwords, ["decode", "--style", "uri", "able-tied-also-webs-lung"])
    assert result.exit_code == 0
    assert result.output == "00\n"

    result = runner.invoke(cli.bwords, ["decode", "--style", "minimal"], input="aetdaowslg\n")
    assert result.exit_code == 0
    assert result.output == "00\n"


def test_decode_raw_output(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["decode", "--output-format", "raw", HELLO])
    assert result.exit_code == 0
    assert result.stdout_bytes == b"Hello"


def test_decode_failure(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["decode", "able tied also webs able"])
    assert result.exit_code == 1
    assert "ERROR: Checksum mismatch" in result.output

    result = runner.invoke(cli.bwords, ["decode", "able able able able"])
    assert result.exit_code == 1
    assert "ERROR: Decoded 4 bytes" in result.output


def test_decode_strict(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["decode", "abletiedalsowebslung"])
    assert result.exit_code == 0
    assert result.output == "00\n"

    result = runner.invoke(cli.bwords, ["decode", "--strict", "abletiedalsowebslung"])
    assert result.exit_code == 1
    assert "ERROR: Invalid byteword" in result.output


def test_config_file(runner: CliRunner, tmp_path: pathlib.Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[default]\nstyle = "uri"\nstrict = true\n')

    result = runner.invoke(cli.bwords, ["--config", str(path), "encode", "00"])
    assert result.exit_code == 0
    assert result.output == "able-tied-also-webs-lung\n"

    result = runner.invoke(cli.bwords, ["--config", str(path), "decode", "able-tiedalsowebs-lung"])
    assert result.exit_code == 1

    result = runner.invoke(cli.bwords, ["--config", str(path), "decode", "--lenient", "able-tiedalsowebs-lung"])
    assert result.exit_code == 0
    assert result.output == "00\n"


def test_invalid_config_file(runner: CliRunner, tmp_path: pathlib.Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[default]\nstyle = "base64"\n')

    result = runner.invoke(cli.bwords, ["--config", str(path), "encode", "00"])
    assert result.exit_code == 1
    assert "ERROR: Configuration file invalid." in result.output


def test_words(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["words"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 256
    assert lines[0] == "  0  00  able  ae"
    assert lines[255] == "255  ff  zero  zo"

    result = runner.invoke(cli.bwords, ["words", "lung", "LG"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["141  8d  lung  lg", "141  8d  lung  lg"]

    result = runner.invoke(cli.bwords, ["words", "lung", "xyzw"])
    assert result.exit_code == 1
    assert "141  8d  lung  lg" in result.output
    assert "ERROR: Word 'xyzw' not in word list." in result.output


@pytest.mark.filterwarnings("error::DeprecationWarning")
def test_standard_streams(runner: CliRunner) -> None:
    result = runner.invoke(cli.bwords, ["encode", "--input-format", "raw"], input=b"Hello")
    assert result.exit_code == 0, result.output
    assert result.output == HELLO + "\n"

    result = runner.invoke(cli.bwords, ["decode", "--output-format", "raw"], input=HELLO + "\n")
    assert result.exit_code == 0, result.output
    assert result.stdout_bytes == b"Hello"


@pytest.mark.parametrize(
    "style, phrase",
    [
        ("standard", "fund inch jazz\njazz jowl yell\n  tent loud leaf\n"),
        ("standard", "fund\tinch  jazz jazz jowl yell tent loud\r\nleaf"),
        ("uri", "fund-inch-jazz-\njazz-jowl-yell-\ntent-loud-leaf\n"),
        ("minimal", "fdihjzjz\njlylttldlf\n"),
    ],
)
def test_decode_wrapped_phrase(runner: CliRunner, style: str, phrase: str) -> None:
    result = runner.invoke(cli.bwords, ["decode", "--style", style, "--strict"], input=phrase)
    assert result.exit_code == 0, result.output
    assert result.output == "48656c6c6f\n"


def test_normalize_phrase() -> None:
    assert cli.normalize_phrase(" able tied\nalso  webs\tlung\n", "standard") == "able tied also webs lung"
    assert cli.normalize_phrase("able-tied-\nalso-webs-lung\n", "uri") == "able-tied-also-webs-lung"
    assert cli.normalize_phrase("aetd\naows lg", "minimal") == "aetdaowslg"
