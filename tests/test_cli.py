"""`python -m randlib` demo output."""

from randlib.__main__ import ACCESSORS, main


def test_manual_seed_prints_raw_samples_then_accessors(capsys):
    assert main(["--source", "manual", "--seed", "42", "--count", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == str((1 << 127) + 21)
    assert lines[1] == str((1 << 126) + 10)
    assert [line.split(":")[0] for line in lines[2:]] == list(ACCESSORS)


def test_hex_seed_accepted(capsys):
    assert main(["--source", "manual", "--seed", "0x2a", "--count", "1"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == str((1 << 127) + 21)


def test_zero_seed_reports_error(capsys):
    assert main(["--source", "manual", "--seed", "0"]) == 1
    assert "error:" in capsys.readouterr().err
