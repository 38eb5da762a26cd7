import io

import swearfilter_cli


def test_blocked_message(capsys):
    assert swearfilter_cli.main(["-w", "foo", "what FOO"]) == swearfilter_cli.EXIT_BLOCKED
    out = capsys.readouterr().out
    assert out.startswith("BLOCKED")
    assert "'foo'@5" in out


def test_allowed_message(capsys):
    assert swearfilter_cli.main(["-w", "foo", "all good"]) == swearfilter_cli.EXIT_ALLOWED
    assert capsys.readouterr().out.startswith("ALLOWED")


def test_spaced_bypass_flag(capsys):
    assert swearfilter_cli.main(["-w", "foo", "f o o"]) == swearfilter_cli.EXIT_ALLOWED
    assert swearfilter_cli.main(["-w", "foo", "--enable-spaced-bypass", "f o o"]) == swearfilter_cli.EXIT_BLOCKED


def test_disable_normalize_flag():
    assert swearfilter_cli.main(["-w", "foo", "fóó"]) == swearfilter_cli.EXIT_BLOCKED
    assert swearfilter_cli.main(["-w", "foo", "--disable-normalize", "fóó"]) == swearfilter_cli.EXIT_ALLOWED


def test_flag_empty(capsys):
    assert swearfilter_cli.main(["--flag-empty", "   "]) == swearfilter_cli.EXIT_BLOCKED
    assert "' '@0" in capsys.readouterr().out


def test_show_normalized(capsys):
    swearfilter_cli.main(["-w", "zzz", "--show-normalized", "A  B\tc"])
    assert "normalized: 'ab c'" in capsys.readouterr().out


def test_messages_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("foo\nclean\n"))
    assert swearfilter_cli.main(["-w", "foo"]) == swearfilter_cli.EXIT_BLOCKED
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("BLOCKED")
    assert lines[1].startswith("ALLOWED")


def test_words_from_file_and_environment(monkeypatch, tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("bar\n", encoding="utf-8")
    monkeypatch.setenv("SWEARFILTER_WORDS", "foo")

    assert swearfilter_cli.main(["--words-file", str(path), "foo"]) == swearfilter_cli.EXIT_BLOCKED
    assert swearfilter_cli.main(["--words-file", str(path), "bar"]) == swearfilter_cli.EXIT_BLOCKED
    assert swearfilter_cli.main(["--words-file", str(path), "baz"]) == swearfilter_cli.EXIT_ALLOWED


def test_normalization_error_keeps_checking(capsys):
    status = swearfilter_cli.main(["-w", "foo", "bad \ud800", "foo"])
    assert status == swearfilter_cli.EXIT_ERROR
    captured = capsys.readouterr()
    assert "ERROR" in captured.err
    assert "BLOCKED" in captured.out


def test_no_words_allows_everything(capsys):
    assert swearfilter_cli.main(["anything"]) == swearfilter_cli.EXIT_ALLOWED


def test_show_normalized_reports_normalization_error(capsys):
    status = swearfilter_cli.main(["--show-normalized", "bad \ud800"])
    assert status == swearfilter_cli.EXIT_ERROR
    captured = capsys.readouterr()
    assert "ERROR    " in captured.err
    assert captured.out == ""
