import pytest

from pipex.textutils import split_fields, strncmp


def test_split_simple_command():
    assert split_fields("ls -l", " ") == ["ls", "-l"]


def test_split_collapses_runs_and_edges():
    assert split_fields("  grep   -v  foo ", " ") == ["grep", "-v", "foo"]


def test_split_path_value():
    assert split_fields("/usr/bin:/bin::/usr/local/bin:", ":") == [
        "/usr/bin",
        "/bin",
        "/usr/local/bin",
    ]


@pytest.mark.parametrize("text", ["", " ", "     "])
def test_split_nothing_but_separators(text):
    assert split_fields(text, " ") == []


@pytest.mark.parametrize(
    "text", ["a b c", "cat", "wc -l --bytes", " x  y ", "::a::b"]
)
def test_split_invariants(text):
    for sep in (" ", ":"):
        fields = split_fields(text, sep)
        assert all(fields)
        assert all(sep not in field for field in fields)
        assert "".join(fields) == text.replace(sep, "")


def test_split_round_trip_single_separators():
    text = "tr a-z A-Z"
    assert " ".join(split_fields(text, " ")) == text


@pytest.mark.parametrize("sep", ["", "ab"])
def test_split_rejects_bad_separator(sep):
    with pytest.raises(ValueError):
        split_fields("a b", sep)


def test_strncmp_equal():
    assert strncmp("here_doc", "here_doc", 9) == 0


def test_strncmp_prefix_only():
    assert strncmp("PATH=/usr/bin", "PATH=", 5) == 0


def test_strncmp_longer_first_differs_at_terminator():
    assert strncmp("here_docs", "here_doc", 9) > 0
    assert strncmp("here_do", "here_doc", 9) < 0


def test_strncmp_signs():
    assert strncmp("abc", "abd", 3) < 0
    assert strncmp("abd", "abc", 3) > 0
    assert strncmp("abc", "abd", 2) == 0


def test_strncmp_antisymmetric():
    for a, b in [("apple", "apply"), ("x", ""), ("limit", "limiter")]:
        assert strncmp(a, b, 10) == -strncmp(b, a, 10)


def test_strncmp_zero_length():
    assert strncmp("a", "b", 0) == 0


def test_strncmp_stops_after_both_end():
    assert strncmp("same", "same", 100) == 0


def test_strncmp_bytes():
    assert strncmp(b"EOF\n", b"EOF", 3) == 0
    assert strncmp(b"EOF\n", b"EOF", 4) > 0


def test_strncmp_negative_n():
    with pytest.raises(ValueError):
        strncmp("a", "a", -1)