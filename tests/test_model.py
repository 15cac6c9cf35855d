import io
import json

import pytest

from bayespam.model import (
    ModelFormatError,
    ModelIOError,
    ModelStats,
    TokenCounter,
    TokenStatistics,
)


class BrokenStream(io.RawIOBase):
    """A stream whose reads and writes always fail."""

    def readable(self):
        return True

    def writable(self):
        return True

    def read(self, size=-1):
        raise OSError("disk on fire")

    def write(self, data):
        raise OSError("disk on fire")


def test_new_model_is_empty():
    model = TokenStatistics()

    assert model.table == {}
    assert model.stats == ModelStats(spam_total=0, ham_total=0, token_count=0)
    assert not model.is_trained


def test_counter_starts_at_zero():
    assert TokenCounter() == TokenCounter(ham=0, spam=0)


def test_increments_keep_totals_in_sync():
    model = TokenStatistics()

    model.increment_spam("free")
    model.increment_spam("free")
    model.increment_ham("free")
    model.increment_ham("meeting")

    assert model.table == {
        "free": TokenCounter(ham=1, spam=2),
        "meeting": TokenCounter(ham=1, spam=0),
    }
    assert model.spam_total == 2
    assert model.ham_total == 2
    assert model.token_count == 2
    assert model.is_trained


def test_totals_are_computed_from_table():
    model = TokenStatistics(table={
        "free": TokenCounter(ham=0, spam=3),
        "meeting": TokenCounter(ham=2, spam=1),
    })

    assert model.spam_total == 4
    assert model.ham_total == 2


def test_load_recomputes_totals(model_json):
    model = TokenStatistics.load(io.BytesIO(model_json))

    assert model.table == {
        "free": TokenCounter(ham=0, spam=3),
        "meeting": TokenCounter(ham=2, spam=0),
    }
    assert model.spam_total == 3
    assert model.ham_total == 2


def test_load_ignores_stored_totals_and_unknown_fields():
    data = {
        "token_table": {"free": {"ham": 1, "spam": 3, "last_seen": "2020-01-01"}},
        "spam_total_count": 999,
        "ham_total_count": 999,
        "version": 2,
    }

    model = TokenStatistics.load(io.BytesIO(json.dumps(data).encode()))

    assert model.table == {"free": TokenCounter(ham=1, spam=3)}
    assert model.spam_total == 3
    assert model.ham_total == 1


def test_load_accepts_text_streams():
    model = TokenStatistics.load(io.StringIO('{"token_table": {"Noël": {"ham": 1, "spam": 0}}}'))

    assert model.table == {"Noël": TokenCounter(ham=1, spam=0)}


def test_load_accepts_empty_table():
    model = TokenStatistics.load(io.BytesIO(b'{"token_table": {}}'))

    assert model == TokenStatistics()


@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"not json",
        b'{"token_table": ',
        b"\xff\xfe\xfa",
        b"[]",
        b'"token_table"',
        b"{}",
        b'{"token_table": []}',
        b'{"token_table": {"free": 3}}',
        b'{"token_table": {"free": {"spam": 3}}}',
        b'{"token_table": {"free": {"ham": 0}}}',
        b'{"token_table": {"free": {"ham": -1, "spam": 3}}}',
        b'{"token_table": {"free": {"ham": 0, "spam": 1.5}}}',
        b'{"token_table": {"free": {"ham": 0, "spam": "3"}}}',
        b'{"token_table": {"free": {"ham": 0, "spam": true}}}',
        b'{"token_table": {"free": {"ham": 0, "spam": null}}}',
    ],
)
def test_load_rejects_malformed_models(content):
    with pytest.raises(ModelFormatError):
        TokenStatistics.load(io.BytesIO(content))


def test_load_wraps_read_errors():
    with pytest.raises(ModelIOError) as exc_info:
        TokenStatistics.load(BrokenStream())

    assert isinstance(exc_info.value.__cause__, OSError)


def test_load_from_write_only_stream_is_io_error(temp_dir):
    with open(temp_dir / "model.json", "wb") as f:
        with pytest.raises(ModelIOError):
            TokenStatistics.load(f)


def test_save_wraps_write_errors():
    with pytest.raises(ModelIOError):
        TokenStatistics().save(BrokenStream())


def test_save_writes_only_the_table():
    model = TokenStatistics()
    model.increment_spam("free")
    model.increment_ham("meeting")
    stream = io.BytesIO()

    model.save(stream)

    assert stream.getvalue() == (
        b'{"token_table":{"free":{"ham":0,"spam":1},"meeting":{"ham":1,"spam":0}}}'
    )


def test_save_pretty_indents():
    model = TokenStatistics()
    model.increment_spam("free")
    stream = io.StringIO()

    model.save(stream, pretty=True)

    assert stream.getvalue() == (
        '{\n'
        '  "token_table": {\n'
        '    "free": {\n'
        '      "ham": 0,\n'
        '      "spam": 1\n'
        '    }\n'
        '  }\n'
        '}'
    )


def test_save_keeps_unicode_tokens_readable():
    model = TokenStatistics()
    model.increment_ham("Noël")
    stream = io.BytesIO()

    model.save(stream)

    assert "Noël".encode("utf-8") in stream.getvalue()


@pytest.mark.parametrize("pretty", [False, True])
def test_save_then_load_round_trips(pretty):
    model = TokenStatistics()
    for token in ["free", "free", "Nöel", "don't"]:
        model.increment_spam(token)
    for token in ["meeting", "free", "4pm"]:
        model.increment_ham(token)
    stream = io.BytesIO()

    model.save(stream, pretty=pretty)
    stream.seek(0)
    loaded = TokenStatistics.load(stream)

    assert loaded == model
    assert loaded.spam_total == sum(c.spam for c in loaded.table.values()) == 4
    assert loaded.ham_total == sum(c.ham for c in loaded.table.values()) == 3


def test_load_from_closed_stream_is_io_error():
    stream = io.BytesIO(b'{"token_table": {}}')
    stream.close()

    with pytest.raises(ModelIOError):
        TokenStatistics.load(stream)


def test_save_to_closed_stream_is_io_error():
    stream = io.BytesIO()
    stream.close()

    with pytest.raises(ModelIOError):
        TokenStatistics().save(stream)


def test_load_undecodable_text_stream_is_format_error(temp_dir):
    path = temp_dir / "model.json"
    path.write_bytes(b'{"token_table": {"\xff": {"ham": 1, "spam": 0}}}')

    with open(path, encoding="utf-8") as f:
        with pytest.raises(ModelFormatError):
            TokenStatistics.load(f)


def test_load_deeply_nested_json_is_format_error():
    with pytest.raises(ModelFormatError):
        TokenStatistics.load(io.BytesIO(b"[" * 100000 + b"]" * 100000))
