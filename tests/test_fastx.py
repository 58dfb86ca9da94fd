import gzip
import io

import pytest

from minikit.fastx import FastxReader, FastxRecord, TruncatedQualityError, open_fastx


def _records(data):
    return list(FastxReader(io.BytesIO(data)))


def test_fasta_multiline_and_comment():
    recs = _records(b">r1 first read\nACGT\nGG\n>r2\nTTT\n")
    assert recs == [
        FastxRecord("r1", "ACGTGG", "first read"),
        FastxRecord("r2", "TTT", ""),
    ]
    assert recs[0].qual is None


def test_fastq_records():
    data = b"@q1 c\nACGT\n+\nIIII\n@q2\nAC\n+q2\n!!\n"
    recs = _records(data)
    assert [r.name for r in recs] == ["q1", "q2"]
    assert recs[0].qual == "IIII"
    assert recs[1].seq == "AC"
    assert recs[1].qual == "!!"
    assert recs[0].comment == "c"


def test_multiline_quality():
    recs = _records(b"@q\nACGTAC\n+\nIII\nIII\n")
    assert recs[0].qual == "IIIIII"


def test_crlf_line_endings():
    recs = _records(b">r1 hello\r\nAC\r\nGT\r\n")
    assert recs == [FastxRecord("r1", "ACGT", "hello")]


def test_blank_lines_and_leading_junk_skipped():
    recs = _records(b"junk\n\n>r1\n\nAC\n\nGT\n")
    assert recs[0].seq == "ACGT"


def test_mixed_fasta_fastq():
    recs = _records(b">a\nAC\n@b\nGT\n+\n##\n>c\nT\n")
    assert [(r.name, r.qual) for r in recs] == [("a", None), ("b", "##"), ("c", None)]


def test_truncated_missing_quality_line():
    reader = FastxReader(io.BytesIO(b"@q\nACGT\n+"))
    with pytest.raises(TruncatedQualityError):
        reader.read()


def test_truncated_short_quality():
    reader = FastxReader(io.BytesIO(b"@q\nACGT\n+\nII\n"))
    with pytest.raises(TruncatedQualityError):
        reader.read()


def test_read_returns_none_at_end():
    reader = FastxReader(io.BytesIO(b">x\nA\n"))
    assert reader.read().seq == "A"
    assert reader.read() is None
    assert reader.read() is None


def test_empty_input():
    assert _records(b"") == []


def test_text_stream_accepted():
    recs = list(FastxReader(io.StringIO(">t\nACGT\n")))
    assert recs == [FastxRecord("t", "ACGT", "")]


def test_long_sequence_spans_buffers():
    seq = "ACGT" * 10000
    recs = _records(b">big\n" + seq.encode() + b"\n>small\nA\n")
    assert len(recs[0].seq) == len(seq)
    assert recs[0].seq == seq
    assert recs[1].seq == "A"


def test_context_manager_closes_stream():
    buf = io.BytesIO(b">x\nA\n")
    with FastxReader(buf) as reader:
        assert reader.read().name == "x"
    assert buf.closed


def test_open_plain_file(tmp_path):
    path = tmp_path / "reads.fa"
    path.write_bytes(b">r1\nACGT\n>r2\nGG\n")
    with open_fastx(str(path)) as reader:
        names = [r.name for r in reader]
    assert names == ["r1", "r2"]


def test_open_gzip_file(tmp_path):
    path = tmp_path / "reads.fq.gz"
    with gzip.open(path, "wb") as fh:
        fh.write(b"@r1\nACGT\n+\nABCD\n")
    with open_fastx(str(path)) as reader:
        recs = list(reader)
    assert recs == [FastxRecord("r1", "ACGT", "", "ABCD")]