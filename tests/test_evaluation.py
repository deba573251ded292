from evaluation.evaluation import parse_pytest_verbose_output, run_compression_benchmark, summarize

VERBOSE_OUTPUT = """\
============================= test session starts ==============================
collected 4 items

tests/test_huffman_core.py::test_pack_five_bits PASSED                   [ 25%]
tests/test_huffman_core.py::test_padding_length[1-7] FAILED              [ 50%]
tests/test_report.py::test_sorted_report_descending SKIPPED (reason)     [ 75%]
tests/test_huffman_service.py::test_empty_input ERROR                    [100%]

=========================== short test summary info ============================
FAILED tests/test_huffman_core.py::test_padding_length[1-7] - assert 6 == 7
"""


def test_parse_pytest_verbose_output():
    tests = parse_pytest_verbose_output(VERBOSE_OUTPUT)
    assert len(tests) == 4
    outcomes = [(t["name"], t["outcome"]) for t in tests]
    assert outcomes == [
        ("test_pack_five_bits", "passed"),
        ("test_padding_length[1-7]", "failed"),
        ("test_sorted_report_descending", "skipped"),
        ("test_empty_input", "error"),
    ]
    assert tests[0]["nodeid"] == "tests/test_huffman_core.py::test_pack_five_bits"


def test_summarize_counts_outcomes():
    summary = summarize(parse_pytest_verbose_output(VERBOSE_OUTPUT))
    assert summary == {"total": 4, "passed": 1, "failed": 1, "errors": 1, "skipped": 1}


def test_compression_benchmark_roundtrips():
    results = run_compression_benchmark({"text": "mississippi " * 50, "bytes": b"\x00\x01" * 64, "one": "q"})
    assert set(results) == {"text", "bytes", "one"}
    assert all(entry["roundtrip_ok"] for entry in results.values())
    assert results["text"]["compressed_bytes"] < results["text"]["original_bytes"]
