# test_byte_count.py - parsing of the byte count and start offset arguments
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".."))

import ncopy  # noqa: E402

def run_test(name, func):
    print(f"=== RUN   {name}")
    try:
        func()
        print(f"--- PASS: {name}")
    except AssertionError as e:
        print(f"--- FAIL: {name}")
        print(f"    {e}")
        return False
    return True

def check(arg, expected):
    got = ncopy.get_number_of_bytes(arg)
    assert got == expected, f"Expected {arg!r} to give {expected}, got: {got}"

def test_raw_count():
    check("10", 10)
    check("1", 1)

def test_kilo_suffix():
    check("10k", 10240)
    check("10K", 10240)

def test_mega_suffix():
    check("10m", 10485760)
    check("10M", 10485760)

def test_numeric_prefixes():
    check("0x10", 16)
    check("0X1f", 31)
    check("010", 8)
    check("0x2k", 2048)

def test_leading_whitespace_and_sign():
    check(" 12", 12)
    check("+3k", 3072)
    check("-5", -5)

def test_invalid_counts():
    check("10x", -1)
    check("abc", -1)
    check("08", -1)
    check("0x", -1)
    check("1.5k", -1)

def test_text_after_suffix_is_invalid():
    check("10kb", -1)
    check("1M2", -1)

def test_empty_number_is_zero():
    check("", 0)
    check("k", 0)

def test_start_offset():
    assert ncopy.get_start_offset("42") == 42, "Expected decimal offset 42"
    assert ncopy.get_start_offset("-1") == -1, "Expected negative offset to parse"

def test_invalid_start_offset_exits():
    try:
        ncopy.get_start_offset("12abc")
    except SystemExit as e:
        assert e.code == 1, f"Expected exit code 1, got {e.code}"
    else:
        raise AssertionError("Expected SystemExit for an invalid offset")

if __name__ == "__main__":
    tests = [
        ("TestRawCount", test_raw_count),
        ("TestKiloSuffix", test_kilo_suffix),
        ("TestMegaSuffix", test_mega_suffix),
        ("TestNumericPrefixes", test_numeric_prefixes),
        ("TestLeadingWhitespaceAndSign", test_leading_whitespace_and_sign),
        ("TestInvalidCounts", test_invalid_counts),
        ("TestTextAfterSuffixIsInvalid", test_text_after_suffix_is_invalid),
        ("TestEmptyNumberIsZero", test_empty_number_is_zero),
        ("TestStartOffset", test_start_offset),
        ("TestInvalidStartOffsetExits", test_invalid_start_offset_exits),
    ]

    all_passed = True
    for name, func in tests:
        if not run_test(name, func):
            all_passed = False

    if not all_passed:
        print("FAIL")
        sys.exit(1)

    print("PASS")
