# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import json

import pytest

import cipherlist
import curupira2
import hexjson
import inputgen
import tvgen

def test_hex_keys():
    tv = {"description": "x", "input": {"key": b'\x01\x02', "rounds": 10}, "tests": [{"tag": b'\xff'}]}
    h = hexjson.recursive_hex(tv)
    assert h == {"description": "x", "input": {"key_hex": "0102", "rounds": 10}, "tests": [{"tag_hex": "ff"}]}
    assert hexjson.recursive_unhex(h) == tv

def test_reserved_key():
    with pytest.raises(Exception):
        hexjson.recursive_hex({"key_hex": b''})

def test_inputs_are_deterministic():
    lengths = {'key': 12, 'plaintext': 5}
    assert list(inputgen.generate_testinputs(lengths)) == list(inputgen.generate_testinputs(lengths))

def test_onebit_inputs():
    for d, desc in inputgen.generate_onebit({'nonce': 2}):
        assert bin(int.from_bytes(d['nonce'], 'big')).count('1') == 1
        assert desc.startswith("Set bit")

def test_write_then_check(tmp_path, capsys):
    c = curupira2.Curupira2()
    tvgen.write_tests(c, tmp_path)
    files = sorted(p.name for p in (tmp_path / "Curupira2").iterdir())
    assert files == ["Curupira2_144.json", "Curupira2_192.json", "Curupira2_96.json"]
    tvgen.check_tests(c, tmp_path, True)
    out = capsys.readouterr().out
    assert "Writing:" in out
    assert "OK: All zero" in out

def test_check_detects_corruption(tmp_path):
    c = curupira2.Curupira2()
    tvgen.write_tests(c, tmp_path)
    fn = tmp_path / "Curupira2" / "Curupira2_96.json"
    with fn.open() as f:
        tvs = json.load(f)
    tvs[0]["ciphertext_hex"] = "00" * 12 if tvs[0]["ciphertext_hex"] != "00" * 12 else "11" * 12
    with fn.open("w") as f:
        json.dump(tvs, f)
    with pytest.raises(AssertionError):
        tvgen.check_tests(c, tmp_path, False)

def test_check_missing_directory(tmp_path):
    with pytest.raises(SystemExit):
        tvgen.check_tests(curupira2.Curupira2(), tmp_path, False)

def test_cipherlist_names():
    assert [c.name() for c in cipherlist.all_ciphers] == ["Curupira2", "MarvinMac", "LetterSoupAead"]
