#!/usr/bin/env python3
#
# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import argparse
import pathlib
import sys

import cipherlist
import hexjson
import inputgen

default_path = pathlib.Path(__file__).resolve().parent.parent / "test_vectors"

def fail(msg):
    sys.stderr.write(f'Error: {msg}\n')
    sys.exit(1)

def generate_testvectors(cipher):
    for lengths in cipher.test_input_lengths():
        for tv, d in inputgen.generate_testinputs(lengths):
            yield cipher.make_testvector(tv, d)

def write_tests(cipher, path):
    d = path / cipher.name()
    for v in cipher.variants():
        cipher.variant = v
        p = d / "{}.json".format(cipher.variant_name())
        print(f"Writing: {p}")
        hexjson.write_using_hex(p, generate_testvectors(cipher))

def check_testvector(cipher, tv, verbose):
    cipher.check_testvector(tv)
    if verbose:
        print(f"OK: {tv['description']}")

def check_tests(cipher, path, verbose):
    d = path / cipher.name()
    if not d.is_dir():
        fail(f"No test vectors for {cipher.name()} in {path}")
    for fn in sorted(d.iterdir()):
        print(f"======== {fn.name} ========")
        for tv in hexjson.iter_unhex(fn):
            check_testvector(cipher, tv, verbose)

def main():
    parser = argparse.ArgumentParser(description="""Write or check the JSON
    test vectors for Curupira-2, Marvin and LetterSoup.""")
    parser.add_argument('action', choices=['write', 'check'])
    parser.add_argument('--path', type=pathlib.Path, default=default_path,
                        help='test vector directory')
    parser.add_argument('--cipher', action='append',
                        help='only this cipher (may be repeated)')
    parser.add_argument('--verbose', action='store_true',
                        help='report every vector checked')
    args = parser.parse_args()

    ciphers = cipherlist.all_ciphers
    if args.cipher:
        ciphers = [c for c in ciphers if c.name() in args.cipher]
        if not ciphers:
            fail(f"Unknown cipher: {', '.join(args.cipher)}")
    for c in ciphers:
        if args.action == 'write':
            write_tests(c, args.path)
        else:
            check_tests(c, args.path, args.verbose)

if __name__ == "__main__":
    main()
