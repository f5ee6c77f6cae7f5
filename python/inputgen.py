# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

# Deterministic inputs for test vectors. Every generator takes a dict of
# input name -> length in bytes and yields (inputs, description) pairs.

import random

example_count = 6

def oneset(l, b):
    l = bytearray(l)
    l[b >> 3] |= 0x80 >> (b & 7)
    return bytes(l)

def flipped_bits(b):
    for i in range(len(b) * 8):
        yield i, bytes(x ^ y for x, y in zip(b, oneset(len(b), i)))

def rangeset(l, s):
    return bytes((b & 0xff) for b in range(s, s + l))

def randbytes(l, r):
    return bytes(r.randrange(0x100) for _ in range(l))

def set_containing(hi, c):
    r = random.Random(repr((hi, c)))
    s = {0, hi - 1}
    while len(s) < min(c, hi):
        s.add(r.randrange(hi))
    return sorted(s)

def _zeros(lengths):
    return {k: bytes(v) for k, v in lengths.items()}

def generate_zeros(lengths):
    yield _zeros(lengths), "All zero"

def generate_onebit(lengths):
    for k, v in lengths.items():
        if v == 0:
            continue
        for i in set_containing(v * 8, example_count):
            d = _zeros(lengths)
            d[k] = oneset(v, i)
            yield d, f"Set bit {i} of {k}"

def generate_ranges(lengths):
    for k, v in lengths.items():
        if v == 0:
            continue
        d = _zeros(lengths)
        d[k] = rangeset(v, 1)
        yield d, f"Incrementing bytes for {k}"

def generate_random(lengths):
    for i in range(1, example_count + 1):
        r = random.Random(repr((sorted(lengths.items()), i)))
        yield {k: randbytes(v, r) for k, v in lengths.items()}, f"Random ({i:2})"

def generate_testinputs(lengths):
    yield from generate_zeros(lengths)
    yield from generate_onebit(lengths)
    yield from generate_ranges(lengths)
    yield from generate_random(lengths)
