# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

# Offset sequence shared by Marvin and LetterSoup: a byte-oriented LFSR
# with w = 8, k1 = 11, k2 = 13, k3 = 16.

def update_offset(o):
    o0 = o[0]
    o[0:11] = o[1:12]
    o[9] ^= o0 ^ (o0 >> 3) ^ (o0 >> 5)
    o[10] ^= ((o0 << 5) ^ (o0 << 3)) & 0xff
    o[11] = o0

def offsets(seed, count):
    o = bytearray(seed)
    assert len(o) == 12
    for _ in range(count):
        update_offset(o)
        yield bytes(o)
