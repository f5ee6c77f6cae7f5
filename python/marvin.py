# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

"""Marvin message authentication code.

Marvin folds every input block, masked with a fresh offset, through the
block cipher's SCT into a single 12-byte accumulator. The two ways of using
it are separate types:

* `MarvinAccumulator` is seeded by its caller and hands back the raw
  accumulator. LetterSoup uses it for both its ciphertext and its associated
  data, and does the finalization itself.
* `Marvin` is the standalone MAC: it derives its own seed from the constant
  `SEED_CONSTANT` and finalizes with the tag length, the message length and
  one block encryption.
"""

import cipher
import curupira2
import offset

SEED_CONSTANT = 0x2A

class _MarvinCore(object):
    def __init__(self, bc=None):
        self._cipher = None
        self._o = None
        if bc is not None:
            self.set_cipher(bc)

    def set_cipher(self, bc):
        self._cipher = cipher.check_block_cipher(bc)
        self._o = None

    def set_key(self, key, key_bits=None):
        self._require_cipher().make_key(key, key_bits)
        # The seed was derived under the old key
        self._o = None

    def _require_cipher(self):
        if self._cipher is None:
            raise cipher.InvalidSequence("Marvin: no block cipher set")
        return self._cipher

    def _seed(self, r):
        assert len(r) == cipher.BLOCK_BYTES
        self._o = bytearray(r)
        self._acc = bytes(cipher.BLOCK_BYTES)
        self._length = 0
        self._ended = False

    def _fold(self, block):
        offset.update_offset(self._o)
        self._acc = cipher.xor(self._acc, self._cipher.sct(cipher.xor(block, self._o)))

    def _require_open(self):
        if self._o is None:
            raise cipher.InvalidSequence("Marvin: update before init")
        if self._ended:
            raise cipher.InvalidSequence("Marvin: input already ended with a partial block")

    def update_block(self, block):
        self._require_open()
        assert len(block) == cipher.BLOCK_BYTES
        self._fold(block)
        self._length += cipher.BLOCK_BYTES

    def update(self, data):
        """Absorb data; only the last call may end in a partial block.

        A partial block is zero-padded and folded straight away, so once one
        has been seen any further input raises InvalidSequence.
        """
        self._require_open()
        bb = cipher.BLOCK_BYTES
        for i in range(0, len(data), bb):
            self._fold(cipher.zero_pad(data[i:i + bb]))
        self._length += len(data)
        if len(data) % bb:
            self._ended = True

class MarvinAccumulator(_MarvinCore):
    def init(self, seed):
        self._require_cipher()
        self._seed(seed)

    def accumulator(self):
        if self._o is None:
            raise cipher.InvalidSequence("Marvin: accumulator before init")
        return self._acc

class Marvin(_MarvinCore):
    def init(self):
        c = b'\0' * (cipher.BLOCK_BYTES - 1) + bytes([SEED_CONSTANT])
        self._r = cipher.xor(self._require_cipher().encrypt_block(c), c)
        self._seed(self._r)

    def get_tag(self, tag_bits):
        if self._o is None:
            raise cipher.InvalidSequence("Marvin: get_tag before init")
        a0 = cipher.xor(self._r, cipher.marker_block(tag_bits))
        a0 = cipher.xor(a0, cipher.length_block(self._length))
        t = self._cipher.encrypt_block(cipher.xor(self._acc, a0))
        return t[cipher.BLOCK_BYTES - tag_bits // 8:]

class MarvinMac(cipher.Mac):
    def __init__(self):
        super().__init__()
        self._block = curupira2.Curupira2()
        self.choose_variant(lambda v: True)

    def variant_name(self):
        return "{}_{}".format(self.name(), self._block.variant_name())

    def variants(self):
        for bv in self._block.variants():
            yield {
                'cipher': 'Marvin',
                'blockcipher': bv,
                'lengths': {
                    'key': bv['lengths']['key'],
                    'tag': 12
                }
            }

    def _setup_variant(self):
        self._block.variant = self.variant['blockcipher']

    def mac(self, message, key):
        assert len(key) == self.lengths()['key']
        m = Marvin(self._block)
        m.set_key(key)
        m.init()
        m.update(message)
        return m.get_tag(8 * self.lengths()['tag'])
