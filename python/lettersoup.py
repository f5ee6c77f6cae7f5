# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

"""LetterSoup authenticated encryption with associated data.

A session runs set_iv, then optionally update with the associated data,
then encrypt or decrypt, then get_tag. set_iv starts a new message and
forgets everything derived for the previous one. A LetterSoup object holds
per-message state and must not be shared between threads without a lock
around the whole sequence.

decrypt alone releases unauthenticated plaintext; decrypt_and_verify only
returns it once the tag has been checked. The tag length is fixed by the
receiver: a received tag of any other length is rejected outright.
"""

import hmac

import cipher
import curupira2
import marvin
import offset

class LetterSoup(object):
    def __init__(self, bc=None):
        self._cipher = None
        self._reset()
        if bc is not None:
            self.set_cipher(bc)

    def _reset(self):
        self._r = None
        self._a = None
        self._d = None
        self._l = None
        self._m_length = 0
        self._h_length = 0

    def set_cipher(self, bc):
        self._cipher = cipher.check_block_cipher(bc)
        self._reset()

    def set_key(self, key, key_bits=None):
        self._require_cipher().make_key(key, key_bits)
        self._reset()

    def _require_cipher(self):
        if self._cipher is None:
            raise cipher.InvalidSequence("LetterSoup: no block cipher set")
        return self._cipher

    def _require_iv(self):
        if self._r is None:
            raise cipher.InvalidSequence("LetterSoup: set_iv must come first")

    def set_iv(self, nonce):
        if len(nonce) > cipher.BLOCK_BYTES:
            raise cipher.InvalidNonceLength(len(nonce))
        bc = self._require_cipher()
        self._reset()
        n = bytes(nonce).rjust(cipher.BLOCK_BYTES, b'\0')
        self._r = cipher.xor(bc.encrypt_block(n), n)

    def update(self, a_data):
        self._require_iv()
        self._l = self._cipher.encrypt_block(bytes(cipher.BLOCK_BYTES))
        h = marvin.MarvinAccumulator(self._cipher)
        h.init(self._l)
        h.update(a_data)
        self._d = h.accumulator()
        self._h_length = len(a_data)

    def _crypt(self, data, encrypting):
        self._require_iv()
        bb = cipher.BLOCK_BYTES
        bc = self._cipher
        a = marvin.MarvinAccumulator(bc)
        a.init(self._r)
        o = bytearray(self._r)
        q, r = divmod(len(data), bb)
        result = []
        for i in range(0, q * bb, bb):
            block = bytes(data[i:i + bb])
            offset.update_offset(o)
            out = cipher.xor(bc.encrypt_block(bytes(o)), block)
            a.update_block(out if encrypting else block)
            result.append(out)
        acc = a.accumulator()
        if r:
            tail = bytes(data[q * bb:])
            offset.update_offset(o)
            out = cipher.xor(bc.encrypt_block(bytes(o))[:r], tail)
            # The short final block is authenticated through its plaintext
            acc = cipher.xor(acc, bc.sct(cipher.zero_pad(tail if encrypting else out)))
            result.append(out)
        self._a = acc
        self._m_length = len(data)
        return b''.join(result)

    def encrypt(self, m_data):
        return self._crypt(m_data, True)

    def decrypt(self, c_data):
        return self._crypt(c_data, False)

    def get_tag(self, tag_bits):
        if self._a is None:
            raise cipher.InvalidSequence("LetterSoup: get_tag before encrypt or decrypt")
        marker = cipher.marker_block(tag_bits)
        t = cipher.xor(cipher.xor(self._a, self._r), marker)
        t = cipher.xor(t, cipher.length_block(self._m_length))
        if self._l is not None:
            h = cipher.xor(cipher.xor(self._d, self._l), marker)
            h = cipher.xor(h, cipher.length_block(self._h_length))
            t = cipher.xor(t, self._cipher.sct(h))
        t = self._cipher.encrypt_block(t)
        return t[cipher.BLOCK_BYTES - tag_bits // 8:]

    def decrypt_and_verify(self, c_data, tag, tag_bits):
        cipher.check_tag_bits(tag_bits)
        if len(tag) != tag_bits // 8:
            raise cipher.AuthenticationFailure(
                f"LetterSoup: expected a {tag_bits // 8}-byte tag, got {len(tag)} bytes")
        m_data = self.decrypt(c_data)
        if not hmac.compare_digest(self.get_tag(tag_bits), tag):
            raise cipher.AuthenticationFailure("LetterSoup: tag mismatch")
        return m_data

class LetterSoupAead(cipher.Aead):
    def __init__(self):
        super().__init__()
        self._block = curupira2.Curupira2()
        self.choose_variant(lambda v: True)

    def variant_name(self):
        return "{}_{}".format(self.name(), self._block.variant_name())

    def variants(self):
        for bv in self._block.variants():
            yield {
                'cipher': 'LetterSoup',
                'blockcipher': bv,
                'lengths': {
                    'key': bv['lengths']['key'],
                    'nonce': 12,
                    'tag': 12
                }
            }

    def _setup_variant(self):
        self._block.variant = self.variant['blockcipher']

    def _session(self, key, nonce, associated_data):
        assert len(key) == self.lengths()['key']
        s = LetterSoup(self._block)
        s.set_key(key)
        s.set_iv(nonce)
        if associated_data is not None:
            s.update(associated_data)
        return s

    def encrypt(self, plaintext, key, nonce, associated_data=None):
        s = self._session(key, nonce, associated_data)
        ct = s.encrypt(plaintext)
        return ct, s.get_tag(8 * self.lengths()['tag'])

    def decrypt(self, ciphertext, tag, key, nonce, associated_data=None):
        s = self._session(key, nonce, associated_data)
        return s.decrypt_and_verify(ciphertext, tag, 8 * self.lengths()['tag'])
