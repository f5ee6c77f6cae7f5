# Copyright 2018 Google LLC
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import Cryptodome.Util.strxor

BLOCK_BITS = 96
BLOCK_BYTES = BLOCK_BITS // 8

class CipherError(Exception):
    pass

class InvalidNonceLength(CipherError):
    def __init__(self, length):
        self.length = length
        super().__init__(f"Nonce of {length} bytes is longer than the {BLOCK_BYTES}-byte block")

class InvalidSequence(CipherError):
    pass

class UnsupportedBlockSize(CipherError):
    def __init__(self, bits):
        self.bits = bits
        super().__init__(f"Only {BLOCK_BITS}-bit block ciphers are supported, got {bits} bits")

class InvalidTagLength(CipherError):
    def __init__(self, bits):
        self.bits = bits
        super().__init__(f"Tag length must be a multiple of 8 in 8..{BLOCK_BITS} bits, got {bits}")

class AuthenticationFailure(CipherError):
    pass

def xor(a, b):
    return Cryptodome.Util.strxor.strxor(a, b)

def zero_pad(b):
    return bytes(b) + b'\0' * (BLOCK_BYTES - len(b))

def length_block(length):
    """Block holding the big-endian 32-bit length in its last four bytes."""
    return b'\0' * (BLOCK_BYTES - 4) + (length & 0xffffffff).to_bytes(4, byteorder='big')

def marker_block(tag_bits):
    check_tag_bits(tag_bits)
    return bytes([BLOCK_BITS - tag_bits, 0x80]) + b'\0' * (BLOCK_BYTES - 2)

def check_tag_bits(tag_bits):
    if tag_bits % 8 != 0 or not 8 <= tag_bits <= BLOCK_BITS:
        raise InvalidTagLength(tag_bits)

def check_block_cipher(bc):
    if bc.block_bits() != BLOCK_BITS:
        raise UnsupportedBlockSize(bc.block_bits())
    return bc

class Cipher(object):
    def name(self):
        return type(self).__name__

    @property
    def variant(self):
        return self._variant

    def _setup_variant(self):
        pass

    @variant.setter
    def variant(self, value):
        if value not in self.variants():
            raise Exception(f"Not a variant: {value}")
        self._variant = value
        self._setup_variant()

    def choose_variant(self, criterion):
        for v in self.variants():
            if criterion(v):
                self.variant = v
                return
        raise Exception("No variant matching criterion")

    def lengths(self):
        return self.variant["lengths"]

    def set_keylen(self, k):
        self.choose_variant(lambda v: v["lengths"]["key"] == k)

class Blockcipher(Cipher):
    def make_testvector(self, input, description):
        input = input.copy()
        if "plaintext" in input:
            pt = input["plaintext"]
            del input["plaintext"]
            ct = self.encrypt(pt, **input)
        else:
            ct = input["ciphertext"]
            del input["ciphertext"]
            pt = self.decrypt(ct, **input)
        return {
            "cipher": self.variant,
            "description": description,
            "input": input,
            "plaintext": pt,
            "ciphertext": ct,
        }

    def check_testvector(self, tv):
        self.variant = tv["cipher"]
        assert tv["ciphertext"] == self.encrypt(tv["plaintext"], **tv["input"])
        assert tv["plaintext"] == self.decrypt(tv["ciphertext"], **tv["input"])

    def test_input_lengths(self):
        v = dict(self.lengths())
        b = v['block']
        del v['block']
        for m in "plaintext", "ciphertext":
            yield {**v, m: b}

class Mac(Cipher):
    def make_testvector(self, input, description):
        return {
            "cipher": self.variant,
            "description": description,
            "input": input,
            "mac": self.mac(**input),
        }

    def check_testvector(self, tv):
        self.variant = tv["cipher"]
        assert tv["mac"] == self.mac(**tv["input"])

    def test_input_lengths(self):
        v = dict(self.lengths())
        del v["tag"]
        for mlen in 0, 1, 12, 13, 47:
            yield {**v, "message": mlen}

class Aead(Cipher):
    def make_testvector(self, input, description):
        input = input.copy()
        pt = input.pop("plaintext")
        ct, tag = self.encrypt(pt, **input)
        return {
            "cipher": self.variant,
            "description": description,
            "input": input,
            "plaintext": pt,
            "ciphertext": ct,
            "tag": tag,
        }

    def check_testvector(self, tv):
        self.variant = tv["cipher"]
        assert (tv["ciphertext"], tv["tag"]) == self.encrypt(tv["plaintext"], **tv["input"])
        assert tv["plaintext"] == self.decrypt(tv["ciphertext"], tv["tag"], **tv["input"])

    def test_input_lengths(self):
        v = dict(self.lengths())
        del v["tag"]
        for alen in 0, 5, 12:
            for mlen in 0, 1, 11, 12, 13, 36:
                yield {**v, "associated_data": alen, "plaintext": mlen}
